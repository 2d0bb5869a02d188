from fastapi import FastAPI, File, Request, UploadFile, Depends
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.staticfiles import StaticFiles
from typing import Optional
from pathlib import Path
import asyncio
import uvicorn
import logging
import uuid
import httpx
import cloudinary
from config import (
    ALLOWED_ORIGINS,
    CLOUDINARY_API_KEY,
    CLOUDINARY_API_SECRET,
    CLOUDINARY_CLOUD_NAME,
    FETCH_TIMEOUT,
    MOCKUP_PROVIDER,
    PORT,
    PUBLIC_DIR,
)
from errors import InvalidRequest, MockupError, StorageError
from schemas import GenerateMockupsRequest, UploadResultRequest
from services.cloudinary_service import upload_to_cloudinary
from services.image_service import fetch_image_bytes
from services.mockup_service import generate_mockups
from services.printful_service import PrintfulClient, check_printful_config, generate_printful_mockups
from services.upload_service import read_image_upload

# Setup logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Selfie Swap Mockup API")

# Requests without an Origin header (curl, mobile apps) are not affected by CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)


@app.middleware("http")
async def reject_disallowed_origins(request: Request, call_next):
    """Refuse cross-origin callers outside ALLOWED_ORIGINS before any route runs"""
    origin = request.headers.get("origin")
    if origin is not None and origin not in ALLOWED_ORIGINS:
        logger.warning(f"Rejected {request.method} {request.url.path} from origin {origin}")
        return JSONResponse(
            status_code=403,
            content={"message": f"The CORS policy for this site does not allow access from the specified Origin: {origin}"}
        )
    return await call_next(request)


# Configure Cloudinary
cloudinary.config(
    cloud_name=CLOUDINARY_CLOUD_NAME,
    api_key=CLOUDINARY_API_KEY,
    api_secret=CLOUDINARY_API_SECRET
)

# Warn at startup when Printful mode has no API key
check_printful_config()


async def get_http_client():
    """One HTTP client per request, shared by all fetches and provider calls"""
    async with httpx.AsyncClient(timeout=FETCH_TIMEOUT, follow_redirects=True) as client:
        yield client


async def _store(data: bytes, folder: str, error_message: str) -> str:
    try:
        return await upload_to_cloudinary(data, folder, str(uuid.uuid4()))
    except StorageError as e:
        raise StorageError(error_message) from e


@app.post("/upload")
async def upload_images(
    target_image: Optional[UploadFile] = File(None, alias="targetImage"),
    swap_image: Optional[UploadFile] = File(None, alias="swapImage"),
):
    """Store both the target photo and the swap image"""
    if target_image is None or swap_image is None:
        raise InvalidRequest("Both target and swap images must be uploaded.")

    # Validate both before anything is written to storage
    target_bytes = await read_image_upload(target_image, "Target image")
    swap_bytes = await read_image_upload(swap_image, "Swap image")

    target_image_url, swap_image_url = await asyncio.gather(
        _store(target_bytes, "target_images", "Error uploading images to Cloudinary."),
        _store(swap_bytes, "swap_images", "Error uploading images to Cloudinary."),
    )

    return {
        "message": "Images uploaded successfully!",
        "targetImageUrl": target_image_url,
        "swapImageUrl": swap_image_url
    }


@app.post("/uploadSwap")
async def upload_swap(swap_image: Optional[UploadFile] = File(None, alias="swapImage")):
    swap_bytes = await read_image_upload(swap_image, "Swap image")
    swap_image_url = await _store(swap_bytes, "swap_images", "Error uploading swap image to Cloudinary.")

    return {
        "message": "Swap image uploaded successfully!",
        "swapImageUrl": swap_image_url
    }


@app.post("/uploadResult")
async def upload_result(request: UploadResultRequest, client: httpx.AsyncClient = Depends(get_http_client)):
    """Copy a result image from an external URL into our storage"""
    if not request.result_url:
        raise InvalidRequest("Result URL must be provided.")

    data = await fetch_image_bytes(request.result_url, client)
    result_image_url = await _store(data, "result_images", "Error uploading result image to Cloudinary.")

    return {
        "message": "Result image uploaded successfully!",
        "resultImageUrl": result_image_url
    }


@app.post("/generateMockups")
async def generate_mockups_endpoint(request: GenerateMockupsRequest, client: httpx.AsyncClient = Depends(get_http_client)):
    product_count = len(request.products) if request.products else 0
    logger.info(f"Generating mockups for {product_count} products via {MOCKUP_PROVIDER}")

    if MOCKUP_PROVIDER == "printful":
        mockups = await generate_printful_mockups(request.result_image_url, request.products, PrintfulClient(client))
    else:
        mockups = await generate_mockups(request.result_image_url, request.products, client)

    return {
        "message": "Mockups generated successfully!",
        "mockupUrls": [mockup.model_dump(by_alias=True) for mockup in mockups]
    }


@app.exception_handler(MockupError)
async def mockup_error_handler(request: Request, exc: MockupError):
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message})


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=400,
        content={"message": "Invalid request body.", "detail": jsonable_encoder(exc.errors())}
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled error on {request.method} {request.url.path}", exc_info=exc)
    return JSONResponse(status_code=500, content={"message": "An unexpected error occurred."})


# Static pages; mounted last so the API routes take precedence
if Path(PUBLIC_DIR).is_dir():
    app.mount("/", StaticFiles(directory=PUBLIC_DIR, html=True), name="public")


if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=PORT)
