"""Application configuration loaded from environment variables"""
import os
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# Cloudinary credentials
CLOUDINARY_CLOUD_NAME = os.getenv("CLOUDINARY_CLOUD_NAME")
CLOUDINARY_API_KEY = os.getenv("CLOUDINARY_API_KEY")
CLOUDINARY_API_SECRET = os.getenv("CLOUDINARY_API_SECRET")

# Frontend allowed to call the API (CORS)
FRONTEND_URL = os.getenv("FRONTEND_URL", "https://selfie-swap.vercel.app")
ALLOWED_ORIGINS = ["http://localhost:3000", FRONTEND_URL]

# Printful mockup generator
PRINTFUL_API_KEY = os.getenv("PRINTFUL_API_KEY")
PRINTFUL_API_URL = os.getenv("PRINTFUL_API_URL", "https://api.printful.com")

# "local" composites with Pillow, "printful" delegates rendering to Printful
MOCKUP_PROVIDER = os.getenv("MOCKUP_PROVIDER", "local").lower()

# At least one product must be able to run
MAX_CONCURRENT_PRODUCTS = max(1, int(os.getenv("MAX_CONCURRENT_PRODUCTS", "5")))
FETCH_TIMEOUT = float(os.getenv("FETCH_TIMEOUT", "30"))
POLL_INTERVAL = float(os.getenv("POLL_INTERVAL", "2.0"))  # seconds between task status checks
MAX_POLL_ATTEMPTS = int(os.getenv("MAX_POLL_ATTEMPTS", "10"))

# Uploads
MAX_UPLOAD_SIZE = 10 * 1024 * 1024  # 10MB
ALLOWED_MIME_TYPES = ("image/jpeg", "image/png", "image/gif")

PUBLIC_DIR = os.getenv("PUBLIC_DIR", str(Path(__file__).parent / "public"))
PORT = int(os.getenv("PORT", "5000"))
