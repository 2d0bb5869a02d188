"""Pydantic models for request/response"""
from pydantic import BaseModel, ConfigDict, Field
from typing import Any, List, Optional


class ProductRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    product_id: Any = Field(..., alias="id", description="Caller identifier, echoed back unchanged")
    name: str = Field(..., description="Product name, e.g. T-Shirt or Mug")
    base_image_url: Optional[str] = Field(None, alias="baseImageUrl", description="Product template image URL")


class GenerateMockupsRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    # Both optional here so a missing field is reported with the API's own message.
    # Entries are validated one by one later; a malformed entry skips only that product.
    result_image_url: Optional[str] = Field(None, alias="resultImageUrl")
    products: Optional[List[Any]] = None


class UploadResultRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    result_url: Optional[str] = Field(None, alias="resultUrl")


class MockupResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    product_id: Any = Field(..., alias="productId")
    product_name: str = Field(..., alias="productName")
    mockup_image_url: str = Field(..., alias="mockupImageUrl")
