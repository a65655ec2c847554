from __future__ import annotations

from fastapi import APIRouter, File, UploadFile

from app.core.config import settings
from app.core.errors import ValidationError
from app.schemas.envelope import ApiResponse
from app.schemas.image_upload import UploadedImage
from app.services.images import SUPPORTED_IMAGE_CONTENT_TYPES, resize_image, upload_image

router = APIRouter(prefix="/image-upload", tags=["image-upload"])


@router.post("/uploadimage", response_model=ApiResponse[UploadedImage])
async def upload(myimage: UploadFile | None = File(default=None)) -> ApiResponse[UploadedImage]:
    if myimage is None:
        raise ValidationError("No image file provided")

    content_type = (myimage.content_type or "").lower()
    if content_type not in SUPPORTED_IMAGE_CONTENT_TYPES:
        raise ValidationError("Unsupported image format. Use jpeg, png, webp or gif.")

    image_bytes = await myimage.read()
    if not image_bytes:
        raise ValidationError("No image file provided")
    if len(image_bytes) > settings.IMAGE_MAX_BYTES:
        raise ValidationError(f"Image is too large (max {settings.IMAGE_MAX_BYTES} bytes)")

    resized_bytes, resized_type = resize_image(image_bytes)
    image_url = upload_image(resized_bytes, resized_type)
    return ApiResponse(message="Image uploaded successfully", data=UploadedImage(image_url=image_url))
