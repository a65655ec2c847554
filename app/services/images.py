from __future__ import annotations

import base64
import hashlib
import json
import logging
import socket
import time
from io import BytesIO
from typing import Any
from urllib.error import HTTPError, URLError
from urllib.parse import urlencode
from urllib.request import Request, urlopen

from PIL import Image, UnidentifiedImageError

from app.core.config import settings
from app.core.errors import UpstreamError, ValidationError

logger = logging.getLogger(__name__)

SUPPORTED_IMAGE_CONTENT_TYPES = {
    "image/jpeg",
    "image/jpg",
    "image/png",
    "image/webp",
    "image/gif",
}
_FORMAT_CONTENT_TYPES = {
    "JPEG": "image/jpeg",
    "PNG": "image/png",
    "WEBP": "image/webp",
    "GIF": "image/gif",
}


def resize_image(image_bytes: bytes, max_width: int | None = None) -> tuple[bytes, str]:
    """
    Shrink to ``max_width`` keeping the aspect ratio. Narrower images are
    re-encoded unchanged in size. Returns the encoded bytes and content type.
    """
    if max_width is None:
        max_width = settings.IMAGE_MAX_WIDTH

    try:
        with Image.open(BytesIO(image_bytes)) as image:
            image_format = image.format if image.format in _FORMAT_CONTENT_TYPES else "PNG"
            if image.width > max_width:
                height = max(1, round(image.height * max_width / image.width))
                image = image.resize((max_width, height), Image.Resampling.LANCZOS)
            output = BytesIO()
            image.save(output, format=image_format)
    except (UnidentifiedImageError, OSError) as exc:
        raise ValidationError("Invalid image file") from exc

    return output.getvalue(), _FORMAT_CONTENT_TYPES[image_format]


def _sign(params: dict[str, str]) -> str:
    to_sign = "&".join(f"{key}={params[key]}" for key in sorted(params))
    return hashlib.sha1(f"{to_sign}{settings.CLOUDINARY_API_SECRET}".encode("utf-8")).hexdigest()


def _assert_credentials() -> None:
    if settings.CLOUDINARY_CLOUD_NAME and settings.CLOUDINARY_API_KEY and settings.CLOUDINARY_API_SECRET:
        return
    raise UpstreamError("Image storage is not configured")


def upload_image(image_bytes: bytes, content_type: str) -> str:
    """
    Upload to Cloudinary as a signed data-URI upload and return the public URL.
    """
    _assert_credentials()

    params = {"timestamp": str(int(time.time()))}
    form: dict[str, Any] = {
        **params,
        "file": f"data:{content_type};base64,{base64.b64encode(image_bytes).decode('ascii')}",
        "api_key": settings.CLOUDINARY_API_KEY,
        "signature": _sign(params),
    }
    base_url = settings.CLOUDINARY_BASE_URL.rstrip("/")
    request = Request(
        url=f"{base_url}/{settings.CLOUDINARY_CLOUD_NAME}/image/upload",
        data=urlencode(form).encode("utf-8"),
        headers={
            "Accept": "application/json",
            "Content-Type": "application/x-www-form-urlencoded",
        },
        method="POST",
    )

    try:
        with urlopen(request, timeout=settings.CLOUDINARY_TIMEOUT_SECONDS) as response:
            response_bytes = response.read()
    except HTTPError as exc:
        logger.error("Cloudinary upload rejected with status %s", exc.code)
        raise UpstreamError("Error uploading image to Cloudinary") from exc
    except (TimeoutError, socket.timeout) as exc:
        logger.error("Cloudinary upload timed out")
        raise UpstreamError("Image upload timed out") from exc
    except URLError as exc:
        logger.error("Cannot reach Cloudinary: %s", exc.reason)
        raise UpstreamError("Cannot reach image storage") from exc

    try:
        payload = json.loads(response_bytes.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise UpstreamError("Image storage returned invalid JSON") from exc

    url = (payload.get("secure_url") or payload.get("url")) if isinstance(payload, dict) else None
    if not isinstance(url, str) or not url:
        raise UpstreamError("Image storage returned no URL")

    logger.info("Uploaded image to %s", url)
    return url
