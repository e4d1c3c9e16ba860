# utils/image_ingestion.py
from fastapi import UploadFile
from PIL import Image, UnidentifiedImageError
from io import BytesIO
from typing import List, Optional
import asyncio
import base64

FALLBACK_MIME = "application/octet-stream"


def detect_image_mime(data: bytes) -> Optional[str]:
    try:
        with Image.open(BytesIO(data)) as image:
            return Image.MIME.get(image.format)
    except (UnidentifiedImageError, OSError):
        return None


def to_data_url(data: bytes, content_type: Optional[str] = None) -> str:
    """
    Encode raw bytes as a data URL. The declared content type wins; when it is
    missing or generic, the type Pillow detects is used.
    """
    mime = content_type
    if not mime or mime == FALLBACK_MIME:
        mime = detect_image_mime(data) or FALLBACK_MIME
    return f"data:{mime};base64,{base64.b64encode(data).decode()}"


async def read_upload_as_data_url(upload: UploadFile) -> str:
    data = await upload.read()
    return to_data_url(data, upload.content_type)


async def read_uploads_as_data_urls(files: List[UploadFile]) -> List[str]:
    """All files of one selection, in selection order; no size or type checks."""
    return list(await asyncio.gather(*(read_upload_as_data_url(f) for f in files)))
