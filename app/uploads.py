# =============================================================================
# app/uploads.py - Multipart Upload Helpers
# =============================================================================
# Turns FastAPI UploadFile objects into ImageUpload values for the service
# layer, which never sees FastAPI types.
# =============================================================================

from fastapi import UploadFile

from core.services.storage_service import ImageUpload


async def read_upload(file: UploadFile | None) -> ImageUpload | None:
    """Read an uploaded file into memory. Empty file fields count as absent."""
    if file is None or not file.filename:
        return None
    content = await file.read()
    return ImageUpload(
        filename=file.filename,
        content=content,
        content_type=file.content_type,
    )


async def read_uploads(files: list[UploadFile] | None) -> list[ImageUpload]:
    """Read every uploaded file, skipping empty fields."""
    images = []
    for file in files or []:
        image = await read_upload(file)
        if image is not None:
            images.append(image)
    return images
