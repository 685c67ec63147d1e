"""
Upload route: validates one image, stores it in Cloudinary and returns the watermarked URL.
"""
from fastapi import APIRouter, HTTPException, Request, status
from starlette.datastructures import UploadFile
import logging

from portfolio.config import settings
from portfolio.schemas import UploadResponse
from portfolio.exceptions import ValidationError
from portfolio.services.cloudinary_service import upload_image, get_watermarked_url

logger = logging.getLogger(__name__)

router = APIRouter()


async def validate_upload(file) -> int:
    """
    Check presence, size and declared type, in that order.

    Returns:
        int: File size in bytes

    Raises:
        ValidationError: On the first failed check
    """
    if not isinstance(file, UploadFile) or not file.filename:
        raise ValidationError("No file provided")

    size = file.size
    if size is None:
        size = len(await file.read())
        await file.seek(0)

    max_mb = settings.MAX_UPLOAD_SIZE // (1024 * 1024)
    if size > settings.MAX_UPLOAD_SIZE:
        raise ValidationError(
            f"File too large. Maximum size is {max_mb}MB. "
            "The image will be automatically optimized after upload."
        )

    if not (file.content_type or "").startswith("image/"):
        raise ValidationError("File must be an image")

    return size


@router.post("/upload", response_model=UploadResponse)
async def upload(request: Request):
    """
    Upload an image and return its watermarked URL.

    Expects multipart form data with a single `file` field. The stored asset is
    kept even if the caller never saves the returned URL.

    Returns:
        UploadResponse: {"success": true, "url": "<watermarked url>"}

    Raises:
        HTTPException: 400 on validation failure, 500 if Cloudinary fails
    """
    form = await request.form()
    file = form.get("file")

    try:
        size = await validate_upload(file)
    except ValidationError as e:
        logger.warning(f"Rejected upload: {e.message}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"error": e.message}
        )

    try:
        logger.info(f"Uploading file: {file.filename} Size: {size} Type: {file.content_type}")
        content = await file.read()

        result = await upload_image(content, file.content_type)
        watermarked_url = get_watermarked_url(result["public_id"])

        logger.info(f"Generated watermarked URL: {watermarked_url}")

        return UploadResponse(success=True, url=watermarked_url)

    except Exception as e:
        logger.error(f"Upload error: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": "Upload failed"}
        )
