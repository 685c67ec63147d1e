"""
Cloudinary service for image upload and watermarked URL generation.
Uploads are optimized at upload time; watermarks are applied as URL transformations.
"""
import asyncio
import base64
import cloudinary
import cloudinary.uploader
from cloudinary.exceptions import Error as CloudinaryError
from portfolio.config import settings, SITE_OWNER
from portfolio.exceptions import UpstreamServiceError
import logging
from typing import Dict, Any, List

logger = logging.getLogger(__name__)

# Configure Cloudinary with credentials from settings
cloudinary.config(
    cloud_name=settings.CLOUDINARY_CLOUD_NAME,
    api_key=settings.CLOUDINARY_API_KEY,
    api_secret=settings.CLOUDINARY_API_SECRET,
    secure=True  # Always use HTTPS for secure URLs
)

# Upload-time transform: bound dimensions, let Cloudinary pick the compression
UPLOAD_MAX_DIMENSION = 2500
UPLOAD_QUALITY = "auto:good"

# Watermark policy
WATERMARK_TEXT = SITE_OWNER
WATERMARK_FONT_FAMILY = "Arial"
WATERMARK_FONT_SIZE = 60
WATERMARK_FONT_WEIGHT = "bold"
WATERMARK_COLOR = "white"
WATERMARK_OPACITY = 50
WATERMARK_ANGLE = -90  # Vertical, reading bottom to top
WATERMARK_PLACEMENTS = (
    {"gravity": "west", "x": 100},
    {"gravity": "center"},
)


def to_data_uri(content: bytes, content_type: str) -> str:
    """Encode raw file bytes as a base64 data URI accepted by the uploader."""
    encoded = base64.b64encode(content).decode("ascii")
    return f"data:{content_type};base64,{encoded}"


async def upload_image(
    content: bytes,
    content_type: str,
    folder: str = None,
) -> Dict[str, Any]:
    """
    Upload image bytes to Cloudinary with the upload-time transform.

    Args:
        content: Raw image bytes
        content_type: Declared MIME type of the image (e.g. image/jpeg)
        folder: Cloudinary folder path (default: settings.CLOUDINARY_UPLOAD_FOLDER)

    Returns:
        dict: Upload result containing:
            - url: Secure HTTPS URL of the stored (unwatermarked) asset
            - public_id: Cloudinary public ID
            - format, width, height, bytes: as reported by Cloudinary

    Raises:
        UpstreamServiceError: If Cloudinary rejects the upload
    """
    folder = folder or settings.CLOUDINARY_UPLOAD_FOLDER

    try:
        # The SDK call blocks; keep it off the event loop
        result = await asyncio.to_thread(
            cloudinary.uploader.upload,
            to_data_uri(content, content_type),
            folder=folder,
            quality=UPLOAD_QUALITY,
            width=UPLOAD_MAX_DIMENSION,
            height=UPLOAD_MAX_DIMENSION,
            crop="limit"  # Limit max dimensions, maintain aspect ratio
        )
    except CloudinaryError as e:
        logger.error(f"Cloudinary upload failed: {str(e)}", exc_info=True)
        raise UpstreamServiceError(f"Cloudinary upload failed: {str(e)}") from e

    logger.info(f"Successfully uploaded image: {result['public_id']}")

    return {
        "url": result.get("secure_url"),
        "public_id": result["public_id"],
        "format": result.get("format"),
        "width": result.get("width"),
        "height": result.get("height"),
        "bytes": result.get("bytes")
    }


def watermark_transformation() -> List[Dict[str, Any]]:
    """
    Build the overlay chain for the watermark policy, one text layer per placement.
    """
    transformation = []
    for placement in WATERMARK_PLACEMENTS:
        layer = {
            "overlay": {
                "font_family": WATERMARK_FONT_FAMILY,
                "font_size": WATERMARK_FONT_SIZE,
                "font_weight": WATERMARK_FONT_WEIGHT,
                "text": WATERMARK_TEXT,
            },
            "color": WATERMARK_COLOR,
            "opacity": WATERMARK_OPACITY,
            "angle": WATERMARK_ANGLE,
        }
        layer.update(placement)
        transformation.append(layer)
    return transformation


def get_watermarked_url(public_id: str) -> str:
    """
    Generate the watermarked delivery URL for a stored asset.
    Pure URL templating; no request is made to Cloudinary.

    Args:
        public_id: Cloudinary public ID returned by upload_image

    Returns:
        str: Secure URL with the watermark overlays applied
    """
    return cloudinary.CloudinaryImage(public_id).build_url(
        transformation=watermark_transformation(),
        secure=True
    )


def validate_cloudinary_config() -> bool:
    """
    Validate that Cloudinary is properly configured.

    Returns:
        bool: True if Cloudinary is configured, False otherwise
    """
    if not settings.CLOUDINARY_CLOUD_NAME:
        logger.warning("CLOUDINARY_CLOUD_NAME not configured")
        return False
    if not settings.CLOUDINARY_API_KEY:
        logger.warning("CLOUDINARY_API_KEY not configured")
        return False
    if not settings.CLOUDINARY_API_SECRET:
        logger.warning("CLOUDINARY_API_SECRET not configured")
        return False

    logger.info("Cloudinary configuration validated successfully")
    return True
