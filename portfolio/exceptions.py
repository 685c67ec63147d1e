"""
Error taxonomy shared by the upload endpoint, the content store and the admin console.
"""


class GalleryError(Exception):
    """Base class for failures surfaced to the user."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(GalleryError):
    """Missing required field, wrong file type or oversize file. Never retried."""


class UpstreamServiceError(GalleryError):
    """Cloudinary or database call failed. Logged, surfaced, never retried."""
