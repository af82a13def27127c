# utils/cloudinary_helper.py - Avatar uploads for data:image payloads
import cloudinary.uploader
from cloudinary.exceptions import Error as CloudinaryError
from config import CLOUDINARY_ENABLED
from utils.errors import Internal, ValidationError
import logging

logger = logging.getLogger(__name__)


def is_data_image(value: str) -> bool:
    return value.startswith('data:image/')


def upload_base64_image(base64_string: str, folder: str = "avatars") -> str:
    """
    Upload a base64 encoded image to Cloudinary

    Args:
        base64_string: Base64 encoded image string (with or without data:image prefix)
        folder: Cloudinary folder to store the image

    Returns:
        str: Cloudinary image URL
    """
    if not CLOUDINARY_ENABLED:
        raise ValidationError("Image upload is not configured; send avatarUrl as an http(s) URL")

    try:
        # Keep the declared mime type when a data:image prefix is present
        if is_data_image(base64_string):
            data_uri = base64_string
        else:
            data_uri = f"data:image/png;base64,{base64_string}"

        result = cloudinary.uploader.upload(
            data_uri,
            folder=folder,
            resource_type="image",
            quality="auto",
            fetch_format="auto"
        )

        return result['secure_url']

    except CloudinaryError as e:
        logger.error(f"Cloudinary upload error: {e}")
        raise Internal("Image upload failed")
