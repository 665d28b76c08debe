"""
Image utility functions for steganography operations
"""

from io import BytesIO
from pathlib import Path
from typing import Optional, Union

import httpx
from PIL import Image


# Encoders that write all four 8-bit channels back unchanged
LOSSLESS_RGBA_FORMATS = {"PNG", "TIFF", "TGA"}


def load_image_from_input(file: Optional[BytesIO] = None, url: Optional[str] = None) -> Image.Image:
    """
    Load an image from either a file object or URL

    Args:
        file: BytesIO object containing image data
        url: URL to fetch image from

    Returns:
        PIL Image object

    Raises:
        ValueError: If neither file nor url is provided
    """
    if file is not None:
        return Image.open(file)
    if url is not None:
        with httpx.Client(timeout=30) as client:
            resp = client.get(url)
            resp.raise_for_status()
            return Image.open(BytesIO(resp.content))
    raise ValueError("Provide file or url")


def ensure_rgba_image(image: Image.Image) -> Image.Image:
    """
    Ensure image is in RGBA mode so every pixel has four channels

    Args:
        image: Input PIL Image

    Returns:
        Image converted to RGBA mode
    """
    if image.mode != "RGBA":
        return image.convert("RGBA")
    return image


def resolve_save_format(path: Union[str, Path], fmt: Optional[str] = None) -> str:
    """
    Work out which Pillow encoder a save will use

    Args:
        path: Destination path
        fmt: Explicit format name, overrides the suffix

    Returns:
        Upper-case Pillow format name

    Raises:
        ValueError: If no format can be determined from the path
    """
    if fmt:
        return fmt.upper()
    suffix = Path(path).suffix.lower()
    registered = Image.registered_extensions()
    if suffix not in registered:
        raise ValueError(f"Cannot determine image format from extension: {suffix or str(path)}")
    return registered[suffix]


def is_lossless_format(fmt: str) -> bool:
    return fmt.upper() in LOSSLESS_RGBA_FORMATS
