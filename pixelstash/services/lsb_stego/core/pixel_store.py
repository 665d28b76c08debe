"""
In-memory RGBA pixel buffer backed by Pillow for file I/O
"""

from __future__ import annotations

import logging
from io import BytesIO
from pathlib import Path
from typing import Optional, Tuple, Union

import numpy as np
from PIL import Image, UnidentifiedImageError

from .steganography import calculate_capacity, embed_payload, recover_envelope, recover_payload
from ..utils.image_utils import ensure_rgba_image, is_lossless_format, resolve_save_format
from ..utils.validation import BytesLike, validate_pixel_buffer


logger = logging.getLogger(__name__)


class PixelStoreError(Exception):
    """Raised when an image cannot be read from or written to disk"""

    def __init__(self, message: str, path: Optional[Union[str, Path]] = None):
        super().__init__(message)
        self.message = message
        self.path = Path(path) if path is not None else None


class PixelStore:
    """
    Rectangular buffer of 8-bit RGBA pixels

    Attributes:
        pixels: numpy array of shape (height, width, 4) and dtype uint8

    Example:
        >>> store = PixelStore.open("cover.png")
        >>> store.embed(b"secret")
        >>> store.save("stego.png")
        >>> PixelStore.open("stego.png").recover()
        b'secret'
    """

    def __init__(self, pixels: np.ndarray):
        validate_pixel_buffer(pixels)
        if pixels.ndim != 3:
            raise ValueError(f"Pixel store needs a (height, width, 4) array, got shape {pixels.shape}")
        self._pixels = np.ascontiguousarray(pixels)

    @classmethod
    def from_image(cls, image: Image.Image) -> "PixelStore":
        """Copy a Pillow image into a new store, converting it to RGBA"""
        return cls(np.array(ensure_rgba_image(image), dtype=np.uint8))

    @classmethod
    def open(cls, path: Union[str, Path]) -> "PixelStore":
        """
        Decode an image file into a pixel store

        Args:
            path: Image file to read

        Returns:
            PixelStore holding the decoded RGBA pixels

        Raises:
            PixelStoreError: If the file is missing or cannot be decoded
        """
        try:
            with Image.open(path) as image:
                store = cls.from_image(image)
        except (OSError, UnidentifiedImageError) as exc:
            raise PixelStoreError(f"Failed to open image {path}: {exc}", path) from exc
        logger.debug(f"Opened {path} ({store.width}x{store.height})")
        return store

    @property
    def pixels(self) -> np.ndarray:
        return self._pixels

    @property
    def width(self) -> int:
        return self._pixels.shape[1]

    @property
    def height(self) -> int:
        return self._pixels.shape[0]

    @property
    def pixel_count(self) -> int:
        return self.width * self.height

    def to_image(self) -> Image.Image:
        return Image.fromarray(self._pixels)

    def save(self, path: Union[str, Path], format: Optional[str] = None) -> None:
        """
        Encode the pixels and write them to a file

        The image is encoded in memory and decoded again first. Nothing is
        written unless every channel of every pixel comes back unchanged.

        Args:
            path: Destination file
            format: Optional Pillow format name; inferred from the suffix otherwise

        Raises:
            PixelStoreError: If the format cannot hold embedded data, is
                unknown, or writing fails
        """
        try:
            fmt = resolve_save_format(path, format)
        except ValueError as exc:
            raise PixelStoreError(str(exc), path) from exc

        if not is_lossless_format(fmt):
            raise PixelStoreError(f"{fmt} does not keep every RGBA bit and would destroy embedded data", path)

        buffer = BytesIO()
        try:
            self.to_image().save(buffer, format=fmt)
            with Image.open(BytesIO(buffer.getvalue())) as decoded:
                round_trip = np.array(ensure_rgba_image(decoded), dtype=np.uint8)
        except (OSError, KeyError, ValueError) as exc:
            raise PixelStoreError(f"Failed to encode image {path}: {exc}", path) from exc

        if not np.array_equal(round_trip, self._pixels):
            raise PixelStoreError(f"{fmt} did not reproduce the pixels exactly and would destroy embedded data", path)

        try:
            Path(path).write_bytes(buffer.getvalue())
        except OSError as exc:
            raise PixelStoreError(f"Failed to save image {path}: {exc}", path) from exc
        logger.debug(f"Saved {self.width}x{self.height} image to {path} as {fmt}")

    def capacity(self) -> int:
        return calculate_capacity(self._pixels)

    def embed(self, payload: BytesLike) -> None:
        embed_payload(self._pixels, payload)

    def recover(self) -> bytes:
        return recover_payload(self._pixels)

    def recover_with_checksum(self) -> Tuple[bytes, int]:
        return recover_envelope(self._pixels)

    def __repr__(self) -> str:
        return f"PixelStore(width={self.width}, height={self.height})"
