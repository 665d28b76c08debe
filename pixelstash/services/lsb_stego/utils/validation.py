"""
Validation utilities for steganography operations
"""

from typing import Union

import numpy as np


CHANNELS = 4

BytesLike = Union[bytes, bytearray, memoryview]


def validate_pixel_buffer(buffer: np.ndarray, writable: bool = False) -> None:
    """
    Validate that a pixel buffer can carry an envelope

    Args:
        buffer: Array of shape (height, width, 4) or (pixels, 4), dtype uint8
        writable: Whether the buffer will be modified in place

    Raises:
        TypeError: If buffer is not a uint8 numpy array
        ValueError: If the layout is not 4-channel, or it cannot be written in place
    """
    if not isinstance(buffer, np.ndarray):
        raise TypeError(f"Pixel buffer must be a numpy array, got {type(buffer).__name__}")
    if buffer.dtype != np.uint8:
        raise TypeError(f"Pixel buffer must have dtype uint8, got {buffer.dtype}")
    if buffer.ndim not in (2, 3) or buffer.shape[-1] != CHANNELS:
        raise ValueError(f"Pixel buffer must have {CHANNELS} channels per pixel, got shape {buffer.shape}")

    if writable:
        if not buffer.flags.writeable:
            raise ValueError("Pixel buffer is read-only")
        if not buffer.flags.c_contiguous:
            raise ValueError("Pixel buffer must be C-contiguous to be modified in place")


def validate_payload(payload: BytesLike) -> bytes:
    """
    Normalise a payload to bytes

    Raises:
        TypeError: If payload is not bytes-like
    """
    if not isinstance(payload, (bytes, bytearray, memoryview)):
        raise TypeError(f"Payload must be bytes-like, got {type(payload).__name__}")
    return bytes(payload)
