"""
Core steganography algorithms for 2-bit LSB embedding and extraction

Every envelope byte is spread over the four channels of one pixel: channel
``c`` carries bits ``2c`` and ``2c + 1`` of the byte. Pixels are walked in
row-major order, so envelope byte ``i`` always lives in pixel ``i``.
"""

import logging
from typing import Tuple

import numpy as np

from .checksum import CHECKSUM_SIZE, calculate_checksum
from .envelope import (
    HEADER_SIZE,
    LENGTH_SIZE,
    build_envelope,
    parse_checksum,
    parse_length,
)
from .errors import (
    EmptyPayloadError,
    ImageTooSmallError,
    InsufficientCapacityError,
    IntegrityMismatchError,
    InvalidLengthMarkerError,
)
from ..utils.validation import CHANNELS, BytesLike, validate_payload, validate_pixel_buffer


logger = logging.getLogger(__name__)

BITS_PER_CHANNEL = 2
CHANNEL_MASK = (1 << BITS_PER_CHANNEL) - 1
CLEAR_MASK = 0xFF ^ CHANNEL_MASK

# Bit offset of each channel's slot within an envelope byte
CHANNEL_SHIFTS = np.arange(CHANNELS, dtype=np.uint8) * BITS_PER_CHANNEL


def pixel_rows(buffer: np.ndarray) -> np.ndarray:
    """
    Flatten a pixel buffer to one row per pixel in row-major order

    Args:
        buffer: Array of shape (height, width, 4) or (pixels, 4)

    Returns:
        Array of shape (pixels, 4); a view when the buffer is C-contiguous
    """
    if buffer.ndim == 2:
        return buffer
    return buffer.reshape(-1, CHANNELS)


def pixel_count(buffer: np.ndarray) -> int:
    return int(np.prod(buffer.shape[:-1]))


def calculate_capacity(buffer: np.ndarray) -> int:
    """
    Calculate how many payload bytes a pixel buffer can hold

    Args:
        buffer: Pixel buffer

    Returns:
        Pixel count minus the header size, never below zero
    """
    validate_pixel_buffer(buffer)
    return max(0, pixel_count(buffer) - HEADER_SIZE)


def pack_bytes_into_pixels(rows: np.ndarray, data: bytes, start: int = 0) -> None:
    """
    Write bytes into consecutive pixels, one byte per pixel

    Only the two low bits of each channel are replaced.

    Args:
        rows: Flat pixel rows of shape (pixels, 4), modified in place
        data: Bytes to write
        start: Index of the first pixel to write
    """
    values = np.frombuffer(data, dtype=np.uint8)
    nibbles = (values[:, np.newaxis] >> CHANNEL_SHIFTS) & CHANNEL_MASK
    region = rows[start : start + values.size]
    region[...] = (region & CLEAR_MASK) | nibbles


def unpack_bytes_from_pixels(rows: np.ndarray, start: int, count: int) -> bytes:
    """
    Read bytes back out of consecutive pixels

    Args:
        rows: Flat pixel rows of shape (pixels, 4)
        start: Index of the first pixel to read
        count: Number of bytes (pixels) to read

    Returns:
        Extracted bytes
    """
    region = rows[start : start + count]
    slots = (region & CHANNEL_MASK) << CHANNEL_SHIFTS
    return np.bitwise_or.reduce(slots, axis=1).astype(np.uint8).tobytes()


def embed_payload(buffer: np.ndarray, payload: BytesLike) -> None:
    """
    Embed a payload into a pixel buffer in place

    The buffer is left untouched when validation fails.

    Args:
        buffer: Writable, C-contiguous pixel buffer
        payload: Non-empty bytes to hide

    Raises:
        EmptyPayloadError: If payload has zero length
        InsufficientCapacityError: If payload does not fit
    """
    validate_pixel_buffer(buffer, writable=True)
    data = validate_payload(payload)

    if not data:
        raise EmptyPayloadError()

    capacity = calculate_capacity(buffer)
    if len(data) > capacity:
        raise InsufficientCapacityError(len(data), capacity)

    envelope = build_envelope(data)
    pack_bytes_into_pixels(pixel_rows(buffer), envelope)

    logger.debug(f"Embedded {len(data)} payload bytes across {len(envelope)} pixels (capacity {capacity})")


def recover_envelope(buffer: np.ndarray) -> Tuple[bytes, int]:
    """
    Recover a payload previously embedded with embed_payload, together with
    the checksum it was verified against

    Args:
        buffer: Pixel buffer, never modified

    Returns:
        Tuple of (payload bytes, stored 64-bit checksum)

    Raises:
        ImageTooSmallError: If the buffer cannot even hold a header
        InvalidLengthMarkerError: If the stored length exceeds capacity
        IntegrityMismatchError: If the stored checksum does not match the payload
    """
    validate_pixel_buffer(buffer)
    pixels = pixel_count(buffer)
    if pixels < HEADER_SIZE:
        raise ImageTooSmallError(pixels, HEADER_SIZE)

    rows = pixel_rows(buffer)
    capacity = pixels - HEADER_SIZE

    length = parse_length(unpack_bytes_from_pixels(rows, 0, LENGTH_SIZE))
    if length > capacity:
        raise InvalidLengthMarkerError(length, capacity)

    expected = parse_checksum(unpack_bytes_from_pixels(rows, LENGTH_SIZE, CHECKSUM_SIZE))
    data = unpack_bytes_from_pixels(rows, HEADER_SIZE, length)

    actual = calculate_checksum(data)
    # A zero length is never written by embed_payload
    if actual != expected or not data:
        raise IntegrityMismatchError(expected, actual)

    logger.debug(f"Recovered {length} payload bytes (capacity {capacity})")
    return data, expected


def recover_payload(buffer: np.ndarray) -> bytes:
    """Recover a payload previously embedded with embed_payload, see recover_envelope"""
    data, _ = recover_envelope(buffer)
    return data
