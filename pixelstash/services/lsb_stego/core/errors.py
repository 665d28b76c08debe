"""
Error taxonomy for LSB embedding and recovery
"""

from typing import Optional


class StegoError(ValueError):
    """Base class for all steganography failures"""

    default_message = "Steganography operation failed"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.default_message)
        self.message = message or self.default_message


class EmbedError(StegoError):
    """Raised when a payload cannot be embedded"""


class RecoverError(StegoError):
    """Raised when a payload cannot be recovered"""


class EmptyPayloadError(EmbedError):
    default_message = "Supplied data contains zero bytes"


class InsufficientCapacityError(EmbedError):
    default_message = "Not enough space in image to insert requested data"

    def __init__(self, required: int, available: int):
        super().__init__(f"{self.default_message}: {required} > {available}")
        self.required = required
        self.available = available


class ImageTooSmallError(RecoverError):
    default_message = "Image is too small to contain any data"

    def __init__(self, pixel_count: int, header_size: int):
        super().__init__(f"{self.default_message}: {pixel_count} < {header_size} pixels")
        self.pixel_count = pixel_count
        self.header_size = header_size


class InvalidLengthMarkerError(RecoverError):
    default_message = "Image contains invalid data length marker"

    def __init__(self, length: int, capacity: int):
        super().__init__(f"{self.default_message}: {length} > {capacity}")
        self.length = length
        self.capacity = capacity


class IntegrityMismatchError(RecoverError):
    default_message = "Image data failed the integrity check"

    def __init__(self, expected: int, actual: int):
        super().__init__(f"{self.default_message}: expected {expected:016x}, got {actual:016x}")
        self.expected = expected
        self.actual = actual
