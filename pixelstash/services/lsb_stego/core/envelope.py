"""
Envelope layout: length and checksum header followed by the raw payload
"""

import struct

from .checksum import CHECKSUM_SIZE, calculate_checksum


# Little-endian u64 payload length, then little-endian u64 checksum
LENGTH_FORMAT = "<Q"
CHECKSUM_FORMAT = "<Q"
HEADER_FORMAT = "<QQ"

LENGTH_SIZE = struct.calcsize(LENGTH_FORMAT)
HEADER_SIZE = struct.calcsize(HEADER_FORMAT)


def build_header(payload: bytes) -> bytes:
    """
    Build the envelope header for a payload

    Args:
        payload: Raw payload bytes

    Returns:
        Packed length and checksum fields
    """
    return struct.pack(HEADER_FORMAT, len(payload), calculate_checksum(payload))


def build_envelope(payload: bytes) -> bytes:
    """Header followed by the payload itself"""
    return build_header(payload) + bytes(payload)


def parse_length(raw: bytes) -> int:
    (length,) = struct.unpack(LENGTH_FORMAT, raw)
    return length


def parse_checksum(raw: bytes) -> int:
    (checksum,) = struct.unpack(CHECKSUM_FORMAT, raw)
    return checksum


def envelope_size(payload_size: int) -> int:
    return HEADER_SIZE + payload_size
