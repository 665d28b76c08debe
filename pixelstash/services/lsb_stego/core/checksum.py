"""
64-bit payload checksum (SipHash-1-3 with a zero key)
"""

import struct


MASK_64 = 0xFFFFFFFFFFFFFFFF
CHECKSUM_SIZE = 8


def _rotl(value: int, bits: int) -> int:
    return ((value << bits) | (value >> (64 - bits))) & MASK_64


def _sip_round(v0: int, v1: int, v2: int, v3: int) -> tuple[int, int, int, int]:
    v0 = (v0 + v1) & MASK_64
    v1 = _rotl(v1, 13) ^ v0
    v0 = _rotl(v0, 32)
    v2 = (v2 + v3) & MASK_64
    v3 = _rotl(v3, 16) ^ v2
    v0 = (v0 + v3) & MASK_64
    v3 = _rotl(v3, 21) ^ v0
    v2 = (v2 + v1) & MASK_64
    v1 = _rotl(v1, 17) ^ v2
    v2 = _rotl(v2, 32)
    return v0, v1, v2, v3


def siphash13(data: bytes, k0: int = 0, k1: int = 0) -> int:
    """
    Compute SipHash-1-3 of data

    Args:
        data: Bytes to hash
        k0: Low half of the 128-bit key
        k1: High half of the 128-bit key

    Returns:
        Unsigned 64-bit hash value
    """
    data = bytes(data)
    v0 = k0 ^ 0x736F6D6570736575
    v1 = k1 ^ 0x646F72616E646F6D
    v2 = k0 ^ 0x6C7967656E657261
    v3 = k1 ^ 0x7465646279746573

    length = len(data)
    tail_start = length - (length % 8)

    for (block,) in struct.iter_unpack("<Q", data[:tail_start]):
        v3 ^= block
        v0, v1, v2, v3 = _sip_round(v0, v1, v2, v3)
        v0 ^= block

    # Last block carries the message length in its top byte
    last = ((length & 0xFF) << 56) | int.from_bytes(data[tail_start:], "little")
    v3 ^= last
    v0, v1, v2, v3 = _sip_round(v0, v1, v2, v3)
    v0 ^= last

    v2 ^= 0xFF
    for _ in range(3):
        v0, v1, v2, v3 = _sip_round(v0, v1, v2, v3)

    return v0 ^ v1 ^ v2 ^ v3


def calculate_checksum(payload: bytes) -> int:
    """Integrity checksum stored in the envelope header"""
    return siphash13(payload)
