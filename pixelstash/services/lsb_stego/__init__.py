"""
LSB Steganography Service

Hides arbitrary bytes in the two least significant bits of every channel
of an RGBA image:
- One envelope byte per pixel, row-major
- Length and checksum header ahead of the payload
- Integrity check on recovery
"""

__version__ = "1.0.0"
__author__ = "PixelStash Team"
