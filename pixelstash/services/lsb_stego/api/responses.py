"""
API response models for the LSB steganography service
"""

from pydantic import BaseModel
from typing import Any, Dict, Optional


class StegoAPIResult(BaseModel):
    """
    Standard API response model for steganography endpoints
    """
    success: bool
    message: str
    path: Optional[str] = None
    details: Optional[Dict[str, Any]] = None
