"""
API routes for the LSB steganography service
"""

import logging
import traceback
import uuid
from io import BytesIO
from pathlib import Path
from typing import Optional

import httpx
from fastapi import APIRouter, File, Form, HTTPException, UploadFile
from fastapi.responses import JSONResponse, Response
from PIL import Image, UnidentifiedImageError

from pixelstash.utility.constants_manager import ConstantsManager

from ..core.errors import EmbedError, RecoverError
from ..core.service import ImageStegoService
from ..models.stego_models import StegoCapacityResult
from ..utils.image_utils import load_image_from_input
from .responses import StegoAPIResult


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/stego", tags=["stego"])

# Service instance
stego_service = ImageStegoService()


def send_response(
    status_code: int,
    message: str,
    path: Optional[str] = None,
    details: Optional[dict] = None
) -> JSONResponse:
    """
    Helper function to send consistent API responses

    Args:
        status_code: HTTP status code
        message: Response message
        path: Optional file path
        details: Optional additional details

    Returns:
        JSONResponse with consistent format
    """
    return JSONResponse(
        status_code=status_code,
        content=StegoAPIResult(
            success=status_code < 400,
            message=message,
            path=path,
            details=details
        ).model_dump()
    )


def get_output_dir() -> Path:
    output_dir = Path(ConstantsManager().get_stego_output_dir())
    output_dir.mkdir(parents=True, exist_ok=True)
    return output_dir


async def read_image(file: Optional[UploadFile], url: Optional[str]) -> Image.Image:
    """
    Load the uploaded image, or fetch it from url

    Raises:
        HTTPException: If neither is given or the image cannot be decoded
    """
    try:
        if file is not None:
            return load_image_from_input(file=BytesIO(await file.read()))
        return load_image_from_input(url=url)
    except UnidentifiedImageError as e:
        raise HTTPException(status_code=400, detail=f"Unsupported image: {e}")
    except httpx.HTTPError as e:
        raise HTTPException(status_code=400, detail=f"Failed to fetch image: {e}")
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/capacity", response_model=StegoCapacityResult)
async def check_capacity(
    file: Optional[UploadFile] = File(None),
    url: Optional[str] = Form(None),
):
    """
    Check how many payload bytes an image can hold

    Args:
        file: The image file to check
        url: Image URL, used when no file is uploaded

    Returns:
        StegoCapacityResult with capacity information
    """
    img = await read_image(file, url)
    return stego_service.capacity(img)


@router.post("/embed", response_model=StegoAPIResult)
async def embed(
    secret: UploadFile = File(...),
    file: Optional[UploadFile] = File(None),
    url: Optional[str] = Form(None),
):
    """
    Hide the bytes of an uploaded file in a cover image

    Args:
        secret: File whose bytes are hidden
        file: Cover image
        url: Cover image URL, used when no file is uploaded

    Returns:
        StegoAPIResult with the saved PNG path and capacity details
    """
    try:
        cover = await read_image(file, url)
        payload = await secret.read()
        logger.info(f"Received embed request: secret={secret.filename}, size={len(payload)}")

        stego_img, result = stego_service.hide(cover, payload)

        output_path = get_output_dir() / f"stego_{uuid.uuid4().hex}.png"
        stego_img.save(output_path, "PNG")

        return send_response(
            200,
            f"Embedded {result.payload_size_bytes} bytes",
            str(output_path),
            {
                "payload_size_bytes": result.payload_size_bytes,
                "envelope_size_bytes": result.envelope_size_bytes,
                "capacity_bytes": result.capacity_bytes,
                "remaining_capacity_bytes": result.remaining_capacity_bytes,
            }
        )
    except HTTPException as e:
        return send_response(e.status_code, str(e.detail))
    except EmbedError as e:
        return send_response(400, str(e))
    except Exception as e:
        logger.error(f"Unexpected error in embed: {str(e)}\n{traceback.format_exc()}")
        return send_response(500, str(e))


@router.post("/extract")
async def extract(
    file: Optional[UploadFile] = File(None),
    url: Optional[str] = Form(None),
):
    """
    Recover the raw payload hidden in an image

    Args:
        file: The stego image
        url: Stego image URL, used when no file is uploaded

    Returns:
        The payload as application/octet-stream
    """
    try:
        img = await read_image(file, url)
        result = stego_service.reveal(img)
    except HTTPException as e:
        return send_response(e.status_code, str(e.detail))
    except RecoverError as e:
        return send_response(422, str(e))
    except Exception as e:
        logger.error(f"Unexpected error in extract: {str(e)}\n{traceback.format_exc()}")
        return send_response(500, str(e))

    return Response(
        content=result.data,
        media_type="application/octet-stream",
        headers={"X-Payload-Checksum": result.checksum},
    )
