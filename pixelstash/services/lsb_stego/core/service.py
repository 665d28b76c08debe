"""
Main service class for LSB steganography operations
"""

import logging
from pathlib import Path
from typing import Tuple, Union

from PIL import Image

from ..models.stego_models import StegoCapacityResult, StegoHideResult, StegoRevealResult
from ..utils.validation import BytesLike, validate_payload
from .envelope import HEADER_SIZE, envelope_size
from .errors import StegoError
from .pixel_store import PixelStore


logger = logging.getLogger(__name__)


class ImageStegoService:
    """
    Main service class for LSB steganography operations

    This service wraps the pixel-level codec with Pillow images and files,
    and reports what each operation did through result models.
    """

    def capacity(self, image: Image.Image) -> StegoCapacityResult:
        """
        Calculate steganography capacity for an image

        Args:
            image: Input image

        Returns:
            StegoCapacityResult with capacity information
        """
        store = PixelStore.from_image(image)
        return self._capacity_result(store)

    def hide(self, cover: Image.Image, payload: BytesLike) -> Tuple[Image.Image, StegoHideResult]:
        """
        Hide a payload in a copy of the cover image

        Args:
            cover: Cover image, left unmodified
            payload: Bytes to hide

        Returns:
            Tuple of (stego_image, result_metadata)

        Raises:
            EmbedError: If the payload is empty or does not fit
        """
        store = PixelStore.from_image(cover)
        result = self._embed(store, payload)
        return store.to_image(), result

    def reveal(self, stego_image: Image.Image) -> StegoRevealResult:
        """
        Recover a payload hidden in an image

        Args:
            stego_image: Image with an embedded envelope

        Returns:
            StegoRevealResult with the payload and its checksum

        Raises:
            RecoverError: If the image holds no valid envelope
        """
        return self._recover(PixelStore.from_image(stego_image))

    def hide_file(
        self,
        input_path: Union[str, Path],
        output_path: Union[str, Path],
        payload: BytesLike,
    ) -> StegoHideResult:
        """
        Read a cover image, embed a payload and write the stego image

        Args:
            input_path: Cover image file
            output_path: Destination file, must use a lossless format
            payload: Bytes to hide

        Returns:
            StegoHideResult describing the write

        Raises:
            PixelStoreError: If either file cannot be read or written
            EmbedError: If the payload is empty or does not fit
        """
        store = PixelStore.open(input_path)
        result = self._embed(store, payload)
        store.save(output_path)
        result.output_path = Path(output_path)
        logger.info(f"Wrote stego image to {output_path}")
        return result

    def reveal_file(self, input_path: Union[str, Path]) -> StegoRevealResult:
        return self._recover(PixelStore.open(input_path))

    def capacity_file(self, input_path: Union[str, Path]) -> StegoCapacityResult:
        return self._capacity_result(PixelStore.open(input_path))

    def _capacity_result(self, store: PixelStore) -> StegoCapacityResult:
        return StegoCapacityResult(
            width=store.width,
            height=store.height,
            pixel_count=store.pixel_count,
            header_bytes=HEADER_SIZE,
            capacity_bytes=store.capacity(),
        )

    def _embed(self, store: PixelStore, payload: BytesLike) -> StegoHideResult:
        data = validate_payload(payload)
        capacity = store.capacity()
        try:
            store.embed(data)
        except StegoError as e:
            logger.warning(f"Embedding failed for {store!r}: {e}")
            raise

        logger.info(f"Embedded {len(data)} bytes into {store.width}x{store.height} image")
        return StegoHideResult(
            payload_size_bytes=len(data),
            envelope_size_bytes=envelope_size(len(data)),
            capacity_bytes=capacity,
            remaining_capacity_bytes=capacity - len(data),
        )

    def _recover(self, store: PixelStore) -> StegoRevealResult:
        try:
            data, checksum = store.recover_with_checksum()
        except StegoError as e:
            logger.warning(f"Recovery failed for {store!r}: {e}")
            raise

        logger.info(f"Recovered {len(data)} bytes from {store.width}x{store.height} image")
        return StegoRevealResult(
            data=data,
            size_bytes=len(data),
            checksum=f"{checksum:016x}",
        )
