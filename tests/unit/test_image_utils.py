"""
Unit Tests for image loading and format helpers
"""

from io import BytesIO

import httpx
import pytest
from PIL import Image

from pixelstash.services.lsb_stego.utils import image_utils
from pixelstash.services.lsb_stego.utils.image_utils import (
    ensure_rgba_image,
    is_lossless_format,
    load_image_from_input,
    resolve_save_format,
)


def make_png(size=(6, 5)):
    buf = BytesIO()
    Image.new("RGB", size, (10, 20, 30)).save(buf, "PNG")
    return buf.getvalue()


class TestLoadImage:

    def test_from_file(self):
        img = load_image_from_input(file=BytesIO(make_png()))
        assert img.size == (6, 5)

    def test_from_url(self, monkeypatch):
        def handler(request):
            assert str(request.url) == "https://images.example/cover.png"
            return httpx.Response(200, content=make_png((3, 4)))

        real_client = httpx.Client
        monkeypatch.setattr(
            image_utils.httpx,
            "Client",
            lambda **kwargs: real_client(transport=httpx.MockTransport(handler), **kwargs),
        )

        img = load_image_from_input(url="https://images.example/cover.png")
        assert img.size == (3, 4)

    def test_url_error_status(self, monkeypatch):
        real_client = httpx.Client
        monkeypatch.setattr(
            image_utils.httpx,
            "Client",
            lambda **kwargs: real_client(
                transport=httpx.MockTransport(lambda request: httpx.Response(404)), **kwargs
            ),
        )

        with pytest.raises(httpx.HTTPStatusError):
            load_image_from_input(url="https://images.example/missing.png")

    def test_requires_a_source(self):
        with pytest.raises(ValueError, match="Provide file or url"):
            load_image_from_input()


class TestImageHelpers:

    def test_ensure_rgba(self):
        assert ensure_rgba_image(Image.new("RGB", (2, 2))).mode == "RGBA"
        rgba = Image.new("RGBA", (2, 2))
        assert ensure_rgba_image(rgba) is rgba

    def test_resolve_format_from_suffix(self):
        assert resolve_save_format("out.png") == "PNG"
        assert resolve_save_format("OUT.PNG") == "PNG"
        assert resolve_save_format("out.jpg") == "JPEG"

    def test_explicit_format_wins(self):
        assert resolve_save_format("out.jpg", "png") == "PNG"

    def test_unknown_suffix(self):
        with pytest.raises(ValueError):
            resolve_save_format("out")

    def test_lossless(self):
        assert is_lossless_format("PNG")
        assert is_lossless_format("tiff")
        assert is_lossless_format("TGA")
        assert not is_lossless_format("JPEG")
        assert not is_lossless_format("gif")
        assert not is_lossless_format("BMP")
        assert not is_lossless_format("ppm")
        assert not is_lossless_format("ICNS")
        assert not is_lossless_format("PDF")
