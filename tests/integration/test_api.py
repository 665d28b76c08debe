"""
Integration Tests for the /stego HTTP endpoints
"""

import importlib
from io import BytesIO
from pathlib import Path

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from pixelstash.services.lsb_stego.main import router


def png_bytes(image):
    buf = BytesIO()
    image.save(buf, "PNG")
    return buf.getvalue()


class TestStegoAPI:
    """Test cases for the stego router."""

    @pytest.fixture
    def output_dir(self, tmp_path, monkeypatch):
        out = tmp_path / "stego_out"
        monkeypatch.setenv("STEGO_OUTPUT_DIR", str(out))
        return out

    @pytest.fixture
    def client(self, output_dir):
        app = FastAPI()
        app.include_router(router)
        return TestClient(app)

    @pytest.fixture
    def cover_png(self, cover_image):
        return png_bytes(cover_image)

    def test_capacity(self, client, cover_png):
        resp = client.post("/stego/capacity", files={"file": ("cover.png", cover_png, "image/png")})

        assert resp.status_code == 200
        body = resp.json()
        assert body["capacity_bytes"] == 752
        assert body["width"] == 32
        assert body["height"] == 24

    def test_capacity_without_image(self, client):
        resp = client.post("/stego/capacity")
        assert resp.status_code == 400

    def test_capacity_invalid_image(self, client):
        resp = client.post("/stego/capacity", files={"file": ("bad.png", b"not an image", "image/png")})
        assert resp.status_code == 400

    def test_embed_then_extract(self, client, cover_png, output_dir):
        resp = client.post(
            "/stego/embed",
            files={
                "file": ("cover.png", cover_png, "image/png"),
                "secret": ("secret.bin", b"over the wire", "application/octet-stream"),
            },
        )

        assert resp.status_code == 200
        body = resp.json()
        assert body["success"] is True
        assert body["details"]["payload_size_bytes"] == 13
        assert body["details"]["remaining_capacity_bytes"] == 739

        stego_path = Path(body["path"])
        assert stego_path.parent == output_dir
        assert stego_path.exists()

        resp = client.post(
            "/stego/extract",
            files={"file": ("stego.png", stego_path.read_bytes(), "image/png")},
        )
        assert resp.status_code == 200
        assert resp.content == b"over the wire"
        assert resp.headers["content-type"] == "application/octet-stream"
        assert len(resp.headers["x-payload-checksum"]) == 16

    def test_embed_too_large(self, client, cover_png):
        resp = client.post(
            "/stego/embed",
            files={
                "file": ("cover.png", cover_png, "image/png"),
                "secret": ("big.bin", bytes(1000), "application/octet-stream"),
            },
        )

        assert resp.status_code == 400
        assert resp.json()["success"] is False
        assert "Not enough space" in resp.json()["message"]

    def test_embed_empty_secret(self, client, cover_png):
        resp = client.post(
            "/stego/embed",
            files={
                "file": ("cover.png", cover_png, "image/png"),
                "secret": ("empty.bin", b"", "application/octet-stream"),
            },
        )

        assert resp.status_code == 400
        assert "zero bytes" in resp.json()["message"]

    def test_embed_invalid_cover(self, client):
        resp = client.post(
            "/stego/embed",
            files={
                "file": ("cover.png", b"garbage", "image/png"),
                "secret": ("secret.bin", b"abc", "application/octet-stream"),
            },
        )
        assert resp.status_code == 400

    def test_extract_clean_image(self, client, cover_png):
        resp = client.post("/stego/extract", files={"file": ("cover.png", cover_png, "image/png")})

        assert resp.status_code == 422
        assert resp.json()["success"] is False

    def test_extract_without_image(self, client):
        resp = client.post("/stego/extract")

        assert resp.status_code == 400
        assert resp.json()["success"] is False
        assert "Provide file or url" in resp.json()["message"]

    def test_extract_invalid_image(self, client):
        resp = client.post("/stego/extract", files={"file": ("stego.png", b"garbage", "image/png")})

        assert resp.status_code == 400
        assert resp.json()["success"] is False
        assert resp.json()["message"].startswith("Unsupported image")


class TestApplication:
    """Smoke test for the top-level FastAPI application."""

    def test_health_and_router_mounted(self, tmp_path, monkeypatch, cover_image):
        monkeypatch.setenv("STEGO_OUTPUT_DIR", str(tmp_path / "app_out"))
        app_module = importlib.import_module("main")
        client = TestClient(app_module.app)

        assert client.get("/health").json() == {"status": "ok"}
        resp = client.post(
            "/stego/capacity",
            files={"file": ("cover.png", png_bytes(cover_image), "image/png")},
        )
        assert resp.status_code == 200
