"""Tests for API routes."""

import io

import pytest
from fastapi.testclient import TestClient
from PIL import Image, ImageFile

from zplgfa.app import create_app
from zplgfa.config import AppConfig
from zplgfa.models.graphic import GraphicType


@pytest.fixture
def client():
    """Client for an app with the default configuration."""
    with TestClient(create_app(AppConfig())) as client:
        yield client


def png_bytes(image: Image.Image) -> bytes:
    buf = io.BytesIO()
    image.save(buf, format="PNG")
    return buf.getvalue()


class TestGraphicTypes:
    """Tests for the graphic type listing."""

    def test_lists_all_types(self, client):
        response = client.get("/api/v1/graphic-types")
        assert response.status_code == 200
        data = response.json()
        assert {item["name"] for item in data} == {t.value for t in GraphicType}
        letters = {item["name"]: item["letter"] for item in data}
        assert letters["binary"] == "B"
        assert letters["ascii"] == "A"

    def test_marks_default(self):
        with TestClient(create_app(AppConfig(default_graphic_type=GraphicType.ASCII))) as client:
            data = client.get("/api/v1/graphic-types").json()
        defaults = [item["name"] for item in data if item["default"]]
        assert defaults == ["ascii"]


class TestConvert:
    """Tests for the convert endpoint."""

    def test_default_is_compressed_zpl(self, client, bar_png):
        response = client.post("/api/v1/convert", content=bar_png)
        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/plain")
        assert response.content == b"^XA,^FS\n^FO0,0\n^GFA,7,8,2,\n,FF00:,^FS,^XZ\n"
        assert response.headers["X-Byte-Count"] == "7"
        assert response.headers["X-Total-Bytes"] == "8"
        assert response.headers["X-Row-Bytes"] == "2"

    def test_field_only(self, client, bar_png):
        response = client.post("/api/v1/convert", params={"wrap": "false"}, content=bar_png)
        assert response.status_code == 200
        assert response.content == b"^GFA,7,8,2,\n,FF00:,"

    def test_ascii(self, client, bar_png):
        response = client.post(
            "/api/v1/convert",
            params={"graphic_type": "ASCII", "wrap": "false"},
            content=bar_png,
        )
        assert response.content == b"^GFA,20,8,2,\n0000\nFF00\nFF00\n0000\n"
        assert response.headers["X-Graphic-Type"] == "ascii"

    def test_binary(self, client, bar_png):
        response = client.post(
            "/api/v1/convert",
            params={"graphic_type": "Binary", "wrap": "false"},
            content=bar_png,
        )
        assert response.status_code == 200
        assert response.headers["content-type"] == "application/octet-stream"
        assert response.content == b"^GFB,8,8,2,\n\x00\x00\xff\x00\xff\x00\x00\x00"

    def test_configured_default_type(self, bar_png):
        with TestClient(create_app(AppConfig(default_graphic_type=GraphicType.BINARY))) as client:
            response = client.post("/api/v1/convert", params={"wrap": "false"}, content=bar_png)
        assert response.content.startswith(b"^GFB,8,8,2,\n")

    def test_unknown_graphic_type(self, client, bar_png):
        response = client.post("/api/v1/convert", params={"graphic_type": "z64"}, content=bar_png)
        assert response.status_code == 422
        assert "Unknown graphic type" in response.json()["detail"]

    def test_empty_body(self, client):
        response = client.post("/api/v1/convert", content=b"")
        assert response.status_code == 400

    def test_invalid_image(self, client):
        response = client.post("/api/v1/convert", content=b"not an image")
        assert response.status_code == 400
        assert "Could not decode image" in response.json()["detail"]

    def test_image_too_large(self):
        image = Image.new("L", (100, 100), color=255)
        with TestClient(create_app(AppConfig(max_image_pixels=5000))) as client:
            response = client.post("/api/v1/convert", content=png_bytes(image))
        assert response.status_code == 413

    def test_image_too_large_is_not_decoded(self, monkeypatch):
        data = png_bytes(Image.new("L", (100, 100), color=255))

        def fail_load(self):
            raise AssertionError("pixel data was decoded")

        monkeypatch.setattr(ImageFile.ImageFile, "load", fail_load)
        with TestClient(create_app(AppConfig(max_image_pixels=5000))) as client:
            response = client.post("/api/v1/convert", content=data)
        assert response.status_code == 413
        assert "100x100" in response.json()["detail"]

    def test_pixel_limit_disabled(self):
        image = Image.new("L", (100, 100), color=255)
        with TestClient(create_app(AppConfig(max_image_pixels=0))) as client:
            response = client.post("/api/v1/convert", params={"wrap": "false"}, content=png_bytes(image))
        assert response.status_code == 200
        # 100 identical white rows of 13 bytes
        assert response.content == b"^GFA,100,1300,13,\n," + b":" * 99


class TestAPIKey:
    """Tests for API key authentication."""

    @pytest.fixture
    def secured_client(self):
        with TestClient(create_app(AppConfig(api_key="secret"))) as client:
            yield client

    def test_missing_key(self, secured_client):
        response = secured_client.get("/api/v1/graphic-types")
        assert response.status_code == 401

    def test_wrong_key(self, secured_client):
        response = secured_client.get("/api/v1/graphic-types", headers={"X-API-Key": "wrong"})
        assert response.status_code == 401

    def test_header_key(self, secured_client):
        response = secured_client.get("/api/v1/graphic-types", headers={"X-API-Key": "secret"})
        assert response.status_code == 200

    def test_bearer_key(self, secured_client):
        response = secured_client.get("/api/v1/graphic-types", headers={"Authorization": "Bearer secret"})
        assert response.status_code == 200

    def test_query_key(self, secured_client):
        response = secured_client.get("/api/v1/graphic-types", params={"api_key": "secret"})
        assert response.status_code == 200

    def test_bearer_scheme_is_case_insensitive(self, secured_client):
        response = secured_client.get("/api/v1/graphic-types", headers={"Authorization": "bearer secret"})
        assert response.status_code == 200

    def test_authorization_without_bearer_scheme(self, secured_client):
        response = secured_client.get("/api/v1/graphic-types", headers={"Authorization": "secret"})
        assert response.status_code == 401

    def test_header_key_wins_over_query(self, secured_client):
        response = secured_client.get(
            "/api/v1/graphic-types", headers={"X-API-Key": "wrong"}, params={"api_key": "secret"}
        )
        assert response.status_code == 401
