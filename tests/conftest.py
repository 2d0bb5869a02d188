from io import BytesIO

import cloudinary.exceptions
import cloudinary.uploader
import httpx
import pytest
from PIL import Image


def make_image(size=(64, 64), color=(255, 255, 255), fmt="PNG") -> bytes:
    buffer = BytesIO()
    Image.new("RGB", size, color).save(buffer, format=fmt)
    return buffer.getvalue()


class FakeWeb:
    """httpx transport serving canned responses by url.

    A route value may be bytes (200 with that body), an int status code or an
    exception to raise. Unknown urls answer 404.
    """

    def __init__(self, routes=None):
        self.routes = dict(routes or {})
        self.calls = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        url = str(request.url)
        self.calls.append(url)
        route = self.routes.get(url, 404)
        if isinstance(route, Exception):
            raise route
        if isinstance(route, int):
            return httpx.Response(route)
        return httpx.Response(200, content=route)

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handler))


@pytest.fixture
def uploads(monkeypatch):
    """Replace the Cloudinary uploader; returns the list of recorded uploads"""
    recorded = []

    def fake_upload(file, **options):
        recorded.append({"data": file.read(), **options})
        return {
            "secure_url": f"https://res.cloudinary.com/demo/image/upload/{options['folder']}/{options['public_id']}.jpg"
        }

    monkeypatch.setattr(cloudinary.uploader, "upload", fake_upload)
    return recorded


@pytest.fixture
def failing_uploads(monkeypatch):
    def fake_upload(file, **options):
        raise cloudinary.exceptions.Error("Cloudinary is down")

    monkeypatch.setattr(cloudinary.uploader, "upload", fake_upload)
