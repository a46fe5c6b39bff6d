"""
Image upload tests.

Verifies that:
- Non-image files and oversized files are rejected before any handler runs
- Local storage writes a generated file served under /uploads
- A pasted URL wins over an uploaded file
- The resolver falls through failing strategies within the same request
"""

import json
import logging
from pathlib import Path

import cloudinary.exceptions
import cloudinary.uploader
import pytest
from fastapi import HTTPException

from backoffice.core.config import settings
from backoffice.core.uploads import (
    BlobStrategy,
    CloudinaryStrategy,
    ImageUpload,
    LocalStrategy,
    UploadResolver,
    is_image_url,
    resolve_image,
)
from backoffice.main import create_app
from helpers import admin_token, auth, staff_setup

PNG = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32

REQUEST_FORM = {
    "name": "Ali",
    "phone": "+212600000000",
    "email": "ali@example.com",
    "address": "1 Rue Principale",
    "serviceType": "Wiring",
}


class ExplodingStrategy:
    name = "exploding"

    def __init__(self):
        self.calls = 0

    async def store(self, image, folder):
        self.calls += 1
        raise RuntimeError("remote host unreachable")


class EmptyStrategy:
    name = "empty"

    async def store(self, image, folder):
        return None


def sample_image(field: str = "image") -> ImageUpload:
    return ImageUpload(field_name=field, filename="panel.png", content_type="image/png", data=PNG)


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_text_file_rejected(client):
    resp = await client.post(
        "/api/requests",
        data=REQUEST_FORM,
        files={"image": ("notes.txt", b"hello", "text/plain")},
    )
    assert resp.status_code == 400
    assert resp.json()["detail"]["message"] == "Only image files are allowed!"


@pytest.mark.asyncio
async def test_image_extension_with_wrong_mime_rejected(client):
    resp = await client.post(
        "/api/requests",
        data=REQUEST_FORM,
        files={"image": ("photo.png", b"hello", "application/octet-stream")},
    )
    assert resp.status_code == 400


@pytest.mark.asyncio
async def test_oversized_file_rejected(client):
    big = b"\x00" * (settings.MAX_UPLOAD_SIZE + 1)
    resp = await client.post(
        "/api/requests",
        data=REQUEST_FORM,
        files={"image": ("big.jpg", big, "image/jpeg")},
    )
    assert resp.status_code == 400
    assert resp.json()["detail"]["message"] == "File too large"


@pytest.mark.asyncio
async def test_too_many_project_images_rejected(client):
    token = await admin_token(client)
    files = [("images", (f"p{i}.png", PNG, "image/png")) for i in range(11)]
    resp = await client.post(
        "/api/projects",
        data={"title": json.dumps({"en": "a", "fr": "b", "ar": "c"}),
              "description": json.dumps({"en": "a", "fr": "b", "ar": "c"})},
        files=files,
        headers=auth(token),
    )
    assert resp.status_code == 400


@pytest.mark.parametrize(
    "value, expected",
    [
        ("https://cdn.example.com/a.png", True),
        ("  http://cdn.example.com/a.png  ", True),
        ("ftp://cdn.example.com/a.png", False),
        ("/uploads/a.png", False),
        ("", False),
        (None, False),
    ],
)
def test_is_image_url(value, expected):
    assert is_image_url(value) is expected


# ---------------------------------------------------------------------------
# Local storage through the API
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_upload_dir_created_on_startup_not_on_build(test_settings):
    upload_dir = Path(test_settings.UPLOAD_DIR)
    application = create_app(test_settings)
    assert not upload_dir.exists()

    async with application.router.lifespan_context(application):
        assert upload_dir.is_dir()


@pytest.mark.asyncio
async def test_request_image_stored_locally_and_served(client, test_settings):
    resp = await client.post(
        "/api/requests",
        data=REQUEST_FORM,
        files={"image": ("panel.png", PNG, "image/png")},
    )
    assert resp.status_code == 201, resp.text
    path = resp.json()["image"]
    assert path.startswith("/uploads/image-")
    assert path.endswith(".png")

    stored = Path(test_settings.UPLOAD_DIR) / path.removeprefix("/uploads/")
    assert stored.read_bytes() == PNG

    served = await client.get(path)
    assert served.status_code == 200
    assert served.content == PNG


@pytest.mark.asyncio
async def test_pasted_url_wins_over_file(client):
    resp = await client.post(
        "/api/requests",
        data={**REQUEST_FORM, "imageUrl": "  https://cdn.example.com/site.jpg "},
        files={"image": ("panel.png", PNG, "image/png")},
    )
    assert resp.status_code == 201
    assert resp.json()["image"] == "https://cdn.example.com/site.jpg"


@pytest.mark.asyncio
async def test_project_files_and_urls_combined(client):
    token = await admin_token(client)
    localized = json.dumps({"en": "a", "fr": "b", "ar": "c"})
    resp = await client.post(
        "/api/projects",
        data={"title": localized, "description": localized, "imageUrls": "https://cdn.example.com/x.jpg"},
        files=[("images", ("one.png", PNG, "image/png")), ("images", ("two.webp", PNG, "image/webp"))],
        headers=auth(token),
    )
    assert resp.status_code == 201, resp.text
    images = resp.json()["images"]
    assert images[0] == "https://cdn.example.com/x.jpg"
    assert images[1].startswith("/uploads/images-") and images[1].endswith(".png")
    assert images[2].endswith(".webp")


# ---------------------------------------------------------------------------
# Profile
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_profile_photo_and_name(client):
    token = await admin_token(client)
    resp = await client.put(
        "/api/profile",
        data={"name": "Hassan"},
        files={"photo": ("me.jpg", PNG, "image/jpeg")},
        headers=auth(token),
    )
    assert resp.status_code == 200, resp.text
    user = resp.json()["user"]
    assert user["name"] == "Hassan"
    assert user["photo"].startswith("/uploads/photo-")

    resp = await client.get("/api/profile", headers=auth(token))
    assert resp.json()["user"]["name"] == "Hassan"
    assert resp.json()["user"]["type"] == "user"


@pytest.mark.asyncio
async def test_employee_profile_updates_english_name(client):
    setup = await staff_setup(client)
    resp = await client.put(
        "/api/profile",
        data={"name": "Johnny", "photoUrl": "https://cdn.example.com/me.png"},
        headers=auth(setup["employee_token"]),
    )
    assert resp.status_code == 200
    assert resp.json()["user"]["name"] == "Johnny"
    assert resp.json()["user"]["photo"] == "https://cdn.example.com/me.png"

    resp = await client.get(
        f"/api/employees/{setup['employee']['id']}", headers=auth(setup["manager_token"])
    )
    assert resp.json()["emp_name"]["en"] == "Johnny"
    assert resp.json()["emp_name"]["fr"] == "Jean Dupont"


@pytest.mark.asyncio
async def test_profile_requires_token(client):
    assert (await client.get("/api/profile")).status_code == 401


# ---------------------------------------------------------------------------
# Resolver
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_resolver_falls_back_to_local(tmp_path, caplog):
    exploding = ExplodingStrategy()
    resolver = UploadResolver([exploding, EmptyStrategy(), LocalStrategy(tmp_path)], folder="test")

    with caplog.at_level(logging.INFO, logger="backoffice.core.uploads"):
        url = await resolver.store(sample_image())

    assert exploding.calls == 1
    assert url.startswith("/uploads/image-")
    assert (tmp_path / url.removeprefix("/uploads/")).exists()
    messages = [r.getMessage() for r in caplog.records]
    assert any("exploding failed" in m for m in messages)
    assert any("empty returned no URL" in m for m in messages)
    assert any("local succeeded" in m for m in messages)


@pytest.mark.asyncio
async def test_resolver_all_strategies_failing():
    resolver = UploadResolver([ExplodingStrategy(), EmptyStrategy()], folder="test")
    with pytest.raises(HTTPException) as exc_info:
        await resolver.store(sample_image())
    assert exc_info.value.status_code == 500
    assert exc_info.value.detail["code"] == "UPLOAD_FAILED"


@pytest.mark.asyncio
async def test_api_upload_falls_back_within_request(app, client, tmp_path):
    exploding = ExplodingStrategy()
    app.state.upload_resolver = UploadResolver(
        [exploding, LocalStrategy(tmp_path)], folder="test"
    )
    resp = await client.post(
        "/api/requests", data=REQUEST_FORM, files={"image": ("panel.png", PNG, "image/png")}
    )
    assert resp.status_code == 201
    assert exploding.calls == 1
    assert resp.json()["image"].startswith("/uploads/")


@pytest.mark.asyncio
async def test_resolve_image_without_input():
    resolver = UploadResolver([LocalStrategy("unused")], folder="test")
    assert await resolve_image(resolver, None, None) is None
    assert await resolve_image(resolver, None, "not a url") is None


def test_strategy_order_from_settings(test_settings):
    assert UploadResolver.from_settings(test_settings).strategy_names == ["local"]

    configured = test_settings.model_copy(
        update={
            "CLOUDINARY_CLOUD_NAME": "demo",
            "CLOUDINARY_API_KEY": "key",
            "CLOUDINARY_API_SECRET": "secret",
            "BLOB_READ_WRITE_TOKEN": "blob-token",
        }
    )
    resolver = UploadResolver.from_settings(configured)
    assert resolver.strategy_names == ["cloudinary", "blob", "local"]
    assert isinstance(resolver.strategies[0], CloudinaryStrategy)
    assert isinstance(resolver.strategies[1], BlobStrategy)


@pytest.mark.asyncio
async def test_cloudinary_strategy_uploads_through_sdk(monkeypatch):
    calls = []

    def fake_upload(file, **options):
        calls.append((file.read(), options))
        return {"secure_url": "https://res.cloudinary.com/demo/image/upload/v1/hassan-elec/a.png"}

    monkeypatch.setattr(cloudinary.uploader, "upload", fake_upload)
    strategy = CloudinaryStrategy("demo", "key", "s3cr3t")
    url = await strategy.store(sample_image(), "hassan-elec/projects")

    assert url == "https://res.cloudinary.com/demo/image/upload/v1/hassan-elec/a.png"
    data, options = calls[0]
    assert data == PNG
    assert options["folder"] == "hassan-elec/projects"
    assert options["resource_type"] == "image"
    assert (options["cloud_name"], options["api_key"], options["api_secret"]) == ("demo", "key", "s3cr3t")


@pytest.mark.asyncio
async def test_cloudinary_failure_falls_back_to_local(monkeypatch, tmp_path):
    def failing_upload(file, **options):
        raise cloudinary.exceptions.Error("Invalid Signature")

    monkeypatch.setattr(cloudinary.uploader, "upload", failing_upload)
    resolver = UploadResolver(
        [CloudinaryStrategy("demo", "key", "bad"), LocalStrategy(tmp_path)], folder="hassan-elec"
    )
    url = await resolver.store(sample_image())
    assert url.startswith("/uploads/image-")
