"""
Image upload validation and storage.

Uploaded images go through an ordered list of storage strategies: a
configured Cloudinary account, then a configured Vercel Blob store, then the
local upload directory. Each attempt is logged; a remote failure moves on to
the next strategy for the same file and is never retried.
"""

from __future__ import annotations

import asyncio
import io
import logging
import re
import secrets
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

import cloudinary.uploader
import httpx
from fastapi import File, HTTPException, Request, UploadFile, status

from backoffice.core.config import Settings, settings

logger = logging.getLogger(__name__)

ALLOWED_EXTENSIONS = {".jpeg", ".jpg", ".png", ".gif", ".webp"}
ALLOWED_MIME_RE = re.compile(r"jpeg|jpg|png|gif|webp")
MAX_FILES_PER_FIELD = 10


@dataclass(frozen=True)
class ImageUpload:
    """A validated image held in memory."""

    field_name: str
    filename: str
    content_type: str
    data: bytes

    @property
    def extension(self) -> str:
        return Path(self.filename).suffix.lower()


def is_image_url(value: str | None) -> bool:
    """True for non-empty strings starting with http:// or https://."""
    if not isinstance(value, str):
        return False
    stripped = value.strip()
    return bool(stripped) and stripped.startswith(("http://", "https://"))


def _bad_upload(message: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail={"code": "INVALID_UPLOAD", "message": message},
    )


async def validate_image(upload: UploadFile, field_name: str) -> ImageUpload:
    """
    Check extension, MIME type and size of an uploaded file.

    Raises 400 before any handler logic runs.
    """
    filename = upload.filename or ""
    content_type = (upload.content_type or "").lower()
    extension = Path(filename).suffix.lower()

    if extension not in ALLOWED_EXTENSIONS or not ALLOWED_MIME_RE.search(content_type):
        raise _bad_upload("Only image files are allowed!")

    data = await upload.read(settings.MAX_UPLOAD_SIZE + 1)
    if len(data) > settings.MAX_UPLOAD_SIZE:
        raise _bad_upload("File too large")

    return ImageUpload(
        field_name=field_name,
        filename=filename,
        content_type=content_type,
        data=data,
    )


# ---------------------------------------------------------------------------
# Multipart dependencies
# ---------------------------------------------------------------------------

async def image_file(image: UploadFile | None = File(default=None)) -> ImageUpload | None:
    """Optional single ``image`` field."""
    if image is None or not image.filename:
        return None
    return await validate_image(image, "image")


async def image_files(images: list[UploadFile] | None = File(default=None)) -> list[ImageUpload]:
    """Optional repeated ``images`` field, at most ten files."""
    uploads = [upload for upload in images or [] if upload.filename]
    if len(uploads) > MAX_FILES_PER_FIELD:
        raise _bad_upload(f"At most {MAX_FILES_PER_FIELD} images per request")
    return [await validate_image(upload, "images") for upload in uploads]


async def photo_file(photo: UploadFile | None = File(default=None)) -> ImageUpload | None:
    """Optional single ``photo`` field."""
    if photo is None or not photo.filename:
        return None
    return await validate_image(photo, "photo")


# ---------------------------------------------------------------------------
# Storage strategies
# ---------------------------------------------------------------------------

class UploadStrategy(Protocol):
    name: str

    async def store(self, image: ImageUpload, folder: str) -> str | None:
        """Persist the image and return its public URL or path, or None."""
        ...


class CloudinaryStrategy:
    """Upload through the Cloudinary SDK."""

    name = "cloudinary"

    def __init__(self, cloud_name: str, api_key: str, api_secret: str, timeout: float = 30.0) -> None:
        self.cloud_name = cloud_name
        self.api_key = api_key
        self.api_secret = api_secret
        self.timeout = timeout

    def upload_options(self, image: ImageUpload, folder: str) -> dict[str, object]:
        return {
            "folder": folder,
            "resource_type": "image",
            "filename": image.filename,
            "cloud_name": self.cloud_name,
            "api_key": self.api_key,
            "api_secret": self.api_secret,
            "timeout": self.timeout,
        }

    async def store(self, image: ImageUpload, folder: str) -> str | None:
        result = await asyncio.to_thread(
            cloudinary.uploader.upload,
            io.BytesIO(image.data),
            **self.upload_options(image, folder),
        )
        return result.get("secure_url") or None


class BlobStrategy:
    """Public upload to a Vercel Blob store."""

    name = "blob"
    base_url = "https://blob.vercel-storage.com"

    def __init__(self, token: str, timeout: float = 30.0) -> None:
        self.token = token
        self.timeout = timeout

    async def store(self, image: ImageUpload, folder: str) -> str | None:
        ext = image.content_type.split("/")[-1] or "jpg"
        pathname = f"{folder}/{int(time.time() * 1000)}-{secrets.randbelow(10**9)}.{ext}"
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            response = await client.put(
                f"{self.base_url}/{pathname}",
                content=image.data,
                headers={
                    "authorization": f"Bearer {self.token}",
                    "x-api-version": "7",
                    "x-content-type": image.content_type,
                    "x-add-random-suffix": "1",
                },
            )
            response.raise_for_status()
        return response.json().get("url") or None


class LocalStrategy:
    """Write into the upload directory served at ``/uploads``."""

    name = "local"

    def __init__(self, upload_dir: str | Path) -> None:
        self.upload_dir = Path(upload_dir)

    def generate_filename(self, image: ImageUpload) -> str:
        suffix = f"{int(time.time() * 1000)}-{secrets.randbelow(10**9)}"
        return f"{image.field_name}-{suffix}{image.extension}"

    async def store(self, image: ImageUpload, folder: str) -> str | None:
        filename = self.generate_filename(image)
        target = self.upload_dir / filename
        await asyncio.to_thread(self.upload_dir.mkdir, parents=True, exist_ok=True)
        await asyncio.to_thread(target.write_bytes, image.data)
        return f"/uploads/{filename}"


class UploadResolver:
    """Tries each strategy in order until one produces a URL."""

    def __init__(self, strategies: list[UploadStrategy], folder: str) -> None:
        if not strategies:
            raise ValueError("UploadResolver needs at least one strategy")
        self.strategies = strategies
        self.folder = folder

    @classmethod
    def from_settings(cls, config: Settings) -> UploadResolver:
        strategies: list[UploadStrategy] = []
        if config.cloudinary_configured:
            strategies.append(
                CloudinaryStrategy(
                    config.CLOUDINARY_CLOUD_NAME,
                    config.CLOUDINARY_API_KEY,
                    config.CLOUDINARY_API_SECRET,
                )
            )
        if config.blob_configured:
            strategies.append(BlobStrategy(config.BLOB_READ_WRITE_TOKEN))
        strategies.append(LocalStrategy(config.UPLOAD_DIR))
        return cls(strategies, folder=config.CLOUDINARY_FOLDER)

    @property
    def strategy_names(self) -> list[str]:
        return [strategy.name for strategy in self.strategies]

    async def store(self, image: ImageUpload, subfolder: str = "") -> str:
        folder = f"{self.folder}/{subfolder}" if subfolder else self.folder
        for strategy in self.strategies:
            try:
                url = await strategy.store(image, folder)
            except Exception as exc:
                logger.warning(
                    "Upload via %s failed for %s: %s", strategy.name, image.filename, exc
                )
                continue
            if url:
                logger.info("Upload via %s succeeded for %s -> %s", strategy.name, image.filename, url)
                return url
            logger.warning("Upload via %s returned no URL for %s", strategy.name, image.filename)

        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"code": "UPLOAD_FAILED", "message": "Image could not be stored"},
        )


def get_upload_resolver(request: Request) -> UploadResolver:
    """Dependency returning the resolver built at startup."""
    return request.app.state.upload_resolver


async def resolve_image(
    resolver: UploadResolver,
    upload: ImageUpload | None,
    url: str | None = None,
    subfolder: str = "",
) -> str | None:
    """
    Final image reference for one form field.

    A pasted http(s) URL wins over an uploaded file. Returns None when the
    request carried neither.
    """
    if is_image_url(url):
        return url.strip()
    if upload is not None:
        return await resolver.store(upload, subfolder)
    return None
