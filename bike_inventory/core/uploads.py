# bike_inventory/core/uploads.py

"""
Image upload dependency.

Each image resource declares one ``ImageUpload`` for its file field. The
dependency accepts at most one file on that field, enforces the size and
type limits, writes the object to storage and hands back the stored
location together with a fresh presigned URL. Requests without a file
resolve to ``None``.

Object keys: ``{collection}/{prefix}-{sanitized name}-{timestamp ms}-{filename}``.
"""

import logging
import os
import re
import time
from typing import List, Optional

from fastapi import Depends, Request
from starlette.datastructures import UploadFile

from bike_inventory.core.config import settings
from bike_inventory.core.dependencies import FORM_CONTENT_TYPES, get_storage
from bike_inventory.core.exceptions import BadRequestError
from bike_inventory.core.storage import ObjectStorage, UploadedObject

logger = logging.getLogger(__name__)

ALLOWED_EXTENSIONS = {".png", ".jpg", ".jpeg"}
ALLOWED_CONTENT_TYPES = {"image/png", "image/jpeg", "image/jpg"}
TYPE_ERROR = "Only PNG, JPEG, and JPG files are allowed"

_NON_ALNUM = re.compile(r"[^a-z0-9]+")


def sanitize_name(name: Optional[str]) -> str:
    """Lowercase, non-alphanumeric runs to a single '-', edges trimmed."""
    if not name:
        return "unknown"
    cleaned = _NON_ALNUM.sub("-", str(name).lower()).strip("-")
    return cleaned or "unknown"


def build_object_key(collection: str, prefix: str, name: Optional[str], filename: str) -> str:
    timestamp_ms = int(time.time() * 1000)
    return f"{collection}/{prefix}-{sanitize_name(name)}-{timestamp_ms}-{os.path.basename(filename)}"


def is_allowed_image(filename: str, content_type: Optional[str]) -> bool:
    extension = os.path.splitext(filename)[1].lower()
    return extension in ALLOWED_EXTENSIONS and (content_type or "").lower() in ALLOWED_CONTENT_TYPES


class ImageUpload:
    """
    Dependency handling the single image file of one resource.

    Args:
        field: form field carrying the file (``logo``, ``picture``, ...).
        collection: key prefix directory (``brands``, ``users``, ...).
        prefix: file name prefix (``brand``, ``user``, ...).
        name_field: form field whose value is embedded in the key.
        label: name used in messages; defaults to the field with spaces.
    """

    def __init__(
        self,
        *,
        field: str,
        collection: str,
        prefix: str,
        name_field: str,
        label: Optional[str] = None,
        max_size: Optional[int] = None,
    ):
        self.field = field
        self.label = label or field.replace("_", " ")
        self.collection = collection
        self.prefix = prefix
        self.name_field = name_field
        self.max_size = max_size

    async def __call__(
        self,
        request: Request,
        storage: ObjectStorage = Depends(get_storage),
    ) -> Optional[UploadedObject]:
        if not request.headers.get("content-type", "").startswith(FORM_CONTENT_TYPES):
            return None
        form = await request.form()

        # 1. exactly one file, and only on the declared field
        files: List[UploadFile] = []
        for key, value in form.multi_items():
            if not isinstance(value, UploadFile):
                continue
            if key != self.field:
                raise BadRequestError(f"Unexpected file field '{key}'")
            # browsers send an empty part when no file was picked
            if not value.filename:
                continue
            files.append(value)
        if len(files) > 1:
            raise BadRequestError(f"Only one {self.label} file is allowed")
        if not files:
            return None
        file = files[0]

        # 2. type
        if not is_allowed_image(file.filename, file.content_type):
            raise BadRequestError(TYPE_ERROR)

        # 3. size
        max_size = self.max_size or settings.MAX_UPLOAD_SIZE
        body = await file.read()
        if len(body) > max_size:
            raise BadRequestError("File too large")

        # 4. store, then mint the link handed back to the client
        name = form.get(self.name_field)
        key = build_object_key(self.collection, self.prefix, name if isinstance(name, str) else None, file.filename)
        location = await storage.upload(key, body, file.content_type)
        upload = UploadedObject(
            key=key,
            location=location,
            presigned_url="",
            content_type=file.content_type,
            size=len(body),
        )
        async with storage.compensating(upload):
            upload.presigned_url = await storage.presign(key)
        return upload
