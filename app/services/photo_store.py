# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Clarity - Mood Journal project.
# Licensed under the MIT License - see the LICENSE file for details.

import logging
import os
import secrets
import time

from app.errors import ValidationError

logger = logging.getLogger(__name__)


class LocalPhotoStore:
    """
    Keeps uploaded mood photos on local disk.
    Returns a reference of the form ``uploads/<file>`` which is served by the
    static mount in app.main.
    """

    def __init__(self, upload_dir: str, max_bytes: int = 10 * 1024 * 1024, public_prefix: str = "uploads"):
        self.upload_dir = upload_dir
        self.max_bytes = max_bytes
        self.public_prefix = public_prefix.strip("/")
        os.makedirs(self.upload_dir, exist_ok=True)

    def save(self, filename: str, content_type: str, data: bytes) -> str:
        if not (content_type or "").startswith("image/"):
            raise ValidationError("Only image files are allowed", field="photo")
        if len(data) > self.max_bytes:
            raise ValidationError(f"Photo exceeds the {self.max_bytes // (1024 * 1024)}MB limit", field="photo")

        ext = os.path.splitext(filename or "")[1].lower()
        name = f"mood-{int(time.time() * 1000)}-{secrets.randbelow(10**9)}{ext}"
        with open(os.path.join(self.upload_dir, name), "wb") as f:
            f.write(data)

        logger.info(f"📷 Stored photo {name} ({len(data)} bytes)")
        return f"{self.public_prefix}/{name}"

    def delete(self, ref: str) -> None:
        """Remove a photo saved by this store. Unknown refs are ignored."""
        prefix = f"{self.public_prefix}/"
        if not ref or not ref.startswith(prefix):
            return
        name = os.path.basename(ref[len(prefix):])
        path = os.path.join(self.upload_dir, name)
        try:
            os.remove(path)
        except FileNotFoundError:
            return
        logger.info(f"🗑️ Removed orphaned photo {name}")
