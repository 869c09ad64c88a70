"""Supabase Storage-backed image store."""

import secrets
import time
from dataclasses import dataclass

from supabase import Client

from ecoconnect.services.items import ImageStore

_EXTENSIONS = {
    "image/jpeg": "jpg",
    "image/png": "png",
    "image/webp": "webp",
}


@dataclass
class SupabaseImageStore(ImageStore):
    """Stores uploaded images in a Supabase Storage bucket."""

    client: Client
    bucket: str = "item-images"

    def save_image(self, image_bytes: bytes, content_type: str) -> str:
        """Upload image bytes and return the object path."""
        extension = _EXTENSIONS.get(content_type, "jpg")
        path = f"{int(time.time() * 1000)}-{secrets.randbelow(10**9)}.{extension}"
        self.client.storage.from_(self.bucket).upload(
            path=path,
            file=image_bytes,
            file_options={"content-type": content_type},
        )
        return path

    def delete_image(self, image_ref: str) -> None:
        """Remove an uploaded image."""
        self.client.storage.from_(self.bucket).remove([image_ref])
