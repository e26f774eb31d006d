"""Payment receipt upload state for a single sign-up attempt."""

import logging
import mimetypes
import os
import re
import time
import uuid
from typing import Optional

from infrastructure.supabase_backend import BackendError, SupabaseBackend
from use_cases.profile_store import Notifier

log = logging.getLogger(__name__)

ALLOWED_EXTENSIONS = (".pdf", ".png", ".jpg", ".jpeg")

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


def safe_filename(filename: str) -> str:
    base = os.path.basename(filename or "").strip()
    return _UNSAFE_CHARS.sub("_", base) or "receipt"


class ReceiptUpload:
    """Keeps at most one uploaded receipt URL; a new upload replaces the old one."""

    def __init__(self, backend: SupabaseBackend, notify: Notifier, bucket: str = "payment_receipts"):
        self.backend = backend
        self.notify = notify
        self.bucket = bucket
        self.attempt_id = uuid.uuid4().hex
        self._url: Optional[str] = None
        self._filename: Optional[str] = None

    @property
    def url(self) -> Optional[str]:
        return self._url

    @property
    def filename(self) -> Optional[str]:
        return self._filename

    @property
    def is_ready(self) -> bool:
        return bool(self._url)

    def clear(self) -> None:
        self._url = None
        self._filename = None

    def upload(self, data: bytes, filename: str, owner_id: Optional[str] = None) -> Optional[str]:
        # A failed attempt must not leave the previous receipt in place.
        self.clear()

        extension = os.path.splitext(filename or "")[1].lower()
        if extension not in ALLOWED_EXTENSIONS:
            self.notify("error", "Upload a PDF, PNG or JPG file")
            return None
        if not data:
            self.notify("error", "The selected file is empty")
            return None

        name = safe_filename(filename)
        path = f"{owner_id or self.attempt_id}/{int(time.time() * 1000)}_{name}"
        content_type = mimetypes.guess_type(name)[0] or "application/octet-stream"

        try:
            url = self.backend.upload_object(self.bucket, path, data, content_type)
        except BackendError as e:
            log.error(f"Error uploading receipt {name}: {e}")
            self.notify("error", str(e) or "Failed to upload file")
            return None

        self._url = url
        self._filename = name
        self.notify("success", "File uploaded successfully!")
        return url
