from __future__ import annotations

import secrets
from datetime import datetime
from typing import Any, Optional

from ..common.calendar import now_utc
from ..common.logger import get_logger
from ..common.validators import require_non_empty
from ..core.constants import PHOTO_CONTENT_TYPE, PHOTO_KEY_PREFIX
from .image import normalize_photo
from .storage import BlobStorage

log = get_logger("photos")


class PhotoService:
    """Use cases: upload a normalized member photo, delete a stored photo.

    Upload and the later member save are independent steps; a photo whose
    member is never saved stays in storage until the client deletes it.
    """

    def __init__(self, storage: BlobStorage):
        self._storage = storage

    @staticmethod
    def new_key(now: Optional[datetime] = None) -> str:
        millis = int((now or now_utc()).timestamp() * 1000)
        return f"{PHOTO_KEY_PREFIX}/{millis}-{secrets.token_hex(6)}.webp"

    def upload_member_photo(self, data: bytes, *, now: Optional[datetime] = None) -> str:
        webp = normalize_photo(data)
        key = self.new_key(now)
        url = self._storage.put(key, webp, PHOTO_CONTENT_TYPE)
        log.info("photo uploaded key=%s bytes=%d", key, len(webp))
        return url

    def delete_photo(self, url: Any) -> None:
        target = require_non_empty(url, "missing_url")
        self._storage.delete(target)
        log.info("photo deleted url=%s", target)
