from __future__ import annotations

from typing import Any, Optional, Protocol
from urllib.parse import unquote, urlparse

from supabase import create_client

from ..core.exceptions import ValidationError


class BlobStorage(Protocol):
    def put(self, key: str, data: bytes, content_type: str) -> str:
        """Store bytes under ``key`` and return their public URL."""

        raise NotImplementedError

    def delete(self, url: str) -> None:
        raise NotImplementedError


class SupabaseBlobStorage(BlobStorage):
    """Public Supabase Storage bucket.

    The client is created on first use so the app can boot without storage
    credentials; uploads then fail with a RuntimeError (logged as a 500).
    """

    def __init__(self, *, url: Optional[str], key: Optional[str], bucket: str, client: Any = None):
        self._url = url
        self._key = key
        self._bucket = bucket
        self._client = client

    def _bucket_api(self):
        if self._client is None:
            if not self._url or not self._key:
                raise RuntimeError("Supabase storage is not configured (SUPABASE_URL / SUPABASE_KEY)")
            self._client = create_client(self._url, self._key)
        return self._client.storage.from_(self._bucket)

    def put(self, key: str, data: bytes, content_type: str) -> str:
        bucket = self._bucket_api()
        bucket.upload(
            path=key,
            file=data,
            file_options={"content-type": content_type, "cache-control": "3600", "upsert": "false"},
        )
        # Some SDK versions append a bare '?' to public URLs.
        return str(bucket.get_public_url(key)).rstrip("?")

    def object_path(self, url: str) -> str:
        """Object path inside the bucket for one of our public URLs."""
        marker = f"/object/public/{self._bucket}/"
        path = urlparse(url).path
        if marker not in path:
            raise ValidationError("invalid_url")
        return unquote(path.split(marker, 1)[1])

    def delete(self, url: str) -> None:
        self._bucket_api().remove([self.object_path(url)])
