from __future__ import annotations

import io

from PIL import Image, ImageOps, UnidentifiedImageError

from ..core.constants import PHOTO_SIZE_PX, PHOTO_WEBP_QUALITY
from ..core.exceptions import ValidationError


def normalize_photo(data: bytes, *, size: int = PHOTO_SIZE_PX, quality: int = PHOTO_WEBP_QUALITY) -> bytes:
    """Center-crop ("cover") to a size x size square and encode as WEBP."""
    if not data:
        raise ValidationError("missing_file")

    try:
        img = Image.open(io.BytesIO(data))
        img.load()
    except (UnidentifiedImageError, OSError):
        raise ValidationError("invalid_image")

    if img.mode not in ("RGB", "RGBA"):
        img = img.convert("RGBA" if "A" in img.getbands() else "RGB")

    fitted = ImageOps.fit(img, (size, size), method=Image.Resampling.LANCZOS, centering=(0.5, 0.5))

    out = io.BytesIO()
    fitted.save(out, format="WEBP", quality=quality)
    return out.getvalue()
