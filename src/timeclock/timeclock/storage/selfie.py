from __future__ import annotations

import base64
import binascii
import io
import re

from PIL import Image, UnidentifiedImageError

from ..core.exceptions import ValidationError

_DATA_URL_PREFIX = re.compile(r"^data:image/\w+;base64,")


def decode_selfie(payload: str) -> bytes:
    """Decode a base64 selfie (optionally a data URL) and check it is an image."""
    if not payload or not isinstance(payload, str):
        raise ValidationError("Selfie is required")

    raw = _DATA_URL_PREFIX.sub("", payload.strip())
    try:
        data = base64.b64decode(raw, validate=True)
    except (binascii.Error, ValueError):
        raise ValidationError("Selfie is not valid base64")

    try:
        with Image.open(io.BytesIO(data)) as img:
            img.verify()
    except (UnidentifiedImageError, OSError, SyntaxError):
        raise ValidationError("Selfie is not a valid image")
    return data
