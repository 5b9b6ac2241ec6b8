"""Data URI helpers for user-captured media (images, audio, short video)."""
import base64
import binascii
import re
from dataclasses import dataclass
from typing import Any

from core.errors import InvalidInputError

DATA_URI_PATTERN = re.compile(r"^data:([\w/+.-]+);base64,([A-Za-z0-9+/=]+)$")


@dataclass(frozen=True)
class MediaPart:
    """Decoded media ready to be sent to the model as inline data."""
    mime_type: str
    data: bytes

    def as_inline_data(self) -> dict:
        return {"inline_data": {"mime_type": self.mime_type, "data": self.data}}


def is_valid_data_uri(value: Any) -> bool:
    """Shape check only; not a security decision."""
    if not value or not isinstance(value, str):
        return False
    return DATA_URI_PATTERN.match(value) is not None


def to_data_uri(data: bytes, mime_type: str) -> str:
    encoded = base64.b64encode(data).decode("ascii")
    return f"data:{mime_type or 'application/octet-stream'};base64,{encoded}"


def parse_data_uri(value: str) -> MediaPart:
    """Split a data URI into its MIME type and raw bytes."""
    match = DATA_URI_PATTERN.match(value or "")
    if not match:
        raise InvalidInputError("Media must be a base64 data URI (data:<mimetype>;base64,<data>).")
    mime_type, payload = match.groups()
    try:
        data = base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as e:
        raise InvalidInputError(f"Media is not valid base64: {e}") from e
    return MediaPart(mime_type=mime_type, data=data)


@dataclass(frozen=True)
class UploadedMedia:
    """A file received from a multipart form, already read into memory."""
    content_type: str
    data: bytes
    filename: str = ""

    @property
    def size(self) -> int:
        return len(self.data)

    def to_data_uri(self) -> str:
        return to_data_uri(self.data, self.content_type)
