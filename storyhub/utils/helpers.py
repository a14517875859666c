import mimetypes
import os
from datetime import datetime, timezone
from typing import Optional, Tuple

MAX_PAGE_SIZE = 100
INT64_MAX = 2**63 - 1
# keeps (page - 1) * page_size inside a signed 64-bit SQL OFFSET
MAX_PAGE = INT64_MAX // MAX_PAGE_SIZE

EXTENSION_CONTENT_TYPES = {
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "png": "image/png",
    "gif": "image/gif",
    "webp": "image/webp",
    "mp4": "video/mp4",
    "webm": "video/webm",
    "mov": "video/quicktime",
    "mp3": "audio/mpeg",
    "wav": "audio/wav",
    "ogg": "audio/ogg",
    "pdf": "application/pdf",
}


def utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


def clamp_pagination(
    page: Optional[int],
    page_size: Optional[int],
    default_size: int,
    max_size: int = MAX_PAGE_SIZE,
) -> Tuple[int, int]:
    page = min(page, MAX_PAGE) if page is not None and page >= 1 else 1
    if page_size is None or page_size < 1:
        page_size = default_size
    return page, min(page_size, max_size)


def page_offset(page: int, page_size: int) -> int:
    return (page - 1) * page_size


def infer_content_type(filename: str) -> str:
    ext = filename.rsplit(".", 1)[-1].lower() if "." in filename else ""
    if ext in EXTENSION_CONTENT_TYPES:
        return EXTENSION_CONTENT_TYPES[ext]
    guessed, _ = mimetypes.guess_type(filename)
    return guessed or "application/octet-stream"


def split_filename(filename: str) -> Tuple[str, str]:
    base = os.path.basename(filename or "")
    stem, ext = os.path.splitext(base)
    return stem or "file", ext.lower()


def parse_int(value: Optional[str]) -> Optional[int]:
    """Lenient query-string integer: anything unparsable counts as absent."""
    if value is None:
        return None
    try:
        number = int(value.strip())
    except ValueError:
        return None
    if not -INT64_MAX - 1 <= number <= INT64_MAX:
        return None
    return number
