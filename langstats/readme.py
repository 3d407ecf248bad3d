"""
Splice rendered statistics between markers in a text document.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Union

from charset_normalizer import from_bytes

from .rules import END_MARKER, START_MARKER

logger = logging.getLogger(__name__)

UTF8_BOM = b"\xef\xbb\xbf"


class MarkerNotFound(ValueError):
    pass


def splice(
    document: str,
    content: str,
    start: str = START_MARKER,
    end: str = END_MARKER,
) -> str:
    """
    Put content between start and end.

    Rules:
    - Missing start marker is an error.
    - Both markers present: everything between them is replaced.
    - Only the start marker present: content and the end marker are inserted
      right after it.
    """
    start_index = document.find(start)
    if start_index == -1:
        raise MarkerNotFound(f'Start marker "{start}" not found')

    insert_at = start_index + len(start)
    end_index = document.find(end, insert_at)

    if end_index == -1:
        return document[:insert_at] + "\n" + content + "\n" + end + document[insert_at:]
    return document[:insert_at] + "\n" + content + "\n" + document[end_index:]


def decode_document(raw: bytes) -> tuple[str, str]:
    """Return (text, encoding) using charset-normalizer's best guess."""
    if raw.startswith(UTF8_BOM):
        return raw.decode("utf-8-sig"), "utf-8-sig"
    if not raw:
        return "", "utf-8"

    match = from_bytes(raw).best()
    encoding = match.encoding if match is not None else "utf-8"
    try:
        return raw.decode(encoding), encoding
    except (LookupError, UnicodeDecodeError):
        logger.warning("Could not decode document as %s, falling back to utf-8", encoding)
        return raw.decode("utf-8", errors="replace"), "utf-8"


def update_document(
    path: Union[str, Path],
    content: str,
    start: str = START_MARKER,
    end: str = END_MARKER,
) -> bool:
    """Patch the file at path in place. Returns True if its content changed."""
    path = Path(path)
    raw = path.read_bytes()
    text, encoding = decode_document(raw)

    try:
        updated = splice(text, content, start, end)
    except MarkerNotFound as exc:
        raise MarkerNotFound(f"{exc} in {path}") from None

    if updated == text:
        logger.info("%s already up to date", path)
        return False

    # output is always UTF-8, keeping a BOM only if the input had one
    out_encoding = "utf-8-sig" if encoding == "utf-8-sig" else "utf-8"
    path.write_bytes(updated.encode(out_encoding))
    logger.info("Successfully updated %s with language statistics", path)
    return True
