"""Reading script files with encoding fallback.

WHY: Scripts arrive from Word exports, Notepad, Pages and CMS downloads.
Non-English scripts are frequently saved as UTF-16, others as UTF-8 with or
without a BOM. The subtitle core expects already-decoded text, so decoding
(and the "no readable text" failure) is handled here.

HOW: decode_script_bytes() sniffs a byte-order mark first; without one it
tries strict UTF-8 and then strict UTF-16 LE, rejecting a result that
contains NUL characters. load_script() reads the file and delegates
to it.

RULES:
- A UTF-8 or UTF-16 BOM decides the encoding outright
- Empty files decode to "" (the parser then reports an empty script)
- ScriptNotFoundError if the path is not a file
- ScriptDecodeError if no candidate encoding works
"""

from __future__ import annotations

import codecs
import logging
from pathlib import Path

from script_subtitler.errors import ScriptDecodeError, ScriptNotFoundError

logger = logging.getLogger(__name__)

# Tried in order when the data has no byte-order mark.
FALLBACK_ENCODINGS = ("utf-8", "utf-16-le")


def _sniff_bom(data: bytes) -> str | None:
    if data.startswith(codecs.BOM_UTF8):
        return "utf-8-sig"
    if data.startswith(codecs.BOM_UTF16_LE) or data.startswith(codecs.BOM_UTF16_BE):
        return "utf-16"
    return None


def decode_script_bytes(data: bytes) -> str:
    """Decode raw script bytes to text.

    Args:
        data: File content as read from disk or an upload.

    Returns:
        The decoded text, BOM removed.

    Raises:
        ScriptDecodeError: If neither the BOM encoding nor any fallback
            encoding decodes the data.
    """
    if not data:
        return ""

    bom_encoding = _sniff_bom(data)
    candidates = (bom_encoding,) if bom_encoding else FALLBACK_ENCODINGS

    for encoding in candidates:
        try:
            text = data.decode(encoding)
        except UnicodeDecodeError:
            logger.debug("Script is not valid %s", encoding)
            continue
        if bom_encoding is None and "\x00" in text:
            # UTF-16 text without a BOM is often valid UTF-8 full of NULs
            logger.debug("Script decoded as %s contains NUL characters", encoding)
            continue
        logger.debug("Decoded script as %s (%d bytes)", encoding, len(data))
        return text

    raise ScriptDecodeError()


def load_script(path: str | Path) -> str:
    """Read a script file and decode it.

    Raises:
        ScriptNotFoundError: If the file does not exist.
        ScriptDecodeError: If the content cannot be decoded.
    """
    script_path = Path(path)
    if not script_path.is_file():
        raise ScriptNotFoundError(
            "No script file selected or file does not exist: {}".format(script_path)
        )
    return decode_script_bytes(script_path.read_bytes())
