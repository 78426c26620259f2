"""
Byte-to-text conversion for decoded text/plain and text/html bodies.
"""

import codecs
from typing import Optional

import charset_normalizer

# Registered as text encodings but they transform the content
_TRANSFORM_CODECS = frozenset({"unicode_escape", "raw_unicode_escape", "punycode", "idna"})


def _text_codec(charset: str) -> Optional[str]:
    """Codec name for a declared charset, or None when it is not a plain text charset."""
    try:
        info = codecs.lookup(charset)
    except LookupError:
        return None
    if not getattr(info, "_is_text_encoding", True) or info.name.replace("-", "_") in _TRANSFORM_CODECS:
        return None
    return info.name


def decode_text(payload: bytes, charset: Optional[str] = None) -> str:
    """
    Decode body bytes to a string.

    Tries the declared charset first, then UTF-8, then charset-normalizer
    detection. Never raises.

    Args:
        payload: Transfer-decoded body bytes
        charset: charset parameter of the part's Content-Type, if any

    Returns:
        Decoded text
    """
    if not payload:
        return ""

    codec = _text_codec(charset) if charset else None
    if codec:
        try:
            return payload.decode(codec)
        except UnicodeDecodeError:
            pass

    try:
        return payload.decode("utf-8")
    except UnicodeDecodeError:
        pass

    detected = charset_normalizer.from_bytes(payload).best()
    if detected:
        return str(detected)

    # Final fallback
    return payload.decode("utf-8", errors="replace")


def strip_trailing_newline(text: str) -> str:
    """Remove exactly one trailing line break (LF or CRLF)."""
    if text.endswith("\r\n"):
        return text[:-2]
    if text.endswith("\n"):
        return text[:-1]
    return text
