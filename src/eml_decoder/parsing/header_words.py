"""
RFC 2047 encoded-word decoding for header values (filenames, Content-Id).
"""

import base64
import binascii
import re
from email.errors import HeaderParseError
from email.header import decode_header

# One or more abutting =?charset?encoding?text?= words and nothing else
_ENCODED_WORDS = re.compile(r"(?:=\?[^?\s]+\?[QqBb]\?[^?\s]*\?=)+")
_ENCODED_WORD = re.compile(r"=\?[^?\s]+\?([QqBb])\?([^?\s]*)\?=")

# "=" must start a two-digit hex escape
_BAD_Q_ESCAPE = re.compile(r"=(?![0-9A-Fa-f]{2})")


class EncodedWordError(ValueError):
    """A token is not a decodable encoded word."""


def _check_payload(encoding: str, payload: str) -> None:
    """decode_header skips bad base64 and keeps bad Q escapes; reject both."""
    if encoding in "Bb":
        try:
            base64.b64decode(payload, validate=True)
        except binascii.Error as e:
            raise EncodedWordError(f"invalid base64 word payload {payload!r}") from e
    elif _BAD_Q_ESCAPE.search(payload):
        raise EncodedWordError(f"invalid Q word payload {payload!r}")


def decode_word(token: str) -> str:
    """
    Decode a token made entirely of RFC 2047 encoded words.

    Adjacent words ("=?UTF-8?Q?Hi?==?UTF-8?Q?There?=") are joined without a
    separator.

    Raises:
        EncodedWordError: If the token is plain text or cannot be decoded
    """
    if not _ENCODED_WORDS.fullmatch(token):
        raise EncodedWordError(f"not an encoded word: {token!r}")

    for word in _ENCODED_WORD.finditer(token):
        _check_payload(word.group(1), word.group(2))

    try:
        chunks = decode_header(token)
        return "".join(
            chunk.decode(charset or "us-ascii") if isinstance(chunk, bytes) else chunk
            for chunk, charset in chunks
        )
    except (HeaderParseError, LookupError, UnicodeDecodeError) as e:
        raise EncodedWordError(str(e)) from e


def decode_mime_sentence(value: str) -> str:
    """
    Decode every space-separated token of a header value.

    Tokens that fail to decode are kept literally; all but the first get
    back the space the split removed. Decoded tokens are joined directly.

    Args:
        value: Raw header value

    Returns:
        Decoded string
    """
    result = []
    for token in value.split(" "):
        try:
            word = decode_word(token)
        except EncodedWordError:
            word = token if not result else " " + token
        result.append(word)
    return "".join(result)
