"""
Content-Transfer-Encoding decoding.
"""

import base64
import binascii
from enum import Enum

from ..errors import InvalidEncoding, UnsupportedEncoding


class TransferEncoding(str, Enum):
    """Transfer encodings the decoder accepts."""

    IDENTITY = ""  # header absent or empty
    SEVEN_BIT = "7bit"
    EIGHT_BIT = "8bit"
    BASE64 = "base64"

    @classmethod
    def from_header(cls, value: str) -> "TransferEncoding":
        """
        Map a Content-Transfer-Encoding value to an encoding.

        Raises:
            UnsupportedEncoding: For any name other than base64, 7bit, 8bit or empty
        """
        name = (value or "").strip()
        try:
            return cls(name.lower())
        except ValueError:
            raise UnsupportedEncoding(name) from None


def decode_base64(data: bytes) -> bytes:
    """
    Decode standard-alphabet base64, ignoring line breaks and blanks.

    Raises:
        InvalidEncoding: If the payload is not valid base64
    """
    compact = data.translate(None, b"\r\n \t")
    try:
        return base64.b64decode(compact, validate=True)
    except binascii.Error as e:
        raise InvalidEncoding(f"Invalid base64 payload: {e}") from e


def decode_content(data: bytes, encoding: str) -> bytes:
    """
    Decode a body according to its Content-Transfer-Encoding header.

    Args:
        data: Raw body bytes
        encoding: Header value (may be empty)

    Returns:
        Decoded bytes; identity encodings return the input unchanged
    """
    if TransferEncoding.from_header(encoding) is TransferEncoding.BASE64:
        return decode_base64(data)
    return data
