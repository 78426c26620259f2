"""
Message reader: raw RFC5322 bytes (or a binary stream) to headers + body.
"""

from typing import BinaryIO, Tuple, Union

from ..errors import MalformedMessage, StreamReadError
from .headers import HeaderBlockError, Headers, read_header_block

MessageSource = Union[bytes, bytearray, memoryview, BinaryIO]


def read_source(source: MessageSource) -> bytes:
    """
    Buffer a message source fully in memory.

    Raises:
        StreamReadError: If reading the stream fails
        TypeError: If source is neither bytes-like nor readable
    """
    if isinstance(source, (bytes, bytearray, memoryview)):
        return bytes(source)

    if not hasattr(source, "read"):
        raise TypeError(f"Expected bytes or a binary stream, got {type(source).__name__}")

    try:
        data = source.read()
    except OSError as e:
        raise StreamReadError(f"Failed to read message stream: {e}") from e

    if isinstance(data, str):
        raise TypeError("Message stream must be opened in binary mode")
    return data


def read_message(eml_bytes: bytes) -> Tuple[Headers, bytes]:
    """
    Read the top-level header block of a message.

    Args:
        eml_bytes: Raw .eml bytes

    Returns:
        Tuple of (headers, raw_body)

    Raises:
        MalformedMessage: If the input is empty or the header block is malformed
    """
    if not eml_bytes:
        raise MalformedMessage("Failed to parse .eml: empty input")

    try:
        return read_header_block(eml_bytes)
    except HeaderBlockError as e:
        raise MalformedMessage(f"Failed to parse .eml header: {e}") from e
