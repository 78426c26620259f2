"""
eml_decoder - decode RFC5322/MIME messages into text, HTML, attachments and
embedded files.
"""

from .errors import (
    InvalidEncoding,
    MailDecodeError,
    MalformedContentType,
    MalformedMessage,
    NestingTooDeep,
    StreamReadError,
    TokenizerError,
    UnsupportedEncoding,
)
from .models import Attachment, Email, EmbeddedFile
from .parsing import parse_eml, parse_eml_bytes, parse_eml_file
from .version import DECODER_VERSION

__all__ = [
    "parse_eml",
    "parse_eml_bytes",
    "parse_eml_file",
    "Email",
    "Attachment",
    "EmbeddedFile",
    "MailDecodeError",
    "MalformedMessage",
    "MalformedContentType",
    "UnsupportedEncoding",
    "InvalidEncoding",
    "TokenizerError",
    "StreamReadError",
    "NestingTooDeep",
    "DECODER_VERSION",
]
