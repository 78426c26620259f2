# MIME message decoding

from .classifier import (
    ContentKind,
    decode_attachment,
    decode_embedded_file,
    is_attachment,
    part_filename,
)
from .content_type import parse_content_type, parse_media_type
from .eml_parser import parse_eml, parse_eml_bytes, parse_eml_file
from .envelope import read_message
from .header_words import decode_mime_sentence, decode_word
from .headers import Headers
from .multipart import Part, iter_parts
from .transfer import TransferEncoding, decode_content
from .walker import (
    WalkOptions,
    WalkResult,
    parse_multipart_alternative,
    parse_multipart_mixed,
    parse_multipart_related,
)

__all__ = [
    "parse_eml",
    "parse_eml_bytes",
    "parse_eml_file",
    "read_message",
    "parse_content_type",
    "parse_media_type",
    "TransferEncoding",
    "decode_content",
    "decode_word",
    "decode_mime_sentence",
    "ContentKind",
    "part_filename",
    "is_attachment",
    "decode_attachment",
    "decode_embedded_file",
    "Headers",
    "Part",
    "iter_parts",
    "WalkOptions",
    "WalkResult",
    "parse_multipart_alternative",
    "parse_multipart_related",
    "parse_multipart_mixed",
]
