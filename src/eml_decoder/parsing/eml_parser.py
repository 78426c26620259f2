"""
Email parser for .eml files (RFC5322/MIME format).

Entry points turning raw message bytes into an Email. Each call is
independent: nothing is cached between calls and the first decoding error
aborts the parse without a partial result.
"""

from typing import Optional

import structlog

from ..models.email import Email
from .classifier import ContentKind
from .content_type import parse_content_type
from .envelope import MessageSource, read_message, read_source
from .text import decode_text, strip_trailing_newline
from .transfer import decode_content
from .walker import (
    WalkOptions,
    WalkResult,
    parse_multipart_alternative,
    parse_multipart_mixed,
    parse_multipart_related,
)

logger = structlog.get_logger(__name__)

_WALKERS = {
    ContentKind.MULTIPART_MIXED: parse_multipart_mixed,
    ContentKind.MULTIPART_ALTERNATIVE: parse_multipart_alternative,
    ContentKind.MULTIPART_RELATED: parse_multipart_related,
}


def parse_eml_bytes(eml_bytes: bytes, options: Optional[WalkOptions] = None) -> Email:
    """
    Decode raw .eml bytes into an Email.

    Args:
        eml_bytes: Raw .eml file bytes
        options: Walk options (defaults from settings)

    Returns:
        Decoded Email

    Raises:
        MailDecodeError: Any subclass, on the first decoding failure
    """
    headers, body = read_message(eml_bytes)
    raw_content_type = headers.get("Content-Type")
    media_type, params = parse_content_type(raw_content_type)
    kind = ContentKind.resolve(media_type, params)

    result = WalkResult()
    content = None

    if kind in _WALKERS:
        walker = _WALKERS[kind]
        result = walker(body, params["boundary"], options or WalkOptions.from_settings())
    elif kind is ContentKind.TEXT_PLAIN:
        result.text_parts.append(strip_trailing_newline(decode_text(body, params.get("charset"))))
    elif kind is ContentKind.TEXT_HTML:
        result.html_parts.append(strip_trailing_newline(decode_text(body, params.get("charset"))))
    else:
        content = decode_content(body, headers.get("Content-Transfer-Encoding"))

    email = Email(
        headers=headers.to_dict(),
        content_type=raw_content_type,
        content=content,
        text_body=result.text_body,
        html_body=result.html_body,
        attachments=result.attachments,
        embedded_files=result.embedded_files,
    )

    logger.debug(
        "message_decoded",
        content_type=media_type,
        text_length=len(email.text_body),
        html_length=len(email.html_body),
        attachments_count=len(email.attachments),
        embedded_files_count=len(email.embedded_files),
    )
    return email


def parse_eml(source: MessageSource, options: Optional[WalkOptions] = None) -> Email:
    """
    Decode a message given as bytes or a binary stream.

    Raises:
        StreamReadError: If reading the stream fails
        MailDecodeError: Any other subclass, on the first decoding failure
    """
    return parse_eml_bytes(read_source(source), options)


def parse_eml_file(eml_path: str, options: Optional[WalkOptions] = None) -> Email:
    """
    Decode a .eml file from disk.

    Args:
        eml_path: Path to .eml file
        options: Walk options (defaults from settings)

    Returns:
        Decoded Email

    Raises:
        FileNotFoundError: If file doesn't exist
        MailDecodeError: On decoding failures
    """
    with open(eml_path, "rb") as f:
        eml_bytes = f.read()
    return parse_eml_bytes(eml_bytes, options)
