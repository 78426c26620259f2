"""
Content-kind dispatch and leaf classification.

A leaf is an attachment when it declares a filename; unnamed leaves under
multipart/related or multipart/alternative become embedded files.
"""

import posixpath
from enum import Enum
from typing import Dict

from ..errors import MalformedContentType
from ..models.email import Attachment, EmbeddedFile
from .content_type import parse_media_type
from .header_words import decode_mime_sentence
from .headers import Headers
from .multipart import Part
from .transfer import decode_content


class ContentKind(Enum):
    """Closed set of content types the walker dispatches on."""

    TEXT_PLAIN = "text/plain"
    TEXT_HTML = "text/html"
    MULTIPART_MIXED = "multipart/mixed"
    MULTIPART_ALTERNATIVE = "multipart/alternative"
    MULTIPART_RELATED = "multipart/related"
    OTHER = "other"

    @property
    def is_container(self) -> bool:
        return self in (
            ContentKind.MULTIPART_MIXED,
            ContentKind.MULTIPART_ALTERNATIVE,
            ContentKind.MULTIPART_RELATED,
        )

    @classmethod
    def resolve(cls, media_type: str, params: Dict[str, str]) -> "ContentKind":
        """Kind for a resolved media type; containers without a boundary are OTHER."""
        try:
            kind = cls(media_type)
        except ValueError:
            return cls.OTHER
        if kind.is_container and not params.get("boundary"):
            return cls.OTHER
        return kind


def _base_name(filename: str) -> str:
    return posixpath.basename(filename.rstrip("/")) or filename


def part_filename(headers: Headers, params: Dict[str, str]) -> str:
    """
    Filename declared by a part, or "" when none.

    Looks at the Content-Disposition filename parameter first, then the
    Content-Type name and filename parameters. A malformed
    Content-Disposition is treated as declaring nothing.
    """
    disposition = headers.get("Content-Disposition")
    if disposition:
        try:
            _, disposition_params = parse_media_type(disposition)
        except MalformedContentType:
            disposition_params = {}
        filename = disposition_params.get("filename", "")
        if filename:
            return _base_name(filename)

    filename = params.get("name") or params.get("filename") or ""
    return _base_name(filename) if filename else ""


def is_attachment(headers: Headers, params: Dict[str, str]) -> bool:
    """Whether a leaf declares a filename."""
    return part_filename(headers, params) != ""


def decode_attachment(part: Part, media_type: str, params: Dict[str, str]) -> Attachment:
    """
    Build an Attachment from a named leaf.

    Args:
        part: The leaf part
        media_type: Resolved media type (used when Content-Type is absent)
        params: Resolved Content-Type parameters

    Returns:
        Attachment with decoded filename and content
    """
    filename = decode_mime_sentence(part_filename(part.headers, params))
    data = decode_content(part.body, part.headers.get("Content-Transfer-Encoding"))
    content_type = part.headers.get("Content-Type").split(";")[0].strip() or media_type

    return Attachment(filename=filename, content_type=content_type, data=data)


def decode_embedded_file(part: Part, params: Dict[str, str]) -> EmbeddedFile:
    """
    Build an EmbeddedFile from a leaf under related/alternative.

    Args:
        part: The leaf part
        params: Resolved Content-Type parameters

    Returns:
        EmbeddedFile keyed by its Content-Id
    """
    cid = decode_mime_sentence(part.headers.get("Content-Id")).strip("<>")
    data = decode_content(part.body, part.headers.get("Content-Transfer-Encoding"))
    filename = part_filename(part.headers, params)

    return EmbeddedFile(
        cid=cid,
        filename=decode_mime_sentence(filename) if filename else None,
        content_type=part.headers.get("Content-Type"),
        data=data,
    )
