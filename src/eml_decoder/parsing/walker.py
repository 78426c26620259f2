"""
Recursive multipart walker.

Walks a MIME tree depth-first, collecting text/plain and text/html bodies in
document order, attachments, and embedded (inline) files.

multipart/alternative and multipart/related share one implementation: each
one recurses into the other and treats every other leaf as an embedded file.
multipart/mixed recurses into both and classifies its own leaves as
attachments or text bodies.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

import structlog

from ..config import settings
from ..errors import NestingTooDeep
from ..models.email import Attachment, EmbeddedFile
from .classifier import ContentKind, decode_attachment, decode_embedded_file, is_attachment
from .content_type import parse_content_type
from .multipart import Part, iter_parts
from .text import decode_text, strip_trailing_newline
from .transfer import decode_content

logger = structlog.get_logger(__name__)

_NESTED_CONTAINER = {
    ContentKind.MULTIPART_ALTERNATIVE: ContentKind.MULTIPART_RELATED,
    ContentKind.MULTIPART_RELATED: ContentKind.MULTIPART_ALTERNATIVE,
}


@dataclass(frozen=True)
class WalkOptions:
    """Knobs for a single walk."""

    max_nesting_depth: int = 32
    mixed_nested_body_mode: str = "replace"

    @classmethod
    def from_settings(cls) -> "WalkOptions":
        return cls(
            max_nesting_depth=settings.max_nesting_depth,
            mixed_nested_body_mode=settings.mixed_nested_body_mode,
        )


@dataclass
class WalkResult:
    """Accumulator for one container; bodies are kept as ordered chunks."""

    text_parts: List[str] = field(default_factory=list)
    html_parts: List[str] = field(default_factory=list)
    attachments: List[Attachment] = field(default_factory=list)
    embedded_files: List[EmbeddedFile] = field(default_factory=list)

    @property
    def text_body(self) -> str:
        return "".join(self.text_parts)

    @property
    def html_body(self) -> str:
        return "".join(self.html_parts)

    def merge(self, other: "WalkResult") -> None:
        self.text_parts.extend(other.text_parts)
        self.html_parts.extend(other.html_parts)
        self.attachments.extend(other.attachments)
        self.embedded_files.extend(other.embedded_files)

    def replace_bodies(self, other: "WalkResult") -> None:
        """Take other's text/html in place of ours, keep accumulating files."""
        self.text_parts = list(other.text_parts)
        self.html_parts = list(other.html_parts)
        self.attachments.extend(other.attachments)
        self.embedded_files.extend(other.embedded_files)


def _check_depth(depth: int, options: WalkOptions) -> None:
    if depth > options.max_nesting_depth:
        raise NestingTooDeep(options.max_nesting_depth)


def _read_text_part(part: Part, params: Dict[str, str]) -> str:
    payload = decode_content(part.body, part.headers.get("Content-Transfer-Encoding"))
    return strip_trailing_newline(decode_text(payload, params.get("charset")))


def _walk_embedding_container(
    body: bytes,
    boundary: str,
    container: ContentKind,
    options: WalkOptions,
    depth: int,
) -> WalkResult:
    _check_depth(depth, options)
    nested_kind = _NESTED_CONTAINER[container]
    result = WalkResult()

    for part in iter_parts(body, boundary):
        media_type, params = parse_content_type(part.headers.get("Content-Type"))
        kind = ContentKind.resolve(media_type, params)

        if kind is ContentKind.TEXT_PLAIN:
            result.text_parts.append(_read_text_part(part, params))
        elif kind is ContentKind.TEXT_HTML:
            result.html_parts.append(_read_text_part(part, params))
        elif kind is nested_kind:
            logger.debug("entering_container", content_type=media_type, depth=depth + 1)
            result.merge(
                _walk_embedding_container(
                    part.body, params["boundary"], nested_kind, options, depth + 1
                )
            )
        else:
            result.embedded_files.append(decode_embedded_file(part, params))

    return result


def parse_multipart_alternative(
    body: bytes,
    boundary: str,
    options: Optional[WalkOptions] = None,
    depth: int = 1,
) -> WalkResult:
    """
    Walk a multipart/alternative body.

    text/plain and text/html parts are appended to the bodies, a nested
    multipart/related is walked and merged, anything else becomes an
    embedded file.

    Args:
        body: Raw container body
        boundary: Container boundary parameter
        options: Walk options (defaults from settings)
        depth: Nesting level of this container (top level is 1)

    Returns:
        WalkResult with text, html and embedded files (never attachments)
    """
    return _walk_embedding_container(
        body,
        boundary,
        ContentKind.MULTIPART_ALTERNATIVE,
        options or WalkOptions.from_settings(),
        depth,
    )


def parse_multipart_related(
    body: bytes,
    boundary: str,
    options: Optional[WalkOptions] = None,
    depth: int = 1,
) -> WalkResult:
    """
    Walk a multipart/related body.

    Same as parse_multipart_alternative except that the nested container
    walked and merged is multipart/alternative.
    """
    return _walk_embedding_container(
        body,
        boundary,
        ContentKind.MULTIPART_RELATED,
        options or WalkOptions.from_settings(),
        depth,
    )


def parse_multipart_mixed(
    body: bytes,
    boundary: str,
    options: Optional[WalkOptions] = None,
    depth: int = 1,
) -> WalkResult:
    """
    Walk a multipart/mixed body.

    - multipart/alternative and multipart/related children are walked; their
      text/html replace the bodies collected so far (or are appended when
      mixed_nested_body_mode is "merge") and their embedded files are kept.
    - Named leaves, text parts included, become attachments.
    - Unnamed text/plain and text/html leaves are appended to the bodies.
    - Any other unnamed leaf is decoded and dropped.

    Args:
        body: Raw container body
        boundary: Container boundary parameter
        options: Walk options (defaults from settings)
        depth: Nesting level of this container (top level is 1)

    Returns:
        WalkResult with text, html, attachments and embedded files
    """
    options = options or WalkOptions.from_settings()
    _check_depth(depth, options)
    result = WalkResult()

    for part in iter_parts(body, boundary):
        media_type, params = parse_content_type(part.headers.get("Content-Type"))
        kind = ContentKind.resolve(media_type, params)

        if kind in _NESTED_CONTAINER:
            logger.debug("entering_container", content_type=media_type, depth=depth + 1)
            nested = _walk_embedding_container(
                part.body, params["boundary"], kind, options, depth + 1
            )
            if options.mixed_nested_body_mode == "merge":
                result.merge(nested)
            else:
                result.replace_bodies(nested)
        elif is_attachment(part.headers, params):
            result.attachments.append(decode_attachment(part, media_type, params))
        elif kind is ContentKind.TEXT_PLAIN:
            result.text_parts.append(_read_text_part(part, params))
        elif kind is ContentKind.TEXT_HTML:
            result.html_parts.append(_read_text_part(part, params))
        else:
            decode_content(part.body, part.headers.get("Content-Transfer-Encoding"))
            logger.debug("part_dropped", content_type=media_type, depth=depth)

    return result
