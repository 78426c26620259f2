"""
Boundary tokenizer: splits a multipart body into its sibling parts.

Parts are produced lazily, one per delimiter, so a corrupt tail only fails
once the walker reaches it. Quoted-printable parts are decoded here and lose
their Content-Transfer-Encoding header.
"""

import io
import quopri
from dataclasses import dataclass
from typing import Iterator, List, Optional

from ..errors import TokenizerError
from .headers import HeaderBlockError, Headers, read_header_block

_LWSP = b" \t\r\n"

_DELIMITER = "delimiter"
_CLOSE_DELIMITER = "close-delimiter"


@dataclass
class Part:
    """One body part of a multipart container."""

    headers: Headers
    body: bytes


def _classify_line(line: bytes, dash_boundary: bytes) -> Optional[str]:
    if not line.startswith(dash_boundary):
        return None
    rest = line[len(dash_boundary):]
    if rest.startswith(b"--") and not rest[2:].strip(_LWSP):
        return _CLOSE_DELIMITER
    if not rest.strip(_LWSP):
        return _DELIMITER
    return None


def _build_part(lines: List[bytes]) -> Part:
    content = b"".join(lines)
    # The line break before a delimiter belongs to the delimiter
    if content.endswith(b"\r\n"):
        content = content[:-2]
    elif content.endswith(b"\n"):
        content = content[:-1]

    try:
        headers, body = read_header_block(content)
    except HeaderBlockError as e:
        raise TokenizerError(f"multipart: malformed part header: {e}") from e

    if headers.get("Content-Transfer-Encoding").strip().lower() == "quoted-printable":
        headers.remove("Content-Transfer-Encoding")
        body = quopri.decodestring(body)

    return Part(headers=headers, body=body)


def iter_parts(body: bytes, boundary: str) -> Iterator[Part]:
    """
    Iterate over the parts of a multipart body.

    Args:
        body: Raw multipart body
        boundary: The container's boundary parameter

    Yields:
        Part for each delimited section, in document order

    Raises:
        TokenizerError: If the boundary is empty, the body ends before the
            closing delimiter, or a part's header block is malformed
    """
    if not boundary:
        raise TokenizerError("multipart: empty boundary")

    dash_boundary = b"--" + boundary.encode("utf-8")
    stream = io.BytesIO(body)
    # None while still in the preamble
    lines: Optional[List[bytes]] = None

    while True:
        line = stream.readline()
        if not line:
            if lines is None:
                raise TokenizerError(f"multipart: no delimiter for boundary {boundary!r}")
            raise TokenizerError("multipart: body ended before the closing delimiter")

        kind = _classify_line(line, dash_boundary)
        if kind is None:
            if lines is not None:
                lines.append(line)
            continue

        if lines is not None:
            yield _build_part(lines)
        if kind == _CLOSE_DELIMITER:
            return
        lines = []
