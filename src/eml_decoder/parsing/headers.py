"""
Header map and header-block reader.

Shared by the message reader (top-level envelope) and the multipart tokenizer
(per-part headers). Names are stored in canonical form ("content-id" becomes
"Content-Id"), values are unfolded and trimmed but otherwise left raw.
"""

import re
from email.parser import BytesHeaderParser
from email.policy import compat32
from typing import Dict, Iterable, List, Optional, Tuple

# Line break plus the folding whitespace around it
_FOLD = re.compile(r"[ \t]*(?:\r\n|\r|\n)[ \t]*")


class HeaderBlockError(ValueError):
    """A header block line is neither a field nor a continuation."""


def canonical_header_name(name: str) -> str:
    """Canonical MIME form of a header name: each dash-separated word capitalized."""
    return "-".join(word[:1].upper() + word[1:].lower() for word in name.split("-"))


class Headers:
    """Ordered, case-insensitive multimap of header values."""

    def __init__(self, items: Optional[Iterable[Tuple[str, str]]] = None):
        self._values: Dict[str, List[str]] = {}
        for name, value in items or ():
            self.add(name, value)

    def add(self, name: str, value: str) -> None:
        self._values.setdefault(canonical_header_name(name), []).append(value)

    def get(self, name: str, default: str = "") -> str:
        """First value of the header, or default when absent."""
        values = self._values.get(canonical_header_name(name))
        return values[0] if values else default

    def get_all(self, name: str) -> List[str]:
        return list(self._values.get(canonical_header_name(name), []))

    def remove(self, name: str) -> None:
        self._values.pop(canonical_header_name(name), None)

    def to_dict(self) -> Dict[str, List[str]]:
        return {name: list(values) for name, values in self._values.items()}

    def __repr__(self) -> str:
        return f"Headers({self._values!r})"


def _unfold(value: str) -> str:
    raw = _FOLD.sub(" ", value).strip()
    # The parser keeps non-ASCII bytes as surrogate escapes
    return raw.encode("ascii", "surrogateescape").decode("utf-8", errors="replace")


def read_header_block(data: bytes) -> Tuple[Headers, bytes]:
    """
    Split raw bytes into a header map and the bytes following the header block.

    The block ends at the first empty line (CRLF or LF) or at end of data.
    Folded lines are joined with a single space.

    Args:
        data: Raw entity bytes (message or multipart part)

    Returns:
        Tuple of (headers, body_bytes)

    Raises:
        HeaderBlockError: On a leading continuation line or a line without a field name
    """
    message = BytesHeaderParser(policy=compat32).parsebytes(data)
    if message.defects:
        defect = message.defects[0]
        raise HeaderBlockError(f"malformed header block: {type(defect).__name__} {defect}".strip())

    headers = Headers((name, _unfold(value)) for name, value in message.raw_items())

    # Without a transfer encoding, get_payload(decode=True) returns the raw body bytes
    del message["Content-Transfer-Encoding"]
    return headers, message.get_payload(decode=True) or b""
