"""
Media-type parsing for Content-Type and Content-Disposition values.

Implements the RFC 2045 grammar (type/subtype followed by ;-separated
parameters with token or quoted-string values) and the RFC 2231 extensions
for charset-tagged and continued parameter values.
"""

from email.utils import collapse_rfc2231_value, decode_params, quote, unquote
from typing import Dict, List, Optional, Tuple

from ..errors import MalformedContentType

DEFAULT_CONTENT_TYPE = "text/plain"

_TSPECIALS = frozenset('()<>@,;:\\"/[]?=')


def _is_token_char(char: str) -> bool:
    return " " < char < "\x7f" and char not in _TSPECIALS


def _is_token(value: str) -> bool:
    return bool(value) and all(_is_token_char(c) for c in value)


def _consume_token(value: str) -> Tuple[str, str]:
    end = 0
    while end < len(value) and _is_token_char(value[end]):
        end += 1
    return value[:end], value[end:]


def _consume_value(value: str) -> Tuple[Optional[str], str]:
    """Consume a token or quoted-string; None when neither is present."""
    if not value.startswith('"'):
        token, rest = _consume_token(value)
        return (token or None), rest

    chars = []
    i = 1
    while i < len(value):
        char = value[i]
        if char == '"':
            return "".join(chars), value[i + 1:]
        if char == "\\" and i + 1 < len(value):
            i += 1
            char = value[i]
        elif char in "\r\n":
            break
        chars.append(char)
        i += 1
    # Unterminated quoted-string
    return None, value


def _consume_param(value: str) -> Tuple[str, str, str]:
    """Consume '; key=value'. Returns ("", "", value) when nothing matches."""
    rest = value.lstrip()
    if not rest.startswith(";"):
        return "", "", value
    rest = rest[1:].lstrip()

    key, rest = _consume_token(rest)
    if not key:
        return "", "", value

    rest = rest.lstrip()
    if not rest.startswith("="):
        return "", "", value
    rest = rest[1:].lstrip()

    param_value, rest = _consume_value(rest)
    if param_value is None:
        return "", "", value
    return key.lower(), param_value, rest


def _decode_parameters(raw_params: List[Tuple[str, str]]) -> Dict[str, str]:
    """Reassemble RFC 2231 extended and continued parameters."""
    # A single "name*" value takes precedence over numbered "name*N" pieces
    single = {key[:-1] for key, _ in raw_params if key.endswith("*") and key.count("*") == 1}
    kept = [
        (key, param_value)
        for key, param_value in raw_params
        if not (key.partition("*")[0] in single and key.partition("*")[2])
    ]

    # decode_params unquotes every value and passes its first entry through
    decoded = decode_params([("", "")] + [(key, f'"{quote(v)}"') for key, v in kept])

    params: Dict[str, str] = {}
    for name, param_value in decoded[1:]:
        if isinstance(param_value, tuple):
            charset, language, text = param_value
            param_value = (charset, language, unquote(text))
        params[name] = collapse_rfc2231_value(param_value)
    return params


def parse_media_type(value: str) -> Tuple[str, Dict[str, str]]:
    """
    Parse a media-type header value.

    A bare token (no slash) is accepted so Content-Disposition values such as
    'attachment; filename="a.pdf"' parse with the same grammar.

    Args:
        value: Raw header value

    Returns:
        Tuple of (lower-cased media type, parameters with lower-cased keys)

    Raises:
        MalformedContentType: On any grammar violation or duplicate parameter
    """
    head, _, _ = value.partition(";")
    media_type = head.strip().lower()

    main_type, slash, sub_type = media_type.partition("/")
    if not _is_token(main_type):
        raise MalformedContentType(value, "no media type")
    if slash and not _is_token(sub_type):
        raise MalformedContentType(value, "expected token after slash")

    raw_params: List[Tuple[str, str]] = []

    rest = value[len(head):]
    while rest:
        rest = rest.lstrip()
        if not rest:
            break

        key, param_value, remainder = _consume_param(rest)
        if not key:
            if rest.strip() == ";":
                # Trailing semicolon
                break
            raise MalformedContentType(value, "invalid media parameter")
        rest = remainder

        if any(key == seen for seen, _ in raw_params):
            raise MalformedContentType(value, f"duplicate parameter name {key!r}")
        raw_params.append((key, param_value))

    return media_type, _decode_parameters(raw_params)


def parse_content_type(value: Optional[str]) -> Tuple[str, Dict[str, str]]:
    """
    Resolve a Content-Type header value, defaulting to text/plain when empty.

    Args:
        value: Raw Content-Type value (may be None or empty)

    Returns:
        Tuple of (media type, parameters)

    Raises:
        MalformedContentType: If a non-empty value is malformed
    """
    if not value or not value.strip():
        return DEFAULT_CONTENT_TYPE, {}
    return parse_media_type(value)
