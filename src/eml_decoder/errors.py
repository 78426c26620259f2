"""
Exceptions raised while decoding a message.

Every failure aborts the whole parse; callers catch MailDecodeError to handle
any of them uniformly.
"""


class MailDecodeError(Exception):
    """Base class for all decoding failures."""


class MalformedMessage(MailDecodeError):
    """The RFC5322 header block could not be read."""


class MalformedContentType(MailDecodeError):
    """A Content-Type (or Content-Disposition) value violates media-type grammar."""

    def __init__(self, value: str, reason: str):
        self.value = value
        self.reason = reason
        super().__init__(f"Malformed media type {value!r}: {reason}")


class UnsupportedEncoding(MailDecodeError):
    """The Content-Transfer-Encoding is not one we can decode."""

    def __init__(self, encoding: str):
        self.encoding = encoding
        super().__init__(f"Unknown encoding: {encoding}")


class InvalidEncoding(MailDecodeError):
    """The payload does not match its declared transfer encoding."""


class TokenizerError(MailDecodeError):
    """A multipart body is corrupt (missing delimiter, bad part headers)."""


class StreamReadError(MailDecodeError):
    """Reading the caller's stream failed."""


class NestingTooDeep(MailDecodeError):
    """Multipart containers are nested beyond the configured limit."""

    def __init__(self, limit: int):
        self.limit = limit
        super().__init__(f"Multipart nesting exceeds {limit} levels")
