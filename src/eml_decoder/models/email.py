"""
Decoded email model - the result of a single parse.

All models are frozen: they are built once during the walk over the MIME tree
and never mutated afterwards.
"""

from typing import Dict, List, Optional

from pydantic import BaseModel, Field


class Attachment(BaseModel):
    """A leaf part that declares a filename."""

    filename: str = Field(description="Filename with RFC 2047 encoded words decoded")
    content_type: str = Field(description="Media type without parameters")
    data: bytes = Field(description="Transfer-decoded content")

    model_config = {"frozen": True, "ser_json_bytes": "base64"}


class EmbeddedFile(BaseModel):
    """An unnamed leaf under multipart/related or multipart/alternative."""

    cid: str = Field(description="Content-Id without angle brackets")
    filename: Optional[str] = Field(None, description="Filename, when one is declared")
    content_type: str = Field(description="Raw Content-Type value, parameters included")
    data: bytes = Field(description="Transfer-decoded content")

    model_config = {"frozen": True, "ser_json_bytes": "base64"}


class Email(BaseModel):
    """
    Structured representation of a decoded message.

    text_body and html_body are the concatenation of every text/plain and
    text/html leaf in document order. content is only set when the top-level
    content type is neither text nor a walkable multipart container.
    """

    headers: Dict[str, List[str]] = Field(
        default_factory=dict, description="Top-level headers keyed by canonical name"
    )
    content_type: str = Field("", description="Raw top-level Content-Type value")
    content: Optional[bytes] = Field(
        None, description="Opaque decoded body for unrecognized content types"
    )

    text_body: str = Field("", description="Concatenated text/plain bodies")
    html_body: str = Field("", description="Concatenated text/html bodies")

    attachments: List[Attachment] = Field(default_factory=list)
    embedded_files: List[EmbeddedFile] = Field(default_factory=list)

    model_config = {
        "frozen": True,
        "ser_json_bytes": "base64",
        "json_schema_extra": {
            "example": {
                "headers": {
                    "From": ["sender@example.com"],
                    "Subject": ["Quarterly report"],
                    "Content-Type": ['multipart/mixed; boundary="b1"'],
                },
                "content_type": 'multipart/mixed; boundary="b1"',
                "content": None,
                "text_body": "Report attached.",
                "html_body": "",
                "attachments": [
                    {
                        "filename": "report.pdf",
                        "content_type": "application/pdf",
                        "data": "JVBERi0xLjQK",
                    }
                ],
                "embedded_files": [],
            }
        },
    }

    def header(self, name: str) -> str:
        """First value of a header (case-insensitive), or "" when absent."""
        wanted = name.lower()
        for key, values in self.headers.items():
            if key.lower() == wanted and values:
                return values[0]
        return ""
