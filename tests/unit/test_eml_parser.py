"""
Unit tests for email parser module (eml_parser.py).

Tests cover:
- Parsing .eml bytes, streams and files
- Top-level dispatch (text, HTML, multipart, opaque content)
- Header extraction
- Attachments and embedded files through nested containers
- Decoding failures
"""

import io

import pytest

from eml_decoder.errors import (
    MalformedContentType,
    MalformedMessage,
    StreamReadError,
    TokenizerError,
    UnsupportedEncoding,
)
from eml_decoder.parsing.eml_parser import parse_eml, parse_eml_bytes, parse_eml_file
from tests.fixtures.emails import SAMPLE_EMAILS


class TestParseEmlBytes:
    """Tests for parse_eml_bytes() function."""

    @pytest.mark.unit
    def test_plain_text(self, sample_eml_bytes, walk_options):
        """Test parsing a single-part text message."""
        email = parse_eml_bytes(sample_eml_bytes, walk_options)

        assert email.text_body == "Hello, this is a simple test email.\n\nThank you."
        assert email.html_body == ""
        assert email.content is None
        assert email.attachments == []

    @pytest.mark.unit
    def test_single_trailing_newline_stripped(self, walk_options):
        email = parse_eml_bytes(SAMPLE_EMAILS["hello_plain"], walk_options)

        assert email.text_body == "hello"

    @pytest.mark.unit
    def test_html_only(self, walk_options):
        email = parse_eml_bytes(SAMPLE_EMAILS["html_only"], walk_options)

        assert email.html_body == "<html><body><h1>Welcome!</h1></body></html>"
        assert email.text_body == ""

    @pytest.mark.unit
    def test_no_content_type_is_text(self, walk_options):
        email = parse_eml_bytes(SAMPLE_EMAILS["no_content_type"], walk_options)

        assert email.content_type == ""
        assert email.text_body == "Body without a content type"

    @pytest.mark.unit
    def test_top_level_text_not_transfer_decoded(self, walk_options):
        """Top-level text bodies are returned as they appear on the wire."""
        eml = (
            b"From: sender@example.com\n"
            b"Content-Type: text/plain\n"
            b"Content-Transfer-Encoding: base64\n"
            b"\n"
            b"QUJD\n"
        )

        assert parse_eml_bytes(eml, walk_options).text_body == "QUJD"

    @pytest.mark.unit
    def test_top_level_opaque_content(self, walk_options):
        email = parse_eml_bytes(SAMPLE_EMAILS["top_level_pdf"], walk_options)

        assert email.content_type == "application/pdf"
        assert email.content == b"%PDF-1.4\n"
        assert email.text_body == ""

    @pytest.mark.unit
    def test_headers(self, sample_eml_bytes, walk_options):
        email = parse_eml_bytes(sample_eml_bytes, walk_options)

        assert email.headers["From"] == ["sender@example.com"]
        assert email.headers["Message-Id"] == ["<test123@example.com>"]
        assert email.header("subject") == "Test Email"
        assert email.content_type == 'text/plain; charset="utf-8"'

    @pytest.mark.unit
    def test_repeated_headers_kept_in_order(self, walk_options):
        eml = b"Received: one\nReceived: two\nContent-Type: text/plain\n\nx\n"

        email = parse_eml_bytes(eml, walk_options)

        assert email.headers["Received"] == ["one", "two"]

    @pytest.mark.unit
    def test_mixed_with_attachment(self, mixed_attachment_eml, walk_options):
        email = parse_eml_bytes(mixed_attachment_eml, walk_options)

        assert email.text_body == "A"
        assert len(email.attachments) == 1
        attachment = email.attachments[0]
        assert attachment.filename == "f.txt"
        assert attachment.content_type == "text/plain"
        assert attachment.data == b"ABC"

    @pytest.mark.unit
    def test_alternative(self, alternative_eml, walk_options):
        email = parse_eml_bytes(alternative_eml, walk_options)

        assert email.text_body == "plain"
        assert email.html_body == "<b>x</b>"
        assert email.attachments == []

    @pytest.mark.unit
    def test_related_inline_image(self, related_inline_eml, walk_options):
        email = parse_eml_bytes(related_inline_eml, walk_options)

        assert email.html_body == '<img src="cid:img1">'
        assert len(email.embedded_files) == 1
        embedded = email.embedded_files[0]
        assert embedded.cid == "img1"
        assert embedded.filename is None
        assert embedded.content_type == "image/png"
        assert embedded.data == b"\x89PNG\r\n\x1a\n"

    @pytest.mark.unit
    def test_nested_containers(self, nested_eml, walk_options):
        email = parse_eml_bytes(nested_eml, walk_options)

        assert email.text_body == "Plain body"
        assert email.html_body == '<p>HTML body <img src="cid:logo"></p>'

        assert [(a.filename, a.content_type, a.data) for a in email.attachments] == [
            ("report.pdf", "application/pdf", b"%PDF-1.4\n")
        ]

        assert len(email.embedded_files) == 1
        logo = email.embedded_files[0]
        assert logo.cid == "logo"
        assert logo.filename == "logo.gif"
        assert logo.content_type == 'image/gif; name="logo.gif"'
        assert logo.data == b"GIF89a"

    @pytest.mark.unit
    def test_nested_bodies_replace_by_default(self, walk_options):
        email = parse_eml_bytes(SAMPLE_EMAILS["mixed_two_related"], walk_options)

        assert email.html_body == "second"
        assert [f.cid for f in email.embedded_files] == ["one", "two"]

    @pytest.mark.unit
    def test_nested_bodies_merge(self, merge_options):
        email = parse_eml_bytes(SAMPLE_EMAILS["mixed_two_related"], merge_options)

        assert email.html_body == "firstsecond"
        assert [f.data for f in email.embedded_files] == [b"1", b"2"]

    @pytest.mark.unit
    def test_unnamed_binary_under_mixed_dropped(self, walk_options):
        email = parse_eml_bytes(SAMPLE_EMAILS["mixed_unnamed_binary"], walk_options)

        assert email.text_body == "body"
        assert email.attachments == []
        assert email.embedded_files == []

    @pytest.mark.unit
    def test_encoded_filenames(self, walk_options):
        email = parse_eml_bytes(SAMPLE_EMAILS["encoded_filenames"], walk_options)

        assert [a.filename for a in email.attachments] == [
            "élève.pdf",
            "€ rates.csv",
            "café photo.jpg",
        ]
        assert email.attachments[2].content_type == "image/jpeg"
        assert email.attachments[0].data == b"pdf-1"

    @pytest.mark.unit
    def test_undecodable_filename_kept_literally(self, walk_options):
        email = parse_eml_bytes(SAMPLE_EMAILS["undecodable_filename"], walk_options)

        assert email.text_body == "body"
        assert [(a.filename, a.data) for a in email.attachments] == [
            ("=?UTF-8?B?!!!?= q3.pdf", b"%PDF")
        ]

    @pytest.mark.unit
    def test_quoted_printable(self, walk_options):
        email = parse_eml_bytes(SAMPLE_EMAILS["quoted_printable"], walk_options)

        assert email.text_body == "Café naïve résumé with a soft break"

    @pytest.mark.unit
    def test_crlf_line_endings(self, mixed_attachment_eml, walk_options):
        """CRLF and LF messages decode to the same result."""
        lf = parse_eml_bytes(mixed_attachment_eml, walk_options)
        crlf = parse_eml_bytes(mixed_attachment_eml.replace(b"\n", b"\r\n"), walk_options)

        assert crlf.text_body == lf.text_body == "A"
        assert crlf.attachments == lf.attachments

    @pytest.mark.unit
    def test_parse_is_repeatable(self, nested_eml, walk_options):
        """Two parses of the same bytes give equal results."""
        assert parse_eml_bytes(nested_eml, walk_options) == parse_eml_bytes(
            nested_eml, walk_options
        )

    @pytest.mark.unit
    def test_default_options_from_settings(self, alternative_eml):
        assert parse_eml_bytes(alternative_eml).html_body == "<b>x</b>"


class TestParseEmlErrors:
    """Decoding failures abort the parse."""

    @pytest.mark.unit
    def test_unknown_transfer_encoding(self, walk_options):
        with pytest.raises(UnsupportedEncoding) as exc_info:
            parse_eml_bytes(SAMPLE_EMAILS["unknown_encoding"], walk_options)

        assert exc_info.value.encoding == "quoted-unknown"

    @pytest.mark.unit
    def test_truncated_multipart(self, walk_options):
        with pytest.raises(TokenizerError):
            parse_eml_bytes(SAMPLE_EMAILS["truncated_multipart"], walk_options)

    @pytest.mark.unit
    def test_malformed_content_type(self, walk_options):
        with pytest.raises(MalformedContentType):
            parse_eml_bytes(SAMPLE_EMAILS["malformed_content_type"], walk_options)

    @pytest.mark.unit
    def test_malformed_message(self, malformed_eml, walk_options):
        with pytest.raises(MalformedMessage):
            parse_eml_bytes(malformed_eml, walk_options)

    @pytest.mark.unit
    def test_empty_input(self, walk_options):
        with pytest.raises(MalformedMessage):
            parse_eml_bytes(b"", walk_options)


class TestParseEml:
    """Tests for parse_eml() function."""

    @pytest.mark.unit
    def test_binary_stream(self, alternative_eml, walk_options):
        email = parse_eml(io.BytesIO(alternative_eml), walk_options)

        assert email.text_body == "plain"

    @pytest.mark.unit
    def test_stream_read_failure(self, walk_options):
        class BrokenStream:
            def read(self):
                raise OSError("connection reset")

        with pytest.raises(StreamReadError):
            parse_eml(BrokenStream(), walk_options)

    @pytest.mark.unit
    def test_text_stream_rejected(self, walk_options):
        with pytest.raises(TypeError):
            parse_eml(io.StringIO("From: a\n\nx\n"), walk_options)


class TestParseEmlFile:
    """Tests for parse_eml_file() function."""

    @pytest.mark.unit
    def test_parse_eml_file_valid(self, tmp_eml_file, walk_options):
        """Test parsing valid .eml file from disk."""
        email = parse_eml_file(tmp_eml_file, walk_options)

        assert email.header("From") == "sender@example.com"
        assert email.attachments[0].data == b"ABC"

    @pytest.mark.unit
    def test_parse_eml_file_not_found(self):
        """Test handling of missing file."""
        with pytest.raises(FileNotFoundError):
            parse_eml_file("/nonexistent/path/email.eml")
