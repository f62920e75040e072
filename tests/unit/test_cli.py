"""
Unit tests for the report CLI (cli/report.py).
"""

import json

import pytest

from mime_body.cli import report
from mime_body.cli.report import describe_part, main, summarize
from mime_body.config import settings
from mime_body.parsing.eml_parser import parse_eml_bytes
from tests.fixtures.emails import SAMPLE_EMAILS


@pytest.fixture(autouse=True)
def no_logging_setup(monkeypatch):
    """Keep the CLI from reconfiguring structlog during tests."""
    monkeypatch.setattr(report, "setup_logging", lambda: None)


class TestSummaries:
    """Tests for describe_part() and summarize()."""

    @pytest.mark.unit
    def test_summarize_multipart(self, html_mime_inline_eml):
        summary = summarize(parse_eml_bytes(html_mime_inline_eml))

        assert summary["message_id"] == "<4E2E5A48-1A2C-4450-8663-D41B451DA93A@makita.skynet>"
        assert summary["subject"] == "MIME test 1"
        assert summary["text_length"] == len("Test of text section")
        assert summary["inlines"] == [
            {
                "content_type": "image/png",
                "disposition": "inline",
                "file_name": "favicon.png",
                "size_bytes": 33,
            }
        ]
        assert summary["tree"]["content_type"] == "multipart/alternative"
        assert len(summary["tree"]["children"]) == 2
        assert "text" not in summary

    @pytest.mark.unit
    def test_summarize_monopart_with_body(self, non_mime_eml):
        summary = summarize(parse_eml_bytes(non_mime_eml), include_body=True)
        assert summary["tree"] is None
        assert summary["text"] == "This is a test mailing\n"
        assert summary["html"] == ""

    @pytest.mark.unit
    def test_describe_leaf(self, attachment_eml):
        attachment = parse_eml_bytes(attachment_eml).attachments[0]
        description = describe_part(attachment)
        assert description["file_name"] == "test.html"
        assert description["size_bytes"] == len(attachment.content)


class TestMain:
    """Tests for main() entry point."""

    @pytest.mark.unit
    def test_single_file(self, tmp_path, attachment_eml):
        eml_path = tmp_path / "attachment.eml"
        eml_path.write_bytes(attachment_eml)
        output_path = tmp_path / "out.jsonl"

        assert main([str(eml_path), "--output", str(output_path)]) == 0

        lines = output_path.read_text(encoding="utf-8").splitlines()
        assert len(lines) == 1
        result = json.loads(lines[0])
        assert result["file"] == str(eml_path)
        assert result["attachments"][0]["file_name"] == "test.html"

    @pytest.mark.unit
    def test_directory_with_failure(self, tmp_path):
        (tmp_path / "a_good.eml").write_bytes(SAMPLE_EMAILS["mime_mixed"])
        (tmp_path / "b_bad.eml").write_bytes(SAMPLE_EMAILS["missing_boundary"])
        (tmp_path / "ignored.txt").write_bytes(b"not an email")
        output_path = tmp_path / "out.json"

        exit_code = main([str(tmp_path), "--output", str(output_path), "--format", "json"])

        assert exit_code == 1
        results = json.loads(output_path.read_text(encoding="utf-8"))
        assert len(results) == 2
        assert results[0]["subject"] == "MIME mixed"
        assert "boundary" in results[1]["error"]

    @pytest.mark.unit
    def test_unreadable_file_is_reported(self, tmp_path, mime_mixed_eml):
        (tmp_path / "a_folder.eml").mkdir()
        (tmp_path / "b_good.eml").write_bytes(mime_mixed_eml)
        output_path = tmp_path / "out.json"

        exit_code = main([str(tmp_path), "--output", str(output_path), "--format", "json"])

        assert exit_code == 1
        results = json.loads(output_path.read_text(encoding="utf-8"))
        assert len(results) == 2
        assert results[0]["file"] == str(tmp_path / "a_folder.eml")
        assert "error" in results[0]
        assert results[1]["subject"] == "MIME mixed"

    @pytest.mark.unit
    def test_include_body(self, tmp_path, mime_mixed_eml):
        eml_path = tmp_path / "mixed.eml"
        eml_path.write_bytes(mime_mixed_eml)
        output_path = tmp_path / "out.jsonl"

        assert main([str(eml_path), "-o", str(output_path), "--include-body"]) == 0

        result = json.loads(output_path.read_text(encoding="utf-8"))
        assert result["text"] == "Section one\n\n--\nSection two"

    @pytest.mark.unit
    def test_file_too_large(self, tmp_path, monkeypatch, mime_mixed_eml):
        monkeypatch.setattr(settings, "max_email_size_mb", 0)
        eml_path = tmp_path / "mixed.eml"
        eml_path.write_bytes(mime_mixed_eml)
        output_path = tmp_path / "out.jsonl"

        assert main([str(eml_path), "-o", str(output_path)]) == 1
        result = json.loads(output_path.read_text(encoding="utf-8"))
        assert "too large" in result["error"]

    @pytest.mark.unit
    def test_missing_path(self, tmp_path):
        assert main([str(tmp_path / "missing.eml")]) == 1
