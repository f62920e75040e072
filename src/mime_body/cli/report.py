"""
Command-line interface for inspecting parsed message bodies.

Parses .eml files and prints a JSON summary of each: selected bodies,
attachments, inlines and the MIME part tree.

Usage:
    # Single file
    python -m mime_body.cli.report input.eml

    # Directory, one JSON object per line
    python -m mime_body.cli.report emails/ --output summary.jsonl

    # Include the text and HTML bodies in the output
    python -m mime_body.cli.report input.eml --include-body
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

import structlog

from mime_body.config import settings
from mime_body.exceptions import MimeBodyError
from mime_body.logging_config import setup_logging
from mime_body.models.mime_body import MIMEBody
from mime_body.models.mime_part import MIMEPart
from mime_body.parsing.eml_parser import parse_eml_bytes
from mime_body.version import PARSER_VERSION

logger = structlog.get_logger(__name__)


# ============================================================================
# SUMMARIES
# ============================================================================

def describe_part(part: MIMEPart) -> Dict[str, Any]:
    """
    Summarize a part and its descendants (content itself is not included).

    Args:
        part: Part to describe

    Returns:
        Nested dict with content type, disposition, file name and size
    """
    description: Dict[str, Any] = {"content_type": part.content_type}
    if part.disposition:
        description["disposition"] = part.disposition
    if part.file_name:
        description["file_name"] = part.file_name
    if part.children:
        description["children"] = [describe_part(child) for child in part.children]
    else:
        description["size_bytes"] = len(part.content)
    return description


def summarize(mime: MIMEBody, include_body: bool = False) -> Dict[str, Any]:
    """
    Build the JSON-serializable summary of a parse result.

    Args:
        mime: Parsed message body
        include_body: Include text and HTML bodies verbatim

    Returns:
        Summary dict
    """
    summary: Dict[str, Any] = {
        "message_id": mime.message_id(),
        "subject": mime.get_header("Subject"),
        "from": mime.get_header("From"),
        "text_length": len(mime.text),
        "html_length": len(mime.html),
        "attachments": [describe_part(part) for part in mime.attachments],
        "inlines": [describe_part(part) for part in mime.inlines],
        "tree": describe_part(mime.root) if mime.root is not None else None,
        "parser_version": PARSER_VERSION,
    }
    if include_body:
        summary["text"] = mime.text
        summary["html"] = mime.html
    return summary


# ============================================================================
# CLI FUNCTIONS
# ============================================================================

def process_single_file(eml_path: Path, include_body: bool = False) -> Dict[str, Any]:
    """
    Parse a single .eml file and summarize it.

    Args:
        eml_path: Path to .eml file
        include_body: Include text and HTML bodies in the summary

    Returns:
        Summary dict

    Raises:
        MimeBodyError: If the file is too large or structurally unparseable
        OSError: If the file cannot be read
    """
    eml_bytes = eml_path.read_bytes()

    size_mb = len(eml_bytes) / (1024 * 1024)
    if size_mb > settings.max_email_size_mb:
        raise MimeBodyError(
            "File too large",
            details={"size_mb": round(size_mb, 1), "limit_mb": settings.max_email_size_mb},
        )

    mime = parse_eml_bytes(eml_bytes)
    summary = summarize(mime, include_body=include_body)
    summary["file"] = str(eml_path)
    return summary


def process_paths(
    eml_files: List[Path], include_body: bool = False, verbose: bool = False
) -> List[Dict[str, Any]]:
    """
    Parse several .eml files, recording failures instead of stopping.

    Args:
        eml_files: Files to parse
        include_body: Include text and HTML bodies in the summaries
        verbose: Log progress for each file

    Returns:
        One summary per file; failed files carry an "error" key
    """
    results = []
    for idx, eml_file in enumerate(eml_files, 1):
        if verbose:
            logger.info("processing_file", path=str(eml_file), index=idx, total=len(eml_files))
        try:
            results.append(process_single_file(eml_file, include_body=include_body))
        except (MimeBodyError, OSError) as e:
            logger.error("parse_failed", path=str(eml_file), error=str(e))
            results.append({"file": str(eml_file), "error": str(e)})
    return results


def write_output(results: List[Dict[str, Any]], output_path: Optional[Path], format: str = "jsonl"):
    """
    Write summaries to a file or stdout.

    Args:
        results: Summaries to write
        output_path: Output file (None for stdout)
        format: "json" (single array) or "jsonl" (one object per line)
    """
    if output_path is None:
        if format == "jsonl":
            for result in results:
                print(json.dumps(result, ensure_ascii=False))
        else:
            print(json.dumps(results, ensure_ascii=False, indent=2))
        return

    with open(output_path, "w", encoding="utf-8") as f:
        if format == "jsonl":
            for result in results:
                f.write(json.dumps(result, ensure_ascii=False) + "\n")
        else:
            json.dump(results, f, ensure_ascii=False, indent=2)

    logger.info("output_written", path=str(output_path), count=len(results))


def collect_files(input_path: Path) -> List[Path]:
    """Return the .eml files named by a file or directory path."""
    if input_path.is_dir():
        return sorted(input_path.glob("*.eml"))
    return [input_path]


# ============================================================================
# MAIN CLI
# ============================================================================

def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Inspect the MIME structure of .eml files",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s input.eml
  %(prog)s emails/ --output summary.jsonl
  %(prog)s input.eml --format json --include-body
        """,
    )
    parser.add_argument(
        "input",
        type=str,
        help="Path to .eml file or directory containing .eml files",
    )
    parser.add_argument(
        "--output",
        "-o",
        type=str,
        default=None,
        help="Output file path (default: stdout)",
    )
    parser.add_argument(
        "--format",
        "-f",
        type=str,
        choices=["json", "jsonl"],
        default="jsonl",
        help="Output format (default: jsonl)",
    )
    parser.add_argument(
        "--include-body",
        action="store_true",
        help="Include text and HTML bodies in the output",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose output",
    )

    args = parser.parse_args(argv)
    setup_logging()

    input_path = Path(args.input)
    if not input_path.exists():
        print(f"Error: Path not found: {input_path}", file=sys.stderr)
        return 1

    eml_files = collect_files(input_path)
    results = process_paths(eml_files, include_body=args.include_body, verbose=args.verbose)
    write_output(results, Path(args.output) if args.output else None, args.format)

    return 1 if any("error" in result for result in results) else 0


if __name__ == "__main__":
    sys.exit(main())
