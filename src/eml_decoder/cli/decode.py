"""
Command-line interface for decoding .eml files.

Usage:
    # Single file, JSON line to stdout
    python -m eml_decoder.cli.decode input.eml

    # Directory batch processing
    python -m eml_decoder.cli.decode emails/ --output results.jsonl

    # Pretty JSON array
    python -m eml_decoder.cli.decode input.eml --format json
"""

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional, Tuple
import structlog

from eml_decoder.errors import MailDecodeError
from eml_decoder.logging_config import setup_logging
from eml_decoder.parsing import parse_eml_file


logger = structlog.get_logger(__name__)


def decode_file(eml_path: Path) -> dict:
    """
    Decode a single .eml file into a JSON-ready dict.

    Bytes fields (attachment data, opaque content) are base64-encoded.

    Raises:
        MailDecodeError: On decoding failures
        OSError: If the file cannot be read
    """
    email = parse_eml_file(str(eml_path))
    result = email.model_dump(mode="json")
    result["source"] = str(eml_path)
    return result


def decode_directory(dir_path: Path, verbose: bool = False) -> Tuple[List[dict], List[dict]]:
    """
    Decode every .eml file below a directory.

    A failing file is recorded and skipped; the others are still decoded.

    Returns:
        Tuple of (results, errors)
    """
    eml_files = sorted(dir_path.glob("**/*.eml"))

    if not eml_files:
        logger.warning("no_eml_files_found", directory=str(dir_path))
        return [], []

    logger.info("processing_directory", files_count=len(eml_files))

    results = []
    errors = []

    for idx, eml_file in enumerate(eml_files, 1):
        if verbose:
            print(f"[{idx}/{len(eml_files)}] Decoding {eml_file.name}...", file=sys.stderr)
        try:
            results.append(decode_file(eml_file))
        except (MailDecodeError, OSError) as e:
            logger.error("file_decoding_failed", file=str(eml_file), error=str(e))
            errors.append({
                "source": str(eml_file),
                "error_type": type(e).__name__,
                "error": str(e),
            })

    logger.info(
        "directory_processing_completed",
        total=len(eml_files),
        success=len(results),
        errors=len(errors),
    )

    return results, errors


def write_output(results: List[dict], output_path: Optional[Path], format: str = "jsonl") -> None:
    """
    Write results to a file, or to stdout when no path is given.

    Args:
        results: Decoded messages as dicts
        output_path: Output file path
        format: Output format ("json" or "jsonl")
    """
    if format == "jsonl":
        text = "".join(json.dumps(result, ensure_ascii=False) + "\n" for result in results)
    else:
        text = json.dumps(results, ensure_ascii=False, indent=2) + "\n"

    if not output_path:
        sys.stdout.write(text)
        return

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(text, encoding="utf-8")
    logger.info("output_written", path=str(output_path), count=len(results))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="EML Decoder CLI - decode .eml files into text, HTML, attachments and inline files",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s input.eml
  %(prog)s emails/ --output results.jsonl
  %(prog)s input.eml --format json
        """
    )
    parser.add_argument(
        "input",
        type=str,
        help="Path to .eml file or directory containing .eml files"
    )
    parser.add_argument(
        "--output",
        "-o",
        type=str,
        default=None,
        help="Output file path (default: stdout). A .json suffix selects JSON output"
    )
    parser.add_argument(
        "--format",
        "-f",
        type=str,
        choices=["json", "jsonl"],
        default="jsonl",
        help="Output format (default: jsonl)"
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose output"
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point. Returns the process exit code."""
    args = build_parser().parse_args(argv)
    setup_logging(log_level="DEBUG" if args.verbose else None, log_json=False)

    input_path = Path(args.input)
    if not input_path.exists():
        print(f"Error: Path not found: {input_path}", file=sys.stderr)
        return 1

    errors: List[dict] = []
    if input_path.is_dir():
        results, errors = decode_directory(input_path, verbose=args.verbose)
    else:
        try:
            results = [decode_file(input_path)]
        except (MailDecodeError, OSError) as e:
            logger.error("cli_failed", file=str(input_path), error=str(e))
            print(f"Error: {type(e).__name__}: {e}", file=sys.stderr)
            return 1

    output_path = Path(args.output) if args.output else None

    # Auto-detect format from file extension
    format = args.format
    if output_path and output_path.suffix == ".json":
        format = "json"

    write_output(results, output_path, format)

    if args.verbose:
        print(f"Decoded {len(results)} emails, {len(errors)} failed", file=sys.stderr)

    return 1 if errors else 0


if __name__ == "__main__":
    sys.exit(main())
