"""
Command-line interface for formpager.

Usage:
    formpager render document.json --output-dir out/
    formpager export necropsia --data values.json --output-dir out/
    formpager forms
    formpager version
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .exceptions import DocumentLoadError, FormPagerError
from .utils.logger import LOG_LEVELS, configure_logging

logger = logging.getLogger(__name__)


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="formpager",
        description="formpager - paginated PDF export of fixed-geometry paper forms",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  formpager render document.json --output-dir out
  formpager export finalizacao --data linhas.json --output-dir out
  formpager forms
  formpager version
        """,
    )
    parser.add_argument("--log-level", choices=LOG_LEVELS, default="WARNING", help="Log level (default: WARNING)")
    parser.add_argument("--log-file", help="Also write logs to this file")
    parser.add_argument("--no-rich", action="store_true", help="Plain log output instead of rich")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    render_parser = subparsers.add_parser("render", help="Export a JSON document description to PDF")
    render_parser.add_argument("input", help="Input JSON file")
    _add_output_options(render_parser)

    export_parser = subparsers.add_parser("export", help="Export a built-in form to PDF")
    export_parser.add_argument("form_id", help="Form identifier (see 'formpager forms')")
    export_parser.add_argument("--data", help="JSON file with the form's field values")
    _add_output_options(export_parser)

    forms_parser = subparsers.add_parser("forms", help="List the built-in forms")
    forms_parser.add_argument("--json", action="store_true", help="Output as JSON")

    subparsers.add_parser("version", help="Show version information")
    return parser


def _add_output_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("-o", "--output-dir", default=".", help="Directory for the PDF (default: current)")
    parser.add_argument("--json", action="store_true", help="Print the export summary as JSON")


def _report(result, as_json: bool) -> None:
    summary = {
        "filename": result.filename,
        "path": str(result.path) if result.path else None,
        "total_pages": result.total_pages,
        "bytes": len(result.data),
        "warnings": [warning.message for warning in result.warnings],
    }
    if as_json:
        print(json.dumps(summary, indent=2, ensure_ascii=False))
        return
    print(f"✅ Saved: {summary['path']}")
    print(f"   Pages: {summary['total_pages']}")
    for message in summary["warnings"]:
        print(f"   ⚠️  {message}")


def cmd_render(args) -> int:
    """Handle render command."""
    from .api import export_document
    from .importers import load_document

    document = load_document(Path(args.input))
    result = export_document(document, output_dir=args.output_dir)
    _report(result, args.json)
    return 0


def cmd_export(args) -> int:
    """Handle export command."""
    from .api import export_document
    from .forms import get_form

    values = {}
    if args.data:
        try:
            with open(args.data, "r", encoding="utf-8") as handle:
                values = json.load(handle)
        except (OSError, json.JSONDecodeError) as exc:
            raise DocumentLoadError(f"Cannot read form values from {args.data}", details=str(exc)) from exc
        if not isinstance(values, dict):
            raise DocumentLoadError(f"Form values in {args.data} must be a JSON object")

    form = get_form(args.form_id)
    result = export_document(form.build(values), output_dir=args.output_dir, filename=form.filename)
    _report(result, args.json)
    return 0


def cmd_forms(args) -> int:
    """Handle forms command."""
    from .forms import available_forms

    forms = available_forms()
    if args.json:
        listing = [
            {
                "id": form.form_id,
                "document_code": form.document_code,
                "version": form.version,
                "title": form.title,
                "description": form.description,
                "filename": form.filename,
            }
            for form in forms
        ]
        print(json.dumps(listing, indent=2, ensure_ascii=False))
    else:
        for form in forms:
            print(f"{form.form_id:<14} {form.document_code:<10} {form.title}")
    return 0


def cmd_version(args=None) -> int:
    """Handle version command."""
    from .version import __version__

    print(f"formpager v{__version__}")
    return 0


COMMANDS = {
    "render": cmd_render,
    "export": cmd_export,
    "forms": cmd_forms,
    "version": cmd_version,
}


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level, log_file=args.log_file, use_rich=not args.no_rich)

    handler = COMMANDS.get(args.command)
    if handler is None:
        parser.print_help()
        return 0

    try:
        return handler(args)
    except FormPagerError as exc:
        logger.error(f"{args.command} failed: {exc}")
        print(f"Error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
