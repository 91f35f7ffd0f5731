#!/usr/bin/env python3
"""
Command-line script to export HTML files to article documents.

Each file is exported as one content item, titled after the file name.
Settings come from ARTICLE_EXPORTER_* environment variables (a .env file is
loaded automatically); the theme comes from --theme-dir.

Usage:
    python run_exporter.py article.html
    python run_exporter.py drafts/*.html -o documents.json
    python run_exporter.py article.html --theme-dir themes --theme Dark
    python run_exporter.py article.html --pullquote "Quote me" --pullquote-position middle
"""

import argparse
import json
import logging
import sys
from pathlib import Path

# Load .env file automatically
from dotenv import load_dotenv
load_dotenv()

from article_exporter.exceptions import ExporterError
from article_exporter.exporter import Exporter
from article_exporter.logger import setup_logger
from article_exporter.schemas import ContentSettings, ExporterContent
from article_exporter.settings import Settings
from article_exporter.theme_store import ThemeStore


def main():
    parser = argparse.ArgumentParser(
        description="Export HTML files to structured article documents"
    )
    parser.add_argument("files", nargs="+", help="HTML files to export")
    parser.add_argument("--output", "-o", help="Output JSON file (default: print to stdout)")
    parser.add_argument("--theme-dir", help="Directory of saved themes")
    parser.add_argument("--theme", help="Theme to use instead of the active one")
    parser.add_argument("--pullquote", default="", help="Pull quote text")
    parser.add_argument(
        "--pullquote-position",
        choices=["top", "middle", "bottom"],
        help="Where to place the pull quote"
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Verbose logging")
    args = parser.parse_args()

    setup_logger(level=logging.DEBUG if args.verbose else logging.INFO)

    # Settings and theme problems are fatal for every file
    try:
        settings = Settings.from_env()
        store = ThemeStore(args.theme_dir)
        theme = store.get_theme(args.theme) if args.theme else store.get_active()
    except ExporterError as e:
        print(f"✗ {e.message}", file=sys.stderr)
        sys.exit(1)

    content_settings = ContentSettings(
        pullquote=args.pullquote,
        pullquote_position=args.pullquote_position
    )

    results = []

    for index, file_path in enumerate(args.files, start=1):
        file_path = Path(file_path)
        print(f"Exporting: {file_path.name}", file=sys.stderr)

        try:
            content = ExporterContent(
                id=index,
                title=file_path.stem.replace("_", " ").replace("-", " ").title(),
                content=file_path.read_text(encoding="utf-8", errors="replace"),
                content_settings=content_settings
            )
            exporter = Exporter(content, settings=settings, theme=theme)
            document = exporter.export()

            results.append({
                "file": str(file_path),
                "status": "success",
                "document": document.to_dict(),
                "bundles": exporter.bundles,
                "errors": exporter.errors
            })

            error_count = sum(len(messages) for messages in exporter.errors.values())
            print(f"  ✓ {len(document.components)} components, {error_count} skipped", file=sys.stderr)

        except ExporterError as e:
            results.append({"file": str(file_path), "status": "error", **e.to_response()})
            print(f"  ✗ Error: {e.message}", file=sys.stderr)

        except OSError as e:
            results.append({
                "file": str(file_path),
                "status": "error",
                "error": str(e)
            })
            print(f"  ✗ Error: {e}", file=sys.stderr)

    # ensure_ascii=False keeps non-ASCII text readable in the output
    output_json = json.dumps(results, indent=2, ensure_ascii=False)

    if args.output:
        Path(args.output).write_text(output_json, encoding="utf-8")
        print(f"\nSaved to: {args.output}", file=sys.stderr)
    else:
        print(output_json)


if __name__ == "__main__":
    main()
