#!/usr/bin/env python3
"""
Command-line script to validate and save a theme spec override.

An override may drop tokens from the built-in spec or replace them with
literal values, and may add ``#postmeta.<key>#`` tokens. Anything else is
rejected and nothing is saved.

Usage:
    python run_theme_override.py body default-body override.json --theme-dir themes
    python run_theme_override.py audio json override.json --theme-dir themes --theme Dark
    python run_theme_override.py body default-body --delete --theme-dir themes
    python run_theme_override.py body default-body --show
"""

import argparse
import json
import sys
from pathlib import Path

# Load .env file automatically
from dotenv import load_dotenv
load_dotenv()

from article_exporter.exceptions import ComponentError, ExporterError, SpecValidationError
from article_exporter.factory import get_default_factory
from article_exporter.theme_store import ThemeStore


def main():
    parser = argparse.ArgumentParser(description="Validate and save a theme spec override")
    parser.add_argument("component", help="Component kind, e.g. body, heading, audio")
    parser.add_argument("spec", help="Spec name, e.g. json, default-body")
    parser.add_argument("override", nargs="?", help="JSON file holding the override")
    parser.add_argument("--theme-dir", help="Directory of saved themes")
    parser.add_argument("--theme", help="Theme to change (default: the active theme)")
    parser.add_argument("--delete", action="store_true", help="Remove the override instead")
    parser.add_argument("--show", action="store_true", help="Print the effective spec and exit")
    args = parser.parse_args()

    factory = get_default_factory()
    kind = factory.get_kind(args.component)
    if kind is None:
        names = ", ".join(k.name for k in factory.kinds)
        print(f"✗ Unknown component '{args.component}'. Known: {names}", file=sys.stderr)
        sys.exit(1)

    try:
        spec = kind.component_class.get_spec(args.spec)
        store = ThemeStore(args.theme_dir)
        theme = store.get_theme(args.theme) if args.theme else store.get_active()
    except (ComponentError, ExporterError) as e:
        print(f"✗ {e.message}", file=sys.stderr)
        sys.exit(1)

    if args.show:
        print(spec.format_json(spec.get_spec(theme)))
        return

    if args.delete:
        if spec.delete(store, theme.name):
            print(f"✓ Removed override {kind.name}/{args.spec} from '{theme.name}'", file=sys.stderr)
        else:
            print(f"No override {kind.name}/{args.spec} in '{theme.name}'", file=sys.stderr)
        return

    if not args.override:
        parser.error("an override file is required unless --delete or --show is given")

    try:
        spec.save(Path(args.override).read_text(encoding="utf-8"), store, theme.name)
    except SpecValidationError as e:
        print(f"✗ {e.message}", file=sys.stderr)
        if e.invalid_tokens:
            print(f"  Invalid tokens: {', '.join(e.invalid_tokens)}", file=sys.stderr)
        print(f"  Allowed tokens: {', '.join(sorted(set(spec.find_tokens())))}", file=sys.stderr)
        sys.exit(1)
    except OSError as e:
        print(f"✗ Could not read {args.override}: {e}", file=sys.stderr)
        sys.exit(1)

    print(json.dumps({"theme": theme.name, "component": kind.name, "spec": args.spec, "saved": True}))


if __name__ == "__main__":
    main()
