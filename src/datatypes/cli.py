# src/datatypes/cli.py
from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from tqdm import tqdm

from datatypes.exceptions import DatatypeError
from datatypes.html import Html
from datatypes.managers.config_manager import config_manager
from datatypes.model import AllowedTagSpec
from datatypes.utils.configure_logging import configure_logger

logger = logging.getLogger(__name__)

EXTRACT_KINDS = ("images", "metatags", "rssfeeds", "opengraph", "tag")
STDIN_MARKER = "-"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="datatypes", description="Clean, truncate and inspect HTML fragments.")
    parser.add_argument("--log-level", type=str, default=None, help="Logging level (default: debug.level setting).")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # 1. Subcommand: CLEAN
    clean_parser = subparsers.add_parser("clean", help="Reduce HTML to an allow-list of tags and attributes")
    clean_parser.add_argument("files", nargs="+", help="Input files, or '-' for stdin.")
    clean_parser.add_argument("--source-url", type=str, default=None, help="URL the HTML came from.")
    clean_parser.add_argument("--allow", type=str, default=None, help="JSON file with a custom allow-list.")

    # 2. Subcommand: TRUNCATE
    truncate_parser = subparsers.add_parser("truncate", help="Cut HTML to a number of visible characters")
    truncate_parser.add_argument("files", nargs="+", help="Input files, or '-' for stdin.")
    truncate_parser.add_argument("--length", type=int, required=True, help="Visible characters to keep.")
    truncate_parser.add_argument("--no-close", action="store_true", help="Do not close tags left open by the cut.")

    # 3. Subcommand: CLOSE-TAGS
    close_parser = subparsers.add_parser("close-tags", help="Append closing tags for unclosed tags")
    close_parser.add_argument("files", nargs="+", help="Input files, or '-' for stdin.")

    # 4. Subcommand: EXTRACT
    extract_parser = subparsers.add_parser("extract", help="Extract tags or metadata as JSON")
    extract_parser.add_argument("kind", choices=EXTRACT_KINDS, help="What to extract.")
    extract_parser.add_argument("files", nargs="+", help="Input files, or '-' for stdin.")
    extract_parser.add_argument("--tag", type=str, default=None, help="Tag name for 'extract tag'.")
    extract_parser.add_argument("--source-url", type=str, default=None, help="URL used to resolve relative image URLs.")

    return parser


def _read_input(path: str) -> bytes:
    if path == STDIN_MARKER:
        return sys.stdin.buffer.read()
    return Path(path).read_bytes()


def _load_allow_list(path: str) -> AllowedTagSpec:
    """Loads a custom allow-list: {"tag": {"attr": "uri"|"text", "opts": {"max": N}}}."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            allowed = json.load(f)
    except ValueError as e:
        raise DatatypeError(f"Allow-list {path} is not valid JSON: {e}", value=path) from e
    if not isinstance(allowed, dict) or not all(isinstance(spec, dict) for spec in allowed.values()):
        raise DatatypeError(f"Allow-list {path} must map tag names to attribute objects.", value=path)
    return allowed


def _process(args: argparse.Namespace, raw: bytes, allowed: Optional[AllowedTagSpec]) -> str:
    """Runs one command over one document and returns the text to print."""
    html = Html(raw, getattr(args, "source_url", None))

    if args.command == "clean":
        return html.clean(allowed)
    if args.command == "truncate":
        return html.truncate(args.length, close_unclosed=not args.no_close)
    if args.command == "close-tags":
        return html.close_tags()

    if args.kind == "tag":
        result = html.extract_tag(args.tag)
    else:
        result = getattr(html, f"extract_{args.kind}")()
    return json.dumps(result, ensure_ascii=False, indent=2)


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point of the datatypes command. Returns the process exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logger(args.log_level or config_manager.get_nested("debug.level", "WARNING"))

    if not args.command:
        parser.print_help()
        return 0
    if args.command == "extract" and args.kind == "tag" and not args.tag:
        parser.error("extract tag requires --tag")

    allowed: Optional[AllowedTagSpec] = None
    if getattr(args, "allow", None):
        try:
            allowed = _load_allow_list(args.allow)
        except (DatatypeError, OSError) as e:
            logger.error("Could not load allow-list: %s", e, exc_info=True)
            print(f"❌ Error: {e}", file=sys.stderr)
            return 1

    show_progress = bool(config_manager.get_nested("cli.show_progress", True)) and len(args.files) > 1
    files = tqdm(args.files, desc=args.command, unit="file", leave=False) if show_progress else args.files

    exit_code = 0
    for path in files:
        try:
            output = _process(args, _read_input(path), allowed)
        except (DatatypeError, OSError) as e:
            logger.error("Failed to process %s: %s", path, e, exc_info=True)
            print(f"❌ Error: Could not process '{path}': {e}", file=sys.stderr)
            exit_code = 1
            continue

        if show_progress:
            tqdm.write(output)
        else:
            print(output)

    return exit_code
