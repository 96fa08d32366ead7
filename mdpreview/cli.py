"""Command line front end for rendering and inspecting markdown files."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from . import __version__
from .blocks import diff_blocks, process_markdown_blocks
from .extensions.toc_extractor import build_toc_tree, extract_table_of_contents
from .renderer import render_markdown


def _read_source(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    return Path(path).read_text(encoding="utf-8")


def _write_json(data, stream) -> None:
    json.dump(data, stream, indent=2, ensure_ascii=False)
    stream.write("\n")


def _cmd_render(args) -> int:
    html = render_markdown(_read_source(args.file))
    if args.output:
        Path(args.output).write_text(html, encoding="utf-8")
    else:
        sys.stdout.write(html)
    return 0


def _cmd_blocks(args) -> int:
    blocks = process_markdown_blocks(_read_source(args.file))
    _write_json([block.to_dict() for block in blocks], sys.stdout)
    return 0


def _cmd_toc(args) -> int:
    toc = extract_table_of_contents(_read_source(args.file))
    _write_json(build_toc_tree(toc) if args.tree else toc, sys.stdout)
    return 0


def _cmd_diff(args) -> int:
    old_blocks = process_markdown_blocks(_read_source(args.old))
    new_blocks = process_markdown_blocks(_read_source(args.new))
    diffs = diff_blocks(old_blocks, new_blocks)
    if args.changes_only:
        diffs = [diff for diff in diffs if diff.type != "keep"]
    _write_json([diff.to_dict() for diff in diffs], sys.stdout)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mdpreview",
        description="Render markdown to HTML, whole or as independently renderable blocks.",
    )
    parser.add_argument("--version", action="version", version=f"mdpreview {__version__}")
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log debug output to stderr",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    render = subparsers.add_parser("render", help="Render a document to HTML")
    render.add_argument("file", help="Markdown file, or - for stdin")
    render.add_argument("-o", "--output", help="Write HTML here instead of stdout")
    render.set_defaults(func=_cmd_render)

    blocks = subparsers.add_parser("blocks", help="Print rendered blocks as JSON")
    blocks.add_argument("file", help="Markdown file, or - for stdin")
    blocks.set_defaults(func=_cmd_blocks)

    toc = subparsers.add_parser("toc", help="Print the table of contents as JSON")
    toc.add_argument("file", help="Markdown file, or - for stdin")
    toc.add_argument("--tree", action="store_true", help="Nest entries by heading level")
    toc.set_defaults(func=_cmd_toc)

    diff = subparsers.add_parser("diff", help="Print block update instructions between two versions")
    diff.add_argument("old", help="Previous version of the document")
    diff.add_argument("new", help="Edited version of the document")
    diff.add_argument("--changes-only", action="store_true", help="Omit unchanged blocks")
    diff.set_defaults(func=_cmd_diff)

    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    return args.func(args)
