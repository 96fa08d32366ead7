"""
Structural parsing and top-level block splitting.

The same configured ``MarkdownIt`` instance is used for every parse. It only
holds rules and options; all per-document state lives in the token list and
the ``env`` dict of each call, so it is safe to share across threads.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import List

from markdown_it import MarkdownIt
from markdown_it.token import Token
from markdown_it.tree import SyntaxTreeNode
from mdit_py_plugins.dollarmath import dollarmath_plugin
from mdit_py_plugins.tasklists import tasklists_plugin

from .config import get_markdown_config
from .models import BlockSource

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def get_parser() -> MarkdownIt:
    """Return the shared, fully configured parser and HTML renderer."""
    # Render rules for the node types the transforms introduce
    from .transforms import RENDER_RULES

    config = get_markdown_config()
    md = MarkdownIt(config["preset"], config["options"]).enable(config["enable"])
    md.use(dollarmath_plugin, **config["dollarmath"])
    md.use(tasklists_plugin)
    for name, rule in RENDER_RULES.items():
        md.add_render_rule(name, rule)
    return md


def parse(text: str, env: dict | None = None) -> List[Token]:
    return get_parser().parse(text, env if env is not None else {})


def parse_tree(text: str) -> SyntaxTreeNode:
    """Parse ``text`` into a syntax tree whose root children are the top-level blocks."""
    return SyntaxTreeNode(parse(text))


def blocks_from_tree(text: str, tree: SyntaxTreeNode) -> List[BlockSource]:
    """
    Slice ``text`` along the line ranges of the tree's top-level nodes.

    Lines the parser attaches to no node but which are not blank (link
    reference definitions) become blocks of their own, so every non-blank
    line belongs to exactly one block.
    """
    lines = text.split("\n")
    blocks: List[BlockSource] = []
    covered_until = 0  # 0-indexed line after the last emitted block

    def emit(start, end):
        blocks.append(BlockSource("\n".join(lines[start:end]), start + 1, end))

    def emit_uncovered(start, end):
        run_start = None
        for i in range(start, end):
            if lines[i].strip():
                if run_start is None:
                    run_start = i
            elif run_start is not None:
                emit(run_start, i)
                run_start = None
        if run_start is not None:
            emit(run_start, end)

    for node in tree.children:
        if not node.map:
            continue
        start, end = node.map
        if start > covered_until:
            emit_uncovered(covered_until, start)
        emit(start, end)
        covered_until = max(covered_until, end)

    if covered_until < len(lines):
        emit_uncovered(covered_until, len(lines))

    return blocks


def split_into_blocks(text: str) -> List[BlockSource]:
    """Split markdown into its top-level blocks, in document order."""
    if not text.strip():
        return []
    blocks = blocks_from_tree(text, parse_tree(text))
    logger.debug("Split document into %d blocks", len(blocks))
    return blocks
