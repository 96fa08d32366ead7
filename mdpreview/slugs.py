"""
Heading slugs shared by the block and full-document render paths.

Both paths derive heading text with :func:`heading_text` and number
duplicates with a fresh :class:`Slugger`, walking headings in document order.
The block path resolves every slug up front from the whole document and
injects them into each block afterwards, so a heading keeps the id it would
get in a full render even when only its own block is re-rendered.

The resolver reads the text as written, before display math is normalised,
so its line numbers line up with the blocks. A ``#`` line inside a ``\\[ ... \\]``
region therefore counts as a heading here but not in a full render.
"""

from __future__ import annotations

import logging
from bisect import bisect_right
from collections import Counter
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

from django.utils.text import slugify
from markdown_it.token import Token
from markdown_it.tree import SyntaxTreeNode

from .models import BlockSource, HeadingInfo, generate_block_id
from .parser import blocks_from_tree, parse

logger = logging.getLogger(__name__)

UNKNOWN_BLOCK = "unknown"

# Inline tokens whose text is part of a heading's plain text
_LITERAL_TOKENS = {"text", "code_inline"}
_BREAK_TOKENS = {"softbreak", "hardbreak"}


class Slugger:
    """
    Generate unique slugs for one document.

    Repeats of a slug get ``-1``, ``-2``, ... appended, skipping any suffix
    already taken by a literal heading. Create one per document; the counter
    must never be shared between documents.
    """

    def __init__(self):
        self.occurrences: Dict[str, int] = {}

    def slug(self, value: str) -> str:
        base = slugify(value, allow_unicode=True) or "section"
        result = base
        while result in self.occurrences:
            self.occurrences[base] += 1
            result = f"{base}-{self.occurrences[base]}"
        self.occurrences[result] = 0
        return result

    def reset(self):
        self.occurrences.clear()


def heading_text(inline: Optional[Token]) -> str:
    """Concatenate the literal text of a heading's inline content."""
    if inline is None or not inline.children:
        return ""
    parts = []
    for child in inline.children:
        if child.type in _LITERAL_TOKENS:
            parts.append(child.content)
        elif child.type in _BREAK_TOKENS:
            parts.append("\n")
    return "".join(parts)


def heading_level(token: Token) -> int:
    return int(token.tag[1])


def iter_headings(tokens: Sequence[Token]) -> Iterator[Tuple[Token, Optional[Token]]]:
    """Yield ``(heading_open, inline)`` pairs in document order, at any depth."""
    for idx, token in enumerate(tokens):
        if token.type == "heading_open":
            inline = tokens[idx + 1] if idx + 1 < len(tokens) else None
            yield token, inline if inline is not None and inline.type == "inline" else None


class SlugTable:
    """
    Resolved heading slugs for one document.

    Entries are keyed by ``(level, block_id, text)``; repeated headings with
    the same key inside one block are kept in order and told apart by their
    1-based occurrence.
    """

    def __init__(self):
        self.headings: List[HeadingInfo] = []
        self._by_key: Dict[Tuple[int, str, str], List[HeadingInfo]] = {}
        self._by_slug: Dict[str, HeadingInfo] = {}

    def add(self, info: HeadingInfo):
        self.headings.append(info)
        self._by_key.setdefault((info.level, info.block_id, info.text), []).append(info)
        self._by_slug[info.slug] = info

    def get(self, level: int, block_id: str, text: str, occurrence: int = 1) -> Optional[HeadingInfo]:
        entries = self._by_key.get((level, block_id, text))
        if not entries or occurrence < 1 or occurrence > len(entries):
            return None
        return entries[occurrence - 1]

    def from_slug(self, slug: str) -> Optional[HeadingInfo]:
        return self._by_slug.get(slug)

    def __len__(self):
        return len(self.headings)

    def __iter__(self):
        return iter(self.headings)


def _owning_block(blocks: List[BlockSource], starts: List[int], block_ids: List[str], line: int) -> str:
    idx = bisect_right(starts, line) - 1
    if idx >= 0 and line <= blocks[idx].end_line:
        return block_ids[idx]
    return UNKNOWN_BLOCK


def resolve_slugs(text: str) -> SlugTable:
    """
    Resolve the slug of every heading in ``text``.

    Parse failures are logged and produce an empty table; headings then
    simply render without ids.
    """
    table = SlugTable()
    if not text.strip():
        return table

    try:
        tokens = parse(text)
        blocks = blocks_from_tree(text, SyntaxTreeNode(tokens))
        block_ids = [generate_block_id(b.source, b.start_line, i) for i, b in enumerate(blocks)]
        starts = [block.start_line for block in blocks]

        slugger = Slugger()
        global_counts: Counter = Counter()
        block_counts: Counter = Counter()

        for heading, inline in iter_headings(tokens):
            title = heading_text(inline)
            if not title.strip():
                continue

            level = heading_level(heading)
            line = heading.map[0] + 1 if heading.map else 0
            block_id = _owning_block(blocks, starts, block_ids, line)
            global_counts[(level, title)] += 1
            block_counts[(level, block_id, title)] += 1

            table.add(
                HeadingInfo(
                    level=level,
                    text=title,
                    slug=slugger.slug(title),
                    block_id=block_id,
                    occurrence_in_block=block_counts[(level, block_id, title)],
                    global_occurrence=global_counts[(level, title)],
                )
            )
    except Exception:
        logger.error("Failed to resolve heading slugs", exc_info=True)
        return SlugTable()

    logger.debug("Resolved %d heading slugs", len(table))
    return table
