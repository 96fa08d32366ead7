"""
Incremental rendering: split a document into top-level blocks, render each
one on its own and diff block lists between edits.

Typical editor loop::

    blocks = process_markdown_blocks(text)
    ...
    new_blocks = process_markdown_blocks(edited_text)
    for change in diff_blocks(blocks, new_blocks):
        ...  # patch the preview
    blocks = new_blocks
"""

from __future__ import annotations

import asyncio
import logging
from typing import List, Sequence

from .models import Block, BlockDiff, BlockSource, generate_block_id
from .parser import get_parser, split_into_blocks
from .postprocessors import apply_postprocessors
from .preprocessors import apply_preprocessors
from .renderer import render_tokens
from .slugs import SlugTable, resolve_slugs
from .transforms import BLOCK_TRANSFORMS, apply_transforms

logger = logging.getLogger(__name__)


def process_block(source: str, context: dict | None = None) -> str:
    """
    Render a single block of markdown to HTML.

    Nothing is shared with other blocks, so blocks can be rendered in any
    order or concurrently. Heading ids are only set when the context carries
    a ``slug_table`` and ``block_id``.
    """
    context = dict(context or {})
    if not source.strip():
        return ""

    text = apply_preprocessors(source, context)
    env = {}
    tokens = get_parser().parse(text, env)
    tokens = apply_transforms(tokens, context, BLOCK_TRANSFORMS)
    html = render_tokens(tokens, env)
    return apply_postprocessors(html, context)


def _block_context(slug_table: SlugTable, block_id: str) -> dict:
    return {"slug_table": slug_table, "block_id": block_id}


def _prepare(text: str):
    raw_blocks = split_into_blocks(text)
    slug_table = resolve_slugs(text)
    block_ids = [generate_block_id(b.source, b.start_line, i) for i, b in enumerate(raw_blocks)]
    return raw_blocks, block_ids, slug_table


def _make_block(raw: BlockSource, block_id: str, html: str) -> Block:
    return Block(
        id=block_id,
        source=raw.source,
        html=html,
        start_line=raw.start_line,
        end_line=raw.end_line,
    )


def process_markdown_blocks(text: str) -> List[Block]:
    """Render ``text`` as a list of blocks with document-consistent heading ids."""
    raw_blocks, block_ids, slug_table = _prepare(text)

    blocks = [
        _make_block(raw, block_id, process_block(raw.source, _block_context(slug_table, block_id)))
        for raw, block_id in zip(raw_blocks, block_ids)
    ]
    logger.debug("Rendered %d blocks", len(blocks))
    return blocks


async def process_markdown_blocks_async(text: str) -> List[Block]:
    """
    Like :func:`process_markdown_blocks`, rendering the blocks concurrently.

    The slug table is resolved first; the block renders only read it.
    """
    raw_blocks, block_ids, slug_table = await asyncio.to_thread(_prepare, text)

    htmls = await asyncio.gather(
        *(
            asyncio.to_thread(process_block, raw.source, _block_context(slug_table, block_id))
            for raw, block_id in zip(raw_blocks, block_ids)
        )
    )
    return [_make_block(raw, block_id, html) for raw, block_id, html in zip(raw_blocks, block_ids, htmls)]


def diff_blocks(old_blocks: Sequence[Block], new_blocks: Sequence[Block]) -> List[BlockDiff]:
    """
    Compare two block lists position by position.

    Equal sources at the same index are kept (the caller may reuse the old
    HTML); differing sources are updated; surplus positions become adds or
    removes. Shifts are not detected: inserting a block mid-document
    reports updates from that point to the end.
    """
    diffs: List[BlockDiff] = []

    for index in range(max(len(old_blocks), len(new_blocks))):
        old_block = old_blocks[index] if index < len(old_blocks) else None
        new_block = new_blocks[index] if index < len(new_blocks) else None

        if old_block is None:
            diffs.append(BlockDiff("add", index, block=new_block))
        elif new_block is None:
            diffs.append(BlockDiff("remove", index, old_index=index))
        elif old_block.source == new_block.source:
            diffs.append(BlockDiff("keep", index, block=new_block))
        else:
            diffs.append(BlockDiff("update", index, block=new_block, old_index=index))

    return diffs
