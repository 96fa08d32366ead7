"""Block-based incremental markdown rendering for a live editor preview."""

from .blocks import diff_blocks, process_block, process_markdown_blocks, process_markdown_blocks_async
from .extensions.toc_extractor import build_toc_tree, extract_table_of_contents
from .models import Block, BlockDiff, BlockSource, HeadingInfo, generate_block_id
from .parser import split_into_blocks
from .postprocessors.slug_injector import inject_slugs
from .preprocessors import preprocess
from .renderer import process_markdown, process_markdown_sync, render_markdown
from .slugs import SlugTable, Slugger, resolve_slugs

__version__ = "0.1.0"

__all__ = [
    "Block",
    "BlockDiff",
    "BlockSource",
    "HeadingInfo",
    "SlugTable",
    "Slugger",
    "build_toc_tree",
    "diff_blocks",
    "extract_table_of_contents",
    "generate_block_id",
    "inject_slugs",
    "preprocess",
    "process_block",
    "process_markdown",
    "process_markdown_blocks",
    "process_markdown_blocks_async",
    "process_markdown_sync",
    "render_markdown",
    "resolve_slugs",
    "split_into_blocks",
]
