"""Value types exchanged between the block pipeline and its callers."""

from __future__ import annotations

import hashlib
from dataclasses import asdict, dataclass
from typing import Literal, Optional

DiffType = Literal["add", "remove", "update", "keep"]


@dataclass(frozen=True)
class BlockSource:
    """A top-level slice of the source document, before rendering."""

    source: str
    start_line: int
    end_line: int


@dataclass(frozen=True)
class Block:
    id: str
    source: str
    html: str
    start_line: int
    end_line: int

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class HeadingInfo:
    """One heading occurrence, anchored to document order and its owning block."""

    level: int
    text: str
    slug: str
    block_id: str
    occurrence_in_block: int
    global_occurrence: int


@dataclass(frozen=True)
class BlockDiff:
    type: DiffType
    index: int
    block: Optional[Block] = None
    old_index: Optional[int] = None

    def to_dict(self) -> dict:
        data = {"type": self.type, "index": self.index}
        if self.block is not None:
            data["block"] = self.block.to_dict()
        if self.old_index is not None:
            data["old_index"] = self.old_index
        return data


def generate_block_id(source: str, start_line: int, index: int) -> str:
    """
    Build a stable identifier for a block.

    The digest covers the content and start line; the positional index is
    prefixed so identical blocks at different positions never collide.
    """
    digest = hashlib.sha1(f"{source}|{start_line}".encode("utf-8")).hexdigest()[:10]
    return f"b{index}-{digest}-{start_line}"
