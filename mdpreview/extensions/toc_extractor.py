from __future__ import annotations

import logging
from typing import Iterable, Mapping, TypedDict

from bs4 import BeautifulSoup

from ..parser import parse
from ..postprocessors.slug_injector import HEADING_TAGS, heading_plain_text
from ..slugs import Slugger, heading_level, heading_text, iter_headings

logger = logging.getLogger(__name__)


class TocEntry(TypedDict):
    level: int
    text: str
    id: str


class HeadingNode(TypedDict):
    level: int
    id: str
    text: str
    children: list["HeadingNode"]


def extract_table_of_contents(markdown: str) -> list[TocEntry]:
    """
    Return the document's headings in order, with the ids a render assigns.

    Headings are read from the parsed document, so ``#`` lines inside code
    fences are never mistaken for headings. Parse failures are logged and
    yield an empty list.
    """
    toc: list[TocEntry] = []
    if not markdown.strip():
        return toc

    slugger = Slugger()
    try:
        for heading, inline in iter_headings(parse(markdown)):
            text = heading_text(inline)
            if not text.strip():
                continue
            toc.append(
                {
                    "level": heading_level(heading),
                    "text": text.strip(),
                    "id": slugger.slug(text),
                }
            )
    except Exception:
        logger.error("Failed to extract table of contents", exc_info=True)
        return []

    return toc


def extract_toc_from_html(html: str) -> list[TocEntry]:
    """
    Given rendered HTML, return its headings as flat TOC entries.

    Headings without an id are skipped.
    """
    soup = BeautifulSoup(html, "html.parser")
    toc: list[TocEntry] = []
    for heading in soup.find_all(HEADING_TAGS):
        identifier = heading.get("id")
        if not identifier:
            continue
        toc.append(
            {
                "level": int(heading.name[1]),  # "h2" -> 2
                "text": heading_plain_text(heading).strip(),
                "id": identifier,
            }
        )
    return toc


def build_toc_tree(entries: Iterable[Mapping]) -> list[HeadingNode]:
    """
    Nest flat TOC entries by heading level.

    Each heading becomes a child of the closest preceding heading with a
    lower level; skipped levels (h1 straight to h3) nest directly.
    """
    tree: list[HeadingNode] = []
    stack: list[HeadingNode] = []
    for entry in entries:
        node: HeadingNode = {
            "level": int(entry["level"]),
            "id": str(entry["id"]),
            "text": str(entry["text"]),
            "children": [],
        }

        while stack and stack[-1]["level"] >= node["level"]:
            stack.pop()

        if stack:
            stack[-1]["children"].append(node)
        else:
            tree.append(node)

        stack.append(node)

    return tree
