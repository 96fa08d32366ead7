import pytest
from bs4 import BeautifulSoup


DUPLICATE_HEADINGS = """## Notes

First paragraph.

## Notes

Second paragraph.
"""

MIXED_DOCUMENT = """# Guide

Intro text with $a+b$ inline.

## Notes

```bash
# not a heading
echo hi
```

> ## Quoted
>
> Body

Setext Title
============

## Use `foo` now

## Fish &amp; Chips

## Euler $e^{i\\pi}$

$$ x = 1 $$

```mermaid
graph TD
    A[Hello World] --> B{Done?}
```

## Notes

- item one
- item two

## Notes
"""


@pytest.fixture
def duplicate_headings():
    return DUPLICATE_HEADINGS


@pytest.fixture
def mixed_document():
    return MIXED_DOCUMENT


@pytest.fixture
def soup():
    def parse(html):
        return BeautifulSoup(html, "html.parser")

    return parse
