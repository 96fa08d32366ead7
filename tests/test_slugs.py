import pytest

from mdpreview import slugs
from mdpreview.models import generate_block_id
from mdpreview.parser import split_into_blocks
from mdpreview.slugs import Slugger, resolve_slugs


def _block_ids(text):
    return [generate_block_id(b.source, b.start_line, i) for i, b in enumerate(split_into_blocks(text))]


def test_slugger_numbers_duplicates():
    slugger = Slugger()
    assert [slugger.slug("Notes") for _ in range(3)] == ["notes", "notes-1", "notes-2"]


def test_slugger_skips_suffixes_taken_by_literal_headings():
    slugger = Slugger()
    assert slugger.slug("Notes") == "notes"
    assert slugger.slug("Notes 1") == "notes-1"
    assert slugger.slug("Notes") == "notes-2"


@pytest.mark.parametrize(
    "text, expected",
    [
        ("Hello, World!", "hello-world"),
        ("Fish & Chips", "fish-chips"),
        ("Ünïcode Héading", "ünïcode-héading"),
        ("!!!", "section"),
    ],
)
def test_slug_text(text, expected):
    assert Slugger().slug(text) == expected


def test_sluggers_do_not_share_state():
    first, second = Slugger(), Slugger()
    first.slug("Intro")
    assert second.slug("Intro") == "intro"
    first.reset()
    assert first.slug("Intro") == "intro"


def test_duplicate_headings_resolve_to_their_own_blocks(duplicate_headings):
    table = resolve_slugs(duplicate_headings)
    block_ids = _block_ids(duplicate_headings)

    assert [info.slug for info in table] == ["notes", "notes-1"]
    assert table.get(2, block_ids[0], "Notes").slug == "notes"
    assert table.get(2, block_ids[2], "Notes").slug == "notes-1"
    assert table.from_slug("notes-1").block_id == block_ids[2]
    assert [info.global_occurrence for info in table] == [1, 2]


def test_repeated_heading_in_one_block():
    text = "> # Same\n> # Same\n"
    table = resolve_slugs(text)
    (block_id,) = _block_ids(text)

    assert [info.occurrence_in_block for info in table] == [1, 2]
    assert table.get(1, block_id, "Same", 1).slug == "same"
    assert table.get(1, block_id, "Same", 2).slug == "same-1"
    assert table.get(1, block_id, "Same", 3) is None


def test_heading_text_includes_code_spans():
    table = resolve_slugs("## Use `foo` now")
    assert [(info.text, info.slug) for info in table] == [("Use foo now", "use-foo-now")]


def test_code_fence_comments_are_not_headings():
    table = resolve_slugs("```bash\n# comment\n```\n\n# Real")
    assert [info.text for info in table] == ["Real"]


def test_empty_document_has_empty_table():
    assert len(resolve_slugs("")) == 0
    assert len(resolve_slugs("plain text only")) == 0


def test_parse_failure_degrades_to_empty_table(monkeypatch):
    def broken(text, env=None):
        raise ValueError("cannot tokenize")

    monkeypatch.setattr(slugs, "parse", broken)
    assert len(resolve_slugs("# Title")) == 0


def test_heading_inside_bracket_math_is_resolved():
    # Resolution reads the unnormalised text, where this line is a heading
    table = resolve_slugs("\\[\n# x\n\\]\n\n# x")
    assert [info.slug for info in table] == ["x", "x-1"]
