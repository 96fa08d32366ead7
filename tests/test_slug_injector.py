from mdpreview.models import HeadingInfo
from mdpreview.postprocessors import apply_postprocessors
from mdpreview.postprocessors.slug_injector import inject_slugs
from mdpreview.slugs import SlugTable


def _table(*entries):
    table = SlugTable()
    for level, text, slug, block_id in entries:
        table.add(HeadingInfo(level, text, slug, block_id, 1, 1))
    return table


def test_sets_id_from_table(soup):
    html = '<h2 data-source-line="1">Notes</h2>\n'
    result = inject_slugs(html, _table((2, "Notes", "notes-1", "blk")), "blk")

    heading = soup(result).h2
    assert heading["id"] == "notes-1"
    assert heading["data-source-line"] == "1"
    assert heading.get_text() == "Notes"


def test_replaces_existing_id(soup):
    html = '<h2 id="old" class="x">Notes</h2>'
    heading = soup(inject_slugs(html, _table((2, "Notes", "notes", "blk")), "blk")).h2
    assert heading["id"] == "notes"
    assert heading["class"] == ["x"]


def test_matches_decoded_text_without_markup(soup):
    table = _table((3, "A & B", "a-b", "blk"), (2, "Use foo now", "use-foo-now", "blk"))
    html = "<h3>A &amp; B</h3><h2>Use <code>foo</code> now</h2>"
    result = soup(inject_slugs(html, table, "blk"))
    assert result.h3["id"] == "a-b"
    assert result.h2["id"] == "use-foo-now"


def test_rendered_math_is_ignored_when_matching(soup):
    html = '<h2>Euler <span class="math inline" data-math="inline">\\(e\\)</span></h2>'
    result = inject_slugs(html, _table((2, "Euler ", "euler", "blk")), "blk")
    assert soup(result).h2["id"] == "euler"


def test_author_math_class_is_heading_text(soup):
    html = '<h2>A <span class="math">b</span></h2>'
    result = inject_slugs(html, _table((2, "A b", "a-b", "blk")), "blk")
    assert soup(result).h2["id"] == "a-b"


def test_misses_leave_html_untouched():
    html = "<h2>Notes</h2>"
    table = _table((2, "Notes", "notes", "blk"))
    assert inject_slugs(html, table, "other-block") == html
    assert inject_slugs(html, _table((3, "Notes", "notes", "blk")), "blk") == html
    assert inject_slugs(html, SlugTable(), "blk") == html


def test_postprocessor_needs_table_and_block_id(soup):
    html = "<h1>Title</h1>"
    table = _table((1, "Title", "title", "blk"))
    assert apply_postprocessors(html, {}) == html
    assert apply_postprocessors(html, {"slug_table": table}) == html
    result = apply_postprocessors(html, {"slug_table": table, "block_id": "blk"})
    assert soup(result).h1["id"] == "title"
