import json

from mdpreview.cli import main


def test_render_writes_html(tmp_path, capsys):
    source = tmp_path / "doc.md"
    source.write_text("# Title\n\nBody\n", encoding="utf-8")

    assert main(["render", str(source)]) == 0
    out = capsys.readouterr().out
    assert 'id="title"' in out
    assert "<p" in out


def test_render_to_output_file(tmp_path):
    source = tmp_path / "doc.md"
    target = tmp_path / "doc.html"
    source.write_text("Hello", encoding="utf-8")

    assert main(["render", str(source), "-o", str(target)]) == 0
    assert "Hello" in target.read_text(encoding="utf-8")


def test_blocks_and_toc_are_json(tmp_path, capsys, duplicate_headings):
    source = tmp_path / "doc.md"
    source.write_text(duplicate_headings, encoding="utf-8")

    assert main(["blocks", str(source)]) == 0
    blocks = json.loads(capsys.readouterr().out)
    assert [block["start_line"] for block in blocks] == [1, 3, 5, 7]

    assert main(["toc", str(source), "--tree"]) == 0
    toc = json.loads(capsys.readouterr().out)
    assert [node["id"] for node in toc] == ["notes", "notes-1"]


def test_diff_reports_changes_only(tmp_path, capsys):
    old = tmp_path / "old.md"
    new = tmp_path / "new.md"
    old.write_text("A\n\nB\n", encoding="utf-8")
    new.write_text("A\n\nB changed\n\nC\n", encoding="utf-8")

    assert main(["diff", str(old), str(new), "--changes-only"]) == 0
    diffs = json.loads(capsys.readouterr().out)
    assert [(d["type"], d["index"]) for d in diffs] == [("update", 1), ("add", 2)]
    assert diffs[1]["block"]["source"] == "C"
