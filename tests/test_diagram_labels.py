from mdpreview.preprocessors.diagram_labels import wrap_diagram_labels, wrap_label_line


def test_rectangle_label_is_wrapped():
    assert wrap_label_line("    A[Hello World] --> B") == '    A["`Hello World`"] --> B'


def test_every_shape_on_a_line_is_wrapped():
    line = "A[One] --> B(Two) --> C{Three}"
    assert wrap_label_line(line) == 'A["`One`"] --> B("`Two`") --> C{"`Three`"}'


def test_multi_character_shapes():
    assert wrap_label_line("A[[Sub]]") == 'A[["`Sub`"]]'
    assert wrap_label_line("A{{Hex}}") == 'A{{"`Hex`"}}'
    assert wrap_label_line("A([Stadium])") == 'A(["`Stadium`"])'
    assert wrap_label_line("A(((Circle)))") == 'A((("`Circle`")))'


def test_plain_circle_is_not_touched():
    assert wrap_label_line("A((Circle))") == "A((Circle))"


def test_edge_labels_are_not_node_text():
    assert wrap_label_line("A -->|yes| B(Go)") == 'A -->|yes| B("`Go`")'


def test_icon_labels_are_skipped():
    assert wrap_label_line("A[fa:fa-car Car]") == "A[fa:fa-car Car]"


def test_comments_frontmatter_and_wrapped_lines_are_skipped():
    code = "\n".join(
        [
            "---",
            "title: X[y]",
            "---",
            "%% A[comment]",
            'A["`done`"] --> B[also]',
            "C[wrap me]",
        ]
    )
    assert wrap_diagram_labels(code).split("\n") == [
        "---",
        "title: X[y]",
        "---",
        "%% A[comment]",
        'A["`done`"] --> B[also]',
        'C["`wrap me`"]',
    ]
