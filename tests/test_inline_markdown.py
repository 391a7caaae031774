from rendering.inline_markdown import process_header, process_inline
from rendering.styled_text import StyledRun


def test_plain_line_is_unchanged():
    document = process_inline("Just a sentence, nothing more.")
    assert document.text == "Just a sentence, nothing more."
    assert document.runs == []


def test_mixed_inline_markers():
    document = process_inline("**bold** and *italic* and `code`")
    assert document.text == "bold and italic and code"
    assert sorted(document.runs, key=lambda run: run.start) == [
        StyledRun(0, 4, bold=True),
        StyledRun(9, 15, italic=True),
        StyledRun(20, 24, monospace=True),
    ]


def test_header_levels():
    h1 = process_inline("# Title")
    assert h1.text == "Title"
    assert h1.runs == [StyledRun(0, 5, bold=True)]

    h2 = process_inline("## Sub title")
    assert h2.runs == [StyledRun(0, 9, bold=True)]

    h3 = process_inline("### Minor")
    assert h3.text == "Minor"
    assert h3.runs == []


def test_header_skips_other_stages():
    document = process_inline("# A **bold** header")
    assert document.text == "A **bold** header"
    assert document.runs == [StyledRun(0, 17, bold=True)]


def test_not_a_header_without_space():
    assert process_header("#hashtag") is None
    assert process_header("####### seven") is None


def test_underscore_forms():
    document = process_inline("__strong__ and _soft_")
    assert document.text == "strong and soft"
    assert StyledRun(0, 6, bold=True) in document.runs
    assert StyledRun(11, 15, italic=True) in document.runs


def test_snake_case_is_left_alone():
    document = process_inline("call my_helper_function now")
    assert document.text == "call my_helper_function now"
    assert document.runs == []


def test_unbalanced_delimiters_stay_literal():
    document = process_inline("a ** b and `c")
    assert document.text == "a ** b and `c"
    assert document.runs == []


def test_code_run_remapped_after_bold_stripping():
    document = process_inline("**Use** `git status`")
    assert document.text == "Use git status"
    mono = [run for run in document.runs if run.monospace]
    assert mono == [StyledRun(4, 14, monospace=True)]
    assert document.text[4:14] == "git status"


def test_emphasis_markers_inside_code_are_literal():
    document = process_inline("run `a*b*c` now")
    assert document.text == "run a*b*c now"
    assert document.runs == [StyledRun(4, 9, monospace=True)]


def test_code_inside_bold():
    document = process_inline("**see `x` here**")
    assert document.text == "see x here"
    assert StyledRun(0, 10, bold=True) in document.runs
    assert StyledRun(4, 5, monospace=True) in document.runs


def test_bold_italic_triple_star():
    document = process_inline("***both***")
    assert document.text == "both"
    assert StyledRun(0, 4, bold=True) in document.runs
    assert StyledRun(0, 4, italic=True) in document.runs


def test_runs_within_bounds():
    for line in ["`a` **b** *c* _d_", "**x** `y` *z*", "*", "``", "****"]:
        document = process_inline(line)
        for run in document.runs:
            assert 0 <= run.start < run.end <= len(document.text)
