import pytest

from highlighting.code_highlighter import Span, highlight_code
from highlighting.languages import GENERIC, LANGUAGE_PROFILES, PYTHON, get_language_profile
from highlighting.theme import TokenCategory
from rendering.errors import UnknownLanguage


def spans_of(code, language, category):
    return [code[s.start:s.end] for s in highlight_code(code, language) if s.category is category]


@pytest.mark.parametrize("tag, expected", [
    ("python", "python"), ("PY", "python"), ("Kotlin", "kotlin"), ("java", "java"),
    ("js", "javascript"), ("JavaScript", "javascript"), ("docker", "dockerfile"),
    ("Dockerfile", "dockerfile"), ("yml", "yaml"), ("sh", "bash"), ("shell", "bash"),
    ("generic", "generic"),
])
def test_profile_lookup_is_case_insensitive(tag, expected):
    assert get_language_profile(tag).name == expected


@pytest.mark.parametrize("tag", ["cobol", "", None, "  "])
def test_unknown_or_missing_language_falls_back(tag):
    assert get_language_profile(tag) is GENERIC


def test_unknown_language_strict_raises():
    with pytest.raises(UnknownLanguage) as excinfo:
        get_language_profile("cobol", strict=True)
    assert excinfo.value.tag == "cobol"


def test_keyword_does_not_match_inside_identifier():
    code = "for item in items:\n    print(format(item))"
    keywords = spans_of(code, "python", TokenCategory.KEYWORD)
    assert keywords.count("for") == 1
    assert "format" not in keywords
    for span in highlight_code(code, "python"):
        if span.category is TokenCategory.KEYWORD and code[span.start:span.end] == "for":
            assert span.start == 0


def test_python_keywords_and_function_name():
    code = "def f():\n    return 1"
    spans = highlight_code(code, "python")
    assert Span(0, 3, TokenCategory.KEYWORD) in spans
    assert Span(13, 19, TokenCategory.KEYWORD) in spans
    assert Span(4, 5, TokenCategory.FUNCTION) in spans
    assert Span(20, 21, TokenCategory.NUMBER) in spans


def test_python_triple_quoted_string_spans_lines():
    code = 'x = """first\nsecond"""\n# note'
    strings = spans_of(code, "python", TokenCategory.STRING)
    assert '"""first\nsecond"""' in strings
    assert spans_of(code, "python", TokenCategory.COMMENT) == ["# note"]


def test_block_comment_spans_lines():
    code = "/* a\n b */ val x = 2"
    assert spans_of(code, "kotlin", TokenCategory.COMMENT) == ["/* a\n b */"]


def test_strings_and_comments_come_after_keywords():
    code = 'print("if")  # return'
    spans = highlight_code(code, "python")
    categories = [span.category for span in spans]
    assert categories.index(TokenCategory.STRING) > categories.index(TokenCategory.KEYWORD)
    last_at_if = [span for span in spans if span.start <= 7 < span.end][-1]
    assert last_at_if.category is TokenCategory.STRING


def test_generic_fallback_has_no_keywords():
    code = 'if (x) { return "done"; } // finished'
    spans = highlight_code(code, "cobol")
    assert {span.category for span in spans} == {TokenCategory.STRING, TokenCategory.COMMENT}
    assert spans_of(code, "cobol", TokenCategory.STRING) == ['"done"']


def test_dockerfile_instructions_at_line_start_only():
    code = "from python:3.12\nRUN echo FROM here\n# comment"
    keywords = spans_of(code, "dockerfile", TokenCategory.KEYWORD)
    assert keywords == ["from", "RUN"]
    assert spans_of(code, "docker", TokenCategory.COMMENT) == ["# comment"]


def test_yaml_keys_and_values():
    code = "replicas: 3\nimage: 'nginx'  # pinned"
    assert spans_of(code, "yaml", TokenCategory.TYPE) == ["replicas", "image"]
    assert spans_of(code, "yml", TokenCategory.NUMBER) == ["3"]
    assert spans_of(code, "yaml", TokenCategory.STRING) == ["'nginx'"]
    assert spans_of(code, "yaml", TokenCategory.COMMENT) == ["# pinned"]


def test_bash_commands_options_and_variables():
    code = 'docker run --rm -it $IMAGE | grep "ok"'
    assert "docker" in spans_of(code, "bash", TokenCategory.TYPE)
    assert "$IMAGE" in spans_of(code, "sh", TokenCategory.TYPE)
    assert spans_of(code, "bash", TokenCategory.NUMBER) == ["--rm", "-it"]
    assert spans_of(code, "bash", TokenCategory.OPERATOR) == ["|"]


def test_javascript_function_calls_skip_keywords():
    code = "function greet(name) {\n  if (name) console.log(name);\n}"
    functions = spans_of(code, "js", TokenCategory.FUNCTION)
    assert "greet" in functions
    assert "log" in functions
    assert "if" not in functions


def test_java_control_flow_is_not_a_method():
    code = "} else if (x) {\n    while (y) { run(); }\n}"
    assert spans_of(code, "java", TokenCategory.FUNCTION) == []
    assert spans_of(code, "java", TokenCategory.KEYWORD) == ["else", "if", "while"]


def test_java_method_declaration_is_a_function():
    code = "public static int add(int a, int b) {\n    return sum(a, b);\n}"
    assert spans_of(code, "java", TokenCategory.FUNCTION) == ["add"]


def test_empty_code_gives_no_spans():
    assert highlight_code("", "python") == []


def test_every_profile_spans_are_in_bounds():
    code = 'fun main() { val s = "x"; /* c */ }\n# hash\nkey: 12\n$HOME'
    for name in LANGUAGE_PROFILES:
        for span in highlight_code(code, name):
            assert 0 <= span.start < span.end <= len(code)


def test_keyword_pattern_compiled_once():
    assert PYTHON.keyword_pattern is PYTHON.keyword_pattern
    assert GENERIC.keyword_pattern is None
