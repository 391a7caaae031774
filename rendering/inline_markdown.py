"""
Inline markdown processor for QuizMark
Handles headers, inline code, bold and italic on a single text line
"""

import re

from rendering.styled_text import StyledDocument, StyledRun

HEADER_PATTERN = re.compile(r"^(#{1,6})\s+(.+)$")
INLINE_CODE_PATTERN = re.compile(r"`([^`]+)`")
# Underscore forms only at word boundaries so snake_case stays literal
BOLD_PATTERN = re.compile(r"\*\*([^*]+)\*\*|(?<!\w)__([^_]+)__(?!\w)")
ITALIC_PATTERN = re.compile(r"\*([^*]+)\*|(?<!\w)_([^_]+)_(?!\w)")

BOLD_HEADER_LEVELS = (1, 2)


class _OffsetMap:
    """Maps offsets in a text to offsets after some of its ranges were removed"""

    def __init__(self, removed: list[tuple[int, int]]):
        self.removed = removed

    def __call__(self, position: int) -> int:
        shift = 0
        for start, end in self.removed:
            if start >= position:
                break
            shift += min(position, end) - start
        return position - shift


def _overlaps(start: int, end: int, ranges: list[tuple[int, int]]) -> bool:
    return any(start < r_end and r_start < end for r_start, r_end in ranges)


def _strip_delimited(document: StyledDocument, pattern: re.Pattern, protected: list[tuple[int, int]],
                     **attributes) -> StyledDocument:
    """
    Remove the delimiters of every `pattern` match and style the inner text.

    Runs already on `document` are remapped into the stripped text. Matches
    whose delimiters fall inside a protected range are left untouched.
    """
    text = document.text
    pieces = []
    removed: list[tuple[int, int]] = []
    inner_ranges: list[tuple[int, int]] = []
    last_end = 0
    position = 0

    while True:
        match = pattern.search(text, position)
        if match is None:
            break
        group = match.lastindex or 1
        inner_start, inner_end = match.span(group)
        if _overlaps(match.start(), inner_start, protected) or _overlaps(inner_end, match.end(), protected):
            position = match.start() + 1
            continue

        pieces.append(text[last_end:match.start()])
        pieces.append(text[inner_start:inner_end])
        removed.append((match.start(), inner_start))
        removed.append((inner_end, match.end()))
        inner_ranges.append((inner_start, inner_end))
        last_end = position = match.end()

    if not removed:
        return document

    pieces.append(text[last_end:])
    to_new = _OffsetMap(removed)
    result = StyledDocument("".join(pieces))
    for run in document.runs:
        start, end = to_new(run.start), to_new(run.end)
        if start < end:
            result.runs.append(StyledRun(start, end, run.bold, run.italic, run.monospace, run.color))
    for inner_start, inner_end in inner_ranges:
        result.add_run(to_new(inner_start), to_new(inner_end), **attributes)
    return result


def process_header(line: str) -> StyledDocument | None:
    """Return the styled header text, or None when the line is not a header"""
    match = HEADER_PATTERN.match(line)
    if not match:
        return None

    level = len(match.group(1))
    document = StyledDocument(match.group(2))
    if level in BOLD_HEADER_LEVELS:
        document.add_run(0, len(document.text), bold=True)
    return document


def process_inline(line: str) -> StyledDocument:
    """
    Convert one markdown line to styled text.

    Stages run in a fixed order (header, inline code, bold, italic), each
    on the previous stage's output, so the returned runs always index the
    fully stripped text.
    """
    header = process_header(line)
    if header is not None:
        return header

    document = StyledDocument(line)
    document = _strip_delimited(document, INLINE_CODE_PATTERN, [], monospace=True)

    code_ranges = [(run.start, run.end) for run in document.runs if run.monospace]
    document = _strip_delimited(document, BOLD_PATTERN, code_ranges, bold=True)

    code_ranges = [(run.start, run.end) for run in document.runs if run.monospace]
    document = _strip_delimited(document, ITALIC_PATTERN, code_ranges, italic=True)
    return document
