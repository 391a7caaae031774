"""
Code box formatter for QuizMark
Wraps code in an editor-style frame with line numbers and moves highlighter
spans from code coordinates into frame coordinates.
"""

from dataclasses import dataclass, field

from highlighting.code_highlighter import Span
from highlighting.theme import DEFAULT_THEME, Theme
from rendering.styled_text import StyledDocument

DEFAULT_LABEL = "code"

# --- Box drawing ---
HORIZONTAL = "─"
VERTICAL = "│"
TOP_LEFT, TOP_RIGHT = "┌", "┐"
MID_LEFT, MID_RIGHT, MID_JOIN = "├", "┤", "┬"
BOTTOM_LEFT, BOTTOM_RIGHT, BOTTOM_JOIN = "└", "┘", "┴"


def line_prefix(number: int, width: int) -> str:
    return f"{VERTICAL} {number:>{width}} {VERTICAL} "


@dataclass
class FrameLayout:
    """
    Offset bookkeeping for a framed code block.

    Rows are appended in output order; for every content row the layout
    remembers where its code starts in the original code text and in the
    framed text, so spans can be moved between the two.
    """
    rows: list[str] = field(default_factory=list)
    length: int = 0
    code_starts: list[int] = field(default_factory=list)
    frame_starts: list[int] = field(default_factory=list)
    code_lengths: list[int] = field(default_factory=list)
    number_starts: list[int] = field(default_factory=list)
    number_width: int = 1

    def _append(self, row: str) -> int:
        # Rows are joined with "\n", so each one after the first adds a separator
        start = self.length + (1 if self.rows else 0)
        self.rows.append(row)
        self.length = start + len(row)
        return start

    def add_border(self, row: str) -> None:
        self._append(row)

    def add_line(self, number: int, code_start: int, line: str) -> None:
        prefix = line_prefix(number, self.number_width)
        row_start = self._append(prefix + line)
        self.code_starts.append(code_start)
        self.frame_starts.append(row_start + len(prefix))
        self.code_lengths.append(len(line))
        self.number_starts.append(row_start + 2)

    @property
    def text(self) -> str:
        return "\n".join(self.rows)

    def map_span(self, start: int, end: int) -> list[tuple[int, int]]:
        """Frame ranges covering code[start:end], split at line boundaries"""
        pieces = []
        for code_start, frame_start, length in zip(self.code_starts, self.frame_starts, self.code_lengths):
            line_end = code_start + length
            if line_end < start:
                continue
            if code_start >= end:
                break
            piece_start = max(start, code_start)
            piece_end = min(end, line_end)
            if piece_start < piece_end:
                offset = frame_start - code_start
                pieces.append((piece_start + offset, piece_end + offset))
        return pieces


def build_frame(lines: list[str] | tuple[str, ...], language: str = "") -> FrameLayout:
    """Lay out the frame rows for `lines` without any styling"""
    label = language or DEFAULT_LABEL
    number_width = len(str(max(len(lines), 1)))
    gutter = HORIZONTAL * (number_width + 2)
    # Wide enough for the label and for the gutter plus a body column
    inner_width = max(len(label) + 2, len(gutter) + 2)
    body = HORIZONTAL * (inner_width - len(gutter) - 1)

    layout = FrameLayout(number_width=number_width)
    layout.add_border(TOP_LEFT + HORIZONTAL * inner_width + TOP_RIGHT)
    layout.add_border(f"{VERTICAL} {label:<{inner_width - 2}} {VERTICAL}")
    layout.add_border(MID_LEFT + gutter + MID_JOIN + body + MID_RIGHT)

    code_start = 0
    for number, line in enumerate(lines, start=1):
        layout.add_line(number, code_start, line)
        code_start += len(line) + 1

    layout.add_border(BOTTOM_LEFT + gutter + BOTTOM_JOIN + body + BOTTOM_RIGHT)
    return layout


def format_code_box(lines, language: str = "", spans: list[Span] | None = None,
                    theme: Theme = DEFAULT_THEME) -> StyledDocument:
    """
    Render code lines as a framed, line-numbered block.

    Args:
        lines: The raw code lines, in order.
        language (str): Fence language tag; shown in the header row.
        spans (list[Span] | None): Highlighter spans over "\\n".join(lines).
        theme (Theme): Palette for token categories and the gutter.

    Returns:
        StyledDocument: The frame text, monospace throughout, with colored runs.
    """
    layout = build_frame(lines, language)
    document = StyledDocument(layout.text)
    document.add_run(0, len(document.text), monospace=True)

    for number_start in layout.number_starts:
        document.add_run(number_start, number_start + layout.number_width, color=theme.gutter)

    for span in spans or ():
        style = theme.style_for(span.category)
        for start, end in layout.map_span(span.start, span.end):
            document.add_run(start, end, color=style.color, bold=style.bold, italic=style.italic)
    return document
