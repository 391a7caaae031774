"""
Qt display host for QuizMark
Maps StyledDocument runs onto QTextCharFormat and shows answers in a QTextBrowser
"""

import logging

from PyQt6.QtCore import QTimer
from PyQt6.QtGui import QColor, QFont, QTextCharFormat, QTextCursor, QTextDocument
from PyQt6.QtWidgets import QTextBrowser

from highlighting.theme import DEFAULT_COLORS, Theme
from rendering.markdown_renderer import DEFAULT_CONFIG, MarkdownRenderer, RenderConfig
from rendering.styled_text import StyledDocument, StyledRun

logger = logging.getLogger(__name__)

MONOSPACE_FAMILIES = ["Consolas", "Monaco", "Courier New", "monospace"]


def char_format_for_run(run: StyledRun) -> QTextCharFormat:
    """Build the Qt character format for one run; unset attributes are left untouched on merge"""
    fmt = QTextCharFormat()
    if run.bold:
        fmt.setFontWeight(QFont.Weight.Bold)
    if run.italic:
        fmt.setFontItalic(True)
    if run.monospace:
        fmt.setFontFamilies(MONOSPACE_FAMILIES)
        fmt.setFontFixedPitch(True)
    if run.color is not None:
        color = QColor(run.color)
        if color.isValid():
            fmt.setForeground(color)
        else:
            logger.warning(f"Ignoring invalid run color '{run.color}'")
    return fmt


def _utf16_positions(text: str) -> list[int] | None:
    """Qt indexes UTF-16 code units; map Python offsets when astral characters are present"""
    if all(ord(ch) <= 0xFFFF for ch in text):
        return None
    positions = [0]
    for ch in text:
        positions.append(positions[-1] + (2 if ord(ch) > 0xFFFF else 1))
    return positions


def apply_styled_document(document: StyledDocument, qdocument: QTextDocument) -> None:
    """Replace the contents of `qdocument` with `document`, merging run formats in order"""
    qdocument.setPlainText(document.text)
    positions = _utf16_positions(document.text)
    cursor = QTextCursor(qdocument)
    cursor.beginEditBlock()
    for run in document.runs:
        start, end = (run.start, run.end) if positions is None else (positions[run.start], positions[run.end])
        cursor.setPosition(start)
        cursor.setPosition(end, QTextCursor.MoveMode.KeepAnchor)
        cursor.mergeCharFormat(char_format_for_run(run))
    cursor.endEditBlock()


class MarkdownAnswerViewer(QTextBrowser):
    """Read-only view for a quiz answer rendered from markdown"""

    def __init__(self, colors: dict | None = None, config: RenderConfig = DEFAULT_CONFIG):
        super().__init__()
        self.colors = dict(DEFAULT_COLORS, **(colors or {}))
        if colors and config is DEFAULT_CONFIG:
            config = RenderConfig(theme=Theme.from_colors(self.colors))
        self.renderer = MarkdownRenderer(config)
        self.setOpenExternalLinks(False)
        self.setReadOnly(True)
        self.setup_style()

    def setup_style(self, code_panel: bool = False):
        """Apply the answer (light text) or code panel (dark editor) styling"""
        background = self.colors["background"] if code_panel else "transparent"
        foreground = self.colors["foreground"] if code_panel else self.colors["text"]
        padding = "16px 24px" if code_panel else "0px"
        self.setStyleSheet(f"""
            QTextBrowser {{
                color: {foreground};
                background-color: {background};
                border: none;
                padding: {padding};
            }}
        """)

    def set_markdown_text(self, markdown: str):
        """Render `markdown` and display it"""
        self.setup_style(code_panel=False)
        self.show_document(self.renderer.render(markdown))

    def set_code_text(self, code: str, language: str = "kotlin"):
        """Display a single highlighted snippet on the dark code panel"""
        self.setup_style(code_panel=True)
        self.show_document(self.renderer.render_code(code, language))

    def show_document(self, document: StyledDocument):
        self.preserve_scroll_position(lambda: apply_styled_document(document, self.document()))

    def preserve_scroll_position(self, update_func):
        """Preserve scroll position during content updates"""
        scrollbar = self.verticalScrollBar()
        scroll_pos = scrollbar.value()

        update_func()

        QTimer.singleShot(10, lambda: scrollbar.setValue(scroll_pos))
