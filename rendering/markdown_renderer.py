"""
Markdown renderer for QuizMark
Entry point turning quiz-answer markdown into a StyledDocument
"""

import logging
from dataclasses import dataclass, field
from typing import Mapping

from highlighting.code_highlighter import highlight_code
from highlighting.languages import PROFILE_LOOKUP, LanguageProfile
from highlighting.theme import DEFAULT_THEME, Theme
from rendering.block_segmenter import CodeBlock, TextBlock, segment_blocks
from rendering.code_box import format_code_box
from rendering.inline_markdown import process_inline
from rendering.styled_text import StyledDocument

logger = logging.getLogger(__name__)

LOG_PREVIEW_CHARS = 200


@dataclass(frozen=True)
class RenderConfig:
    """Immutable tables shared by every render call"""
    theme: Theme = DEFAULT_THEME
    profiles: Mapping[str, LanguageProfile] = field(default_factory=lambda: PROFILE_LOOKUP)


DEFAULT_CONFIG = RenderConfig()


class MarkdownRenderer:
    """Renders answer markdown with one configuration"""

    def __init__(self, config: RenderConfig = DEFAULT_CONFIG):
        self.config = config

    def render(self, markdown: str | None) -> StyledDocument:
        """Render a full answer; never raises, empty input gives an empty document"""
        if not isinstance(markdown, str) or not markdown:
            return StyledDocument()

        logger.debug(f"Parsing markdown: {markdown[:LOG_PREVIEW_CHARS]}...")
        segments = [self._render_block_safe(block) for block in segment_blocks(markdown)]
        document = StyledDocument.join(segments)
        logger.debug(f"Final markdown result length: {len(document.text)}, {len(document.runs)} runs")
        return document

    def render_block(self, block) -> StyledDocument:
        if isinstance(block, CodeBlock):
            spans = highlight_code(block.code, block.language, self.config.profiles)
            return format_code_box(block.lines, block.language, spans, self.config.theme)
        return process_inline(block.raw_line)

    def render_code(self, code: str, language: str | None = None) -> StyledDocument:
        """Highlight a single snippet without the editor frame"""
        document = StyledDocument(code or "")
        document.add_run(0, len(document.text), monospace=True, color=self.config.theme.foreground)
        for span in highlight_code(document.text, language, self.config.profiles):
            style = self.config.theme.style_for(span.category)
            document.add_run(span.start, span.end, color=style.color, bold=style.bold, italic=style.italic)
        return document

    def _render_block_safe(self, block) -> StyledDocument:
        try:
            return self.render_block(block)
        except Exception:
            logger.exception(f"Failed to render {type(block).__name__}, showing it as plain text")
            if isinstance(block, CodeBlock):
                return StyledDocument(block.code)
            if isinstance(block, TextBlock):
                return StyledDocument(block.raw_line)
            return StyledDocument()


_default_renderer = MarkdownRenderer()


def render_markdown(markdown: str | None, config: RenderConfig | None = None) -> StyledDocument:
    """Render answer markdown with `config`, or the default tables"""
    renderer = _default_renderer if config is None else MarkdownRenderer(config)
    return renderer.render(markdown)


def render_code(code: str, language: str | None = None, config: RenderConfig | None = None) -> StyledDocument:
    renderer = _default_renderer if config is None else MarkdownRenderer(config)
    return renderer.render_code(code, language)
