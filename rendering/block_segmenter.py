"""
Block segmenter for QuizMark
Splits answer markdown into plain text lines and fenced code blocks
"""

import logging
import re
from dataclasses import dataclass

from rendering.errors import RecoverableParseAmbiguity

logger = logging.getLogger(__name__)

FENCE = "```"
_LINE_BREAK = re.compile(r"\r\n|\r|\n")


@dataclass(frozen=True)
class TextBlock:
    raw_line: str


@dataclass(frozen=True)
class CodeBlock:
    language: str
    lines: tuple[str, ...]

    @property
    def code(self) -> str:
        return "\n".join(self.lines)


def split_lines(text: str) -> list[str]:
    """Split on any line break; a trailing break yields a final empty line"""
    return _LINE_BREAK.split(text)


def fence_language(line: str) -> str:
    """Language tag following an opening fence, or '' when there is none"""
    tokens = line.strip().lstrip("`").split()
    return tokens[0] if tokens else ""


def segment_blocks(text: str, strict: bool = False) -> list:
    """
    Split markdown into TextBlock and CodeBlock items, in document order.

    Args:
        text (str): The full answer markdown.
        strict (bool): Raise RecoverableParseAmbiguity for an unterminated
            fence instead of flushing its lines as a code block.

    Returns:
        list: TextBlock / CodeBlock instances. Fence lines are not emitted.
    """
    blocks = []
    in_code_block = False
    language = ""
    code_lines: list[str] = []
    fence_line_number = 0

    for line_number, line in enumerate(split_lines(text), start=1):
        if line.strip().startswith(FENCE):
            if not in_code_block:
                in_code_block = True
                language = fence_language(line)
                fence_line_number = line_number
                logger.debug(f"Code block opened at line {line_number} with language '{language}'")
            else:
                blocks.append(CodeBlock(language, tuple(code_lines)))
                in_code_block = False
                language = ""
                code_lines = []
        elif in_code_block:
            code_lines.append(line)
        else:
            blocks.append(TextBlock(line))

    if in_code_block:
        message = f"Code fence opened at line {fence_line_number} is never closed"
        if strict:
            raise RecoverableParseAmbiguity(message, fence_line_number)
        logger.warning(f"{message}; rendering the remaining {len(code_lines)} line(s) as code")
        blocks.append(CodeBlock(language, tuple(code_lines)))

    return blocks
