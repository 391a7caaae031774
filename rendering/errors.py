"""
Error taxonomy for the QuizMark renderer.

None of these escape render_markdown(): the renderer resolves each one with a
documented fallback and logs it. They are raised only by the strict lookups,
for callers that want to detect malformed answer text.
"""


class MarkdownRenderError(Exception):
    """Base class for recoverable rendering problems"""


class RecoverableParseAmbiguity(MarkdownRenderError):
    """A fence or delimiter could not be resolved cleanly (e.g. unterminated code fence)"""

    def __init__(self, message: str, line_number: int | None = None):
        super().__init__(message)
        self.line_number = line_number


class UnknownLanguage(MarkdownRenderError):
    """A code fence named a language with no highlighting profile"""

    def __init__(self, tag: str):
        super().__init__(f"No highlighting profile for language '{tag}'")
        self.tag = tag
