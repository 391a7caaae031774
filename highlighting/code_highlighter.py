"""
Code highlighter for fenced answer code.
Produces category-tagged spans over the raw (unframed) code text.
"""

import logging
from typing import Mapping, NamedTuple

from highlighting.languages import PROFILE_LOOKUP, LanguageProfile, TokenPattern, get_language_profile
from highlighting.theme import TokenCategory

logger = logging.getLogger(__name__)


class Span(NamedTuple):
    start: int
    end: int
    category: TokenCategory


def _find_spans(rule: TokenPattern, code: str) -> list[Span]:
    spans = []
    for match in rule.regex.finditer(code):
        start, end = match.span(rule.group)
        if start < 0 or end <= start:
            continue
        spans.append(Span(start, end, rule.category))
    return spans


def highlight_with_profile(code: str, profile: LanguageProfile) -> list[Span]:
    """Run every rule of `profile` over the whole code text, in rule order"""
    spans: list[Span] = []
    if not code:
        return spans

    for rule in profile.rules():
        # No masking: later rules add on top of earlier ones
        spans.extend(_find_spans(rule, code))

    logger.debug(f"Highlighted {len(code)} chars as {profile.name}: {len(spans)} spans")
    return spans


def highlight_code(code: str, language: str | None = None,
                   profiles: Mapping[str, LanguageProfile] = PROFILE_LOOKUP) -> list[Span]:
    """
    Highlight one block of code.

    Args:
        code (str): The code text, possibly spanning several lines.
        language (str | None): The fence language tag; unknown or missing
            tags use the generic profile.
        profiles (Mapping): Profile table keyed by lower-case name or alias.

    Returns:
        list[Span]: Spans in original code coordinates, in application order.
    """
    profile = get_language_profile(language, profiles=profiles)
    return highlight_with_profile(code, profile)
