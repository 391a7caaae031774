"""
Language rule tables for the code highlighter.

Each LanguageProfile holds a keyword set and an ordered list of TokenPattern
rules. All regexes are compiled once at import; the tables are read-only
afterwards. Rule order is the application order, so rules later in the list
win where spans overlap: strings and comments always come last.
"""

import logging
import re
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

from highlighting.theme import TokenCategory
from rendering.errors import UnknownLanguage

logger = logging.getLogger(__name__)

MULTILINE_FLAGS = re.MULTILINE | re.DOTALL


@dataclass(frozen=True)
class TokenPattern:
    """One highlighting rule: spans of `group` in every match get `category`"""
    category: TokenCategory
    regex: re.Pattern
    multiline: bool = False
    group: int = 0


def _rule(category: TokenCategory, pattern: str, multiline: bool = False, group: int = 0, flags: int = 0) -> TokenPattern:
    if multiline:
        flags |= MULTILINE_FLAGS
    return TokenPattern(category, re.compile(pattern, flags), multiline, group)


@dataclass(frozen=True)
class LanguageProfile:
    name: str
    keywords: frozenset = frozenset()
    patterns: tuple = ()
    aliases: tuple = ()
    keyword_ignore_case: bool = False
    keyword_line_start: bool = False
    keyword_pattern: re.Pattern | None = field(init=False, default=None, compare=False, repr=False)

    def __post_init__(self):
        # One alternation per profile instead of a regex per keyword
        if not self.keywords:
            return
        words = sorted(self.keywords, key=lambda w: (-len(w), w))
        alternation = "|".join(re.escape(w) for w in words)
        flags = re.IGNORECASE if self.keyword_ignore_case else 0
        if self.keyword_line_start:
            pattern = re.compile(rf"^[ \t]*({alternation})\b", flags | re.MULTILINE)
        else:
            pattern = re.compile(rf"\b({alternation})\b", flags)
        object.__setattr__(self, "keyword_pattern", pattern)

    def rules(self) -> list[TokenPattern]:
        """Keyword rule first, then the profile's own patterns in order"""
        rules = []
        if self.keyword_pattern is not None:
            rules.append(TokenPattern(TokenCategory.KEYWORD, self.keyword_pattern, self.keyword_line_start, 1))
        rules.extend(self.patterns)
        return rules


# --- Shared rules ---
DOUBLE_QUOTE_STRING = _rule(TokenCategory.STRING, r'"(?:[^"\\\n]|\\.)*"')
SINGLE_QUOTE_STRING = _rule(TokenCategory.STRING, r"'(?:[^'\\\n]|\\.)*'")
SLASH_COMMENT = _rule(TokenCategory.COMMENT, r"//[^\n]*")
HASH_COMMENT = _rule(TokenCategory.COMMENT, r"#[^\n]*")
BLOCK_COMMENT = _rule(TokenCategory.COMMENT, r"/\*.*?\*/", multiline=True)
NUMBER = _rule(TokenCategory.NUMBER, r"\b\d+\.?\d*\b")
OPERATOR = _rule(TokenCategory.OPERATOR, r"[+\-*/=<>!&|^%~?:;.,]")
BRACKET = _rule(TokenCategory.BRACKET, r"[{}()\[\]]")
SHELL_VARIABLE = _rule(TokenCategory.TYPE, r"\$\{?[A-Za-z_][A-Za-z0-9_]*\}?")

C_STYLE_TAIL = (NUMBER, OPERATOR, BRACKET, DOUBLE_QUOTE_STRING, SINGLE_QUOTE_STRING, SLASH_COMMENT, BLOCK_COMMENT)


KOTLIN = LanguageProfile(
    name="kotlin",
    keywords=frozenset({
        "fun", "val", "var", "class", "interface", "object", "companion", "data", "sealed",
        "enum", "open", "override", "abstract", "private", "protected", "public", "internal",
        "lateinit", "suspend", "inline", "if", "else", "when", "for", "while", "do", "try",
        "catch", "finally", "throw", "return", "break", "continue", "import", "package",
        "as", "is", "in", "by", "init", "constructor", "this", "super", "true", "false", "null",
    }),
    patterns=(
        _rule(TokenCategory.FUNCTION, r"\bfun\s+(?:<[^>]*>\s*)?(?:\w+\.)?(\w+)\s*\(", group=1),
        _rule(TokenCategory.TYPE, r"\b(?:class|interface|object)\s+(\w+)", group=1),
    ) + C_STYLE_TAIL,
)

JAVA = LanguageProfile(
    name="java",
    keywords=frozenset({
        "public", "private", "protected", "class", "interface", "enum", "extends", "implements",
        "static", "final", "abstract", "synchronized", "void", "int", "long", "short", "byte",
        "char", "float", "double", "boolean", "String", "if", "else", "switch", "case",
        "default", "for", "while", "do", "try", "catch", "finally", "throw", "throws",
        "return", "break", "continue", "import", "package", "new", "this", "super",
        "instanceof", "true", "false", "null",
    }),
    patterns=(
        _rule(TokenCategory.FUNCTION,
              r"\b(?:(?:public|private|protected|static|final|abstract|synchronized)\s+)*"
              r"(?!(?:return|new|else|throw|case)\b)[\w\[\]<>]+\s+"
              r"(?!(?:if|for|while|switch|catch|synchronized|return|new|else)\b)(\w+)\s*\(",
              group=1),
        _rule(TokenCategory.TYPE, r"\b(?:class|interface|enum)\s+(\w+)", group=1),
    ) + C_STYLE_TAIL,
)

JAVASCRIPT = LanguageProfile(
    name="javascript",
    aliases=("js",),
    keywords=frozenset({
        "function", "const", "let", "var", "if", "else", "for", "while", "do", "switch",
        "case", "default", "try", "catch", "finally", "throw", "return", "break", "continue",
        "async", "await", "class", "extends", "new", "this", "import", "export", "from",
        "typeof", "instanceof", "of", "in", "true", "false", "null", "undefined", "require",
        "module", "exports",
    }),
    patterns=(
        _rule(TokenCategory.FUNCTION, r"\bfunction\s+([A-Za-z_$][\w$]*)", group=1),
        _rule(TokenCategory.FUNCTION,
              r"\b(?!(?:if|for|while|switch|catch|return|function|typeof)\b)([A-Za-z_$][\w$]*)\s*\(",
              group=1),
        _rule(TokenCategory.FUNCTION, r"\b(console|log|error|warn|info)\b", group=1),
        _rule(TokenCategory.STRING, r"`(?:[^`\\]|\\.)*`", multiline=True),
    ) + C_STYLE_TAIL,
)

PYTHON = LanguageProfile(
    name="python",
    aliases=("py",),
    keywords=frozenset({
        "def", "class", "if", "else", "elif", "for", "while", "try", "except", "finally",
        "with", "as", "import", "from", "return", "yield", "lambda", "and", "or", "not",
        "in", "is", "pass", "break", "continue", "raise", "global", "nonlocal", "del",
        "assert", "async", "await", "True", "False", "None",
    }),
    patterns=(
        _rule(TokenCategory.FUNCTION, r"\bdef\s+(\w+)\s*\(", group=1),
        _rule(TokenCategory.TYPE, r"\bclass\s+(\w+)", group=1),
        NUMBER,
        OPERATOR,
        DOUBLE_QUOTE_STRING,
        SINGLE_QUOTE_STRING,
        _rule(TokenCategory.STRING, r'""".*?"""', multiline=True),
        _rule(TokenCategory.STRING, r"'''.*?'''", multiline=True),
        HASH_COMMENT,
    ),
)

DOCKERFILE = LanguageProfile(
    name="dockerfile",
    aliases=("docker",),
    keywords=frozenset({
        "FROM", "RUN", "CMD", "ENTRYPOINT", "COPY", "ADD", "WORKDIR", "EXPOSE", "ENV",
        "ARG", "USER", "VOLUME", "LABEL", "ONBUILD", "STOPSIGNAL", "HEALTHCHECK", "SHELL",
    }),
    keyword_ignore_case=True,
    keyword_line_start=True,
    patterns=(
        SHELL_VARIABLE,
        DOUBLE_QUOTE_STRING,
        _rule(TokenCategory.COMMENT, r"^[ \t]*#[^\n]*", flags=re.MULTILINE),
    ),
)

YAML = LanguageProfile(
    name="yaml",
    aliases=("yml",),
    keywords=frozenset({"true", "false", "null", "yes", "no"}),
    patterns=(
        _rule(TokenCategory.TYPE, r"^[ \t]*(?:-[ \t]+)?([\w.-]+)[ \t]*:", group=1, flags=re.MULTILINE),
        _rule(TokenCategory.NUMBER, r":[ \t]*(-?\d+\.?\d*)\b", group=1),
        DOUBLE_QUOTE_STRING,
        SINGLE_QUOTE_STRING,
        _rule(TokenCategory.COMMENT, r"(?:^|(?<=\s))#[^\n]*", flags=re.MULTILINE),
    ),
)

BASH = LanguageProfile(
    name="bash",
    aliases=("shell", "sh"),
    keywords=frozenset({
        "if", "then", "else", "elif", "fi", "for", "in", "do", "done", "while", "until",
        "case", "esac", "function", "return", "export", "local", "sudo",
    }),
    patterns=(
        _rule(TokenCategory.TYPE,
              r"\b(docker|kubectl|git|npm|yarn|ls|cd|mkdir|rm|cp|mv|echo|cat|grep|find|chmod|chown|ps|kill|curl|wget|terraform|aws|ssh|tar)\b",
              group=1),
        _rule(TokenCategory.NUMBER, r"(?:^|(?<=\s))(-{1,2}[\w-]+)", group=1, flags=re.MULTILINE),
        SHELL_VARIABLE,
        _rule(TokenCategory.OPERATOR, r"[|&;><]"),
        DOUBLE_QUOTE_STRING,
        SINGLE_QUOTE_STRING,
        _rule(TokenCategory.COMMENT, r"(?:^|(?<=\s))#[^\n]*", flags=re.MULTILINE),
    ),
)

GENERIC = LanguageProfile(
    name="generic",
    patterns=(
        DOUBLE_QUOTE_STRING,
        SINGLE_QUOTE_STRING,
        SLASH_COMMENT,
        HASH_COMMENT,
        BLOCK_COMMENT,
    ),
)

LANGUAGE_PROFILES = MappingProxyType({
    profile.name: profile
    for profile in (KOTLIN, JAVA, JAVASCRIPT, PYTHON, DOCKERFILE, YAML, BASH, GENERIC)
})

# name or alias -> profile
PROFILE_LOOKUP = MappingProxyType({
    key: profile
    for profile in LANGUAGE_PROFILES.values()
    for key in (profile.name, *profile.aliases)
})


def get_language_profile(tag: str | None, strict: bool = False,
                         profiles: Mapping[str, LanguageProfile] = PROFILE_LOOKUP) -> LanguageProfile:
    """
    Look up the profile for a fence language tag, case-insensitively.

    Args:
        tag: The language tag from the code fence; may be empty or None.
        strict: Raise UnknownLanguage instead of falling back to GENERIC.
        profiles: Lookup table keyed by lower-case name or alias.

    Returns:
        LanguageProfile: The matching profile, or GENERIC for unknown tags.
    """
    key = tag.strip().lower() if isinstance(tag, str) else ""
    profile = profiles.get(key)
    if profile is not None:
        return profile
    if not key:
        return GENERIC

    if strict:
        raise UnknownLanguage(tag)
    logger.warning(f"Unknown code language '{tag}', falling back to generic highlighting")
    return GENERIC
