"""
LineTokenizer
=============

Splits one physical source line into whitespace-delimited tokens.

Rules:
  * Everything from the first ``#`` onwards is a comment and is discarded.
    The line is marked as comment-bearing whether or not code precedes it.
  * A line that is empty after the comment is removed is *blank*: it carries
    no tokens and never becomes an instruction.
  * Otherwise the remainder is split on runs of ASCII whitespace (space, tab,
    CR, LF, FF, VT); the first token is the opcode, the rest are raw operand
    tokens. Other Unicode spaces such as U+00A0 are ordinary characters.

There are no line continuations; one physical line is one logical line.
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import List, Optional

COMMENT_CHAR = "#"
WHITESPACE = " \t\n\r\f\v"

_WHITESPACE_RE = re.compile(r"[ \t\n\r\f\v]+")


@dataclass(frozen=True)
class TokenLine:
    """A tokenized physical line."""

    line: int
    content: str                 # comment-free, stripped text
    tokens: List[str] = field(default_factory=list)
    has_comment: bool = False

    @property
    def is_blank(self) -> bool:
        return not self.tokens

    @property
    def opcode(self) -> Optional[str]:
        return self.tokens[0] if self.tokens else None

    @property
    def operands(self) -> List[str]:
        return self.tokens[1:]


class LineTokenizer:
    """Turns raw source lines into :class:`TokenLine` objects."""

    def tokenize(self, raw: str, line: int = 0) -> TokenLine:
        """
        Tokenize a single physical line.

        Parameters
        ----------
        raw:
            The line as read from the input, without its newline.
        line:
            1-based physical line number, kept for diagnostics.
        """
        code, sep, _ = raw.partition(COMMENT_CHAR)
        content = code.strip(WHITESPACE)
        return TokenLine(
            line=line,
            content=content,
            tokens=[t for t in _WHITESPACE_RE.split(content) if t],
            has_comment=bool(sep),
        )

    def run(self, lines: List[str]) -> List[TokenLine]:
        """Tokenize every line, numbering them from 1."""
        return [self.tokenize(raw, number) for number, raw in enumerate(lines, start=1)]
