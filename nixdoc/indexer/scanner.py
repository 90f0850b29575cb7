"""Single-pass token scanner for Nix source text.

The scanner is not a parser. It walks the text left to right and reports only
what the binding extractor needs: comments, identifiers, assignment markers and
lambda heads, with everything else collapsed into OTHER events. String and
comment contents are skipped wholesale so that `x:` inside a string value is
never mistaken for a function.

Lambda heads recognised:
    x: ...                 one event per curried parameter
    { a, b ? 1, ... }: ... pattern set (one event for the whole head)
    args@{ a, ... }: ...
    { a, ... }@args: ...

Lookahead never extends past the head being examined: an attribute set is
rejected after its first entry, a pattern set is consumed as it is confirmed.
Unterminated strings and comments run to end of input; nothing here raises on
malformed text.
"""

import bisect
import re
from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum

from .config import (
    IDENTIFIER_PATTERN,
    NUMBER_PATTERN,
    OPERATORS,
    PATH_PATTERN,
    SEARCH_PATH_PATTERN,
    URI_PATTERN,
)

_WHITESPACE = re.compile(r"[ \t\r\n]+")
_STRING_SPECIAL = re.compile(r'["\\$]')
_INDENTED_STRING_SPECIAL = re.compile(r"''|\$")
_CODE_SPECIAL = re.compile(r"""[{}"#/']""")
_IDENTIFIER_CHARS = frozenset("abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789_'-")

# Contexts tracked while skipping nested literals
_IN_STRING = "string"
_IN_INDENTED_STRING = "indented_string"
_IN_BRACES = "braces"


class EventKind(Enum):
    """Kinds of scan events."""

    COMMENT = "comment"
    IDENTIFIER = "identifier"
    ASSIGN = "assign"
    LAMBDA = "lambda"
    OTHER = "other"


@dataclass(frozen=True)
class ScanEvent:
    """One token reported by the scanner.

    `offset`/`end` index into the scanned text; `line`/`column` are 1-based.
    `own_line` is set for comments that have only whitespace before them on
    their first line.
    """

    kind: EventKind
    text: str
    offset: int
    end: int
    line: int
    column: int
    end_line: int
    own_line: bool = False

    @property
    def is_block_comment(self) -> bool:
        return self.kind is EventKind.COMMENT and self.text.startswith("/*")


class NixScanner:
    """Tokenizes one file's text into a stream of ScanEvent records."""

    def __init__(self, text: str):
        self.text = text
        self.length = len(text)
        self._line_starts = [0] + [m.end() for m in re.finditer("\n", text)]

    # ------------------------------------------------------------------
    # Positions
    # ------------------------------------------------------------------

    def _line_index(self, offset: int) -> int:
        return bisect.bisect_right(self._line_starts, offset) - 1

    def locate(self, offset: int) -> tuple[int, int]:
        """Convert a text offset into a 1-based (line, column) pair."""
        index = self._line_index(offset)
        return index + 1, offset - self._line_starts[index] + 1

    def _event(self, kind: EventKind, start: int, end: int) -> ScanEvent:
        line, column = self.locate(start)
        end_line = self._line_index(max(start, end - 1)) + 1
        own_line = False
        if kind is EventKind.COMMENT:
            own_line = not self.text[self._line_starts[line - 1]:start].strip()
        return ScanEvent(
            kind=kind,
            text=self.text[start:end],
            offset=start,
            end=end,
            line=line,
            column=column,
            end_line=end_line,
            own_line=own_line,
        )

    # ------------------------------------------------------------------
    # Skipping helpers
    # ------------------------------------------------------------------

    def _skip_block_comment(self, pos: int) -> int:
        """Return the offset just past the `*/` closing the comment at pos."""
        close = self.text.find("*/", pos + 2)
        return self.length if close == -1 else close + 2

    def _skip_line_comment(self, pos: int) -> int:
        newline = self.text.find("\n", pos)
        return self.length if newline == -1 else newline

    def _skip_trivia(self, pos: int) -> int:
        """Skip whitespace and comments starting at pos."""
        text = self.text
        while pos < self.length:
            match = _WHITESPACE.match(text, pos)
            if match:
                pos = match.end()
                continue
            if text[pos] == "#":
                pos = self._skip_line_comment(pos)
            elif text.startswith("/*", pos):
                pos = self._skip_block_comment(pos)
            else:
                break
        return pos

    def _skip_string(self, pos: int) -> int:
        """Skip a double-quoted string body; pos is just past the opening quote."""
        end = self._skip_nested(pos, _IN_STRING)
        return self.length if end is None else end

    def _skip_indented_string(self, pos: int) -> int:
        """Skip a ''...'' string body; pos is just past the opening quotes."""
        end = self._skip_nested(pos, _IN_INDENTED_STRING)
        return self.length if end is None else end

    def _skip_balanced(self, open_brace: int) -> int | None:
        """Return the offset past the `}` matching the `{` at open_brace.

        Returns None when the input ends first.
        """
        return self._skip_nested(open_brace + 1, _IN_BRACES)

    def _skip_nested(self, pos: int, context: str) -> int | None:
        """Skip to the end of the context that was opened just before pos.

        Strings, `${ }` interpolations and braces nest arbitrarily deep, so
        open contexts live on an explicit stack rather than the call stack.

        Returns:
            Offset just past the context's closing delimiter, or None when
            the input ends first
        """
        text = self.text
        stack = [context]

        while stack:
            top = stack[-1]

            if top == _IN_STRING:
                match = _STRING_SPECIAL.search(text, pos)
                if not match:
                    return None
                i = match.start()
                char = text[i]
                if char == '"':
                    stack.pop()
                    pos = i + 1
                elif char == "\\":
                    pos = i + 2
                elif text.startswith("${", i):
                    stack.append(_IN_BRACES)
                    pos = i + 2
                elif text.startswith("$$", i):
                    pos = i + 2
                else:
                    pos = i + 1

            elif top == _IN_INDENTED_STRING:
                match = _INDENTED_STRING_SPECIAL.search(text, pos)
                if not match:
                    return None
                i = match.start()
                if text.startswith("''", i):
                    following = text[i + 2:i + 3]
                    if following in ("'", "$"):
                        pos = i + 3
                    elif following == "\\":
                        pos = i + 4
                    else:
                        stack.pop()
                        pos = i + 2
                elif text.startswith("${", i):
                    stack.append(_IN_BRACES)
                    pos = i + 2
                elif text.startswith("$$", i):
                    pos = i + 2
                else:
                    pos = i + 1

            else:
                match = _CODE_SPECIAL.search(text, pos)
                if not match:
                    return None
                i = match.start()
                char = text[i]
                if char == "{":
                    stack.append(_IN_BRACES)
                    pos = i + 1
                elif char == "}":
                    stack.pop()
                    pos = i + 1
                elif char == '"':
                    stack.append(_IN_STRING)
                    pos = i + 1
                elif char == "#":
                    pos = self._skip_line_comment(i)
                elif char == "/":
                    pos = self._skip_block_comment(i) if text.startswith("/*", i) else i + 1
                elif text.startswith("''", i) and (i == 0 or text[i - 1] not in _IDENTIFIER_CHARS):
                    stack.append(_IN_INDENTED_STRING)
                    pos = i + 2
                else:
                    pos = i + 1

        return pos

    # ------------------------------------------------------------------
    # Lambda heads
    # ------------------------------------------------------------------

    def _pattern_lambda_end(self, brace: int) -> int | None:
        """If the `{` at brace opens a pattern-set lambda, return the offset past its `:`."""
        text = self.text
        cursor = self._skip_trivia(brace + 1)
        if cursor >= self.length:
            return None

        if not text.startswith("...", cursor) and text[cursor] != "}":
            match = IDENTIFIER_PATTERN.match(text, cursor)
            if not match:
                return None
            following = self._skip_trivia(match.end())
            # `a =`, `a.b =`, `inherit x;` all mean an attribute set
            if text[following:following + 1] not in (",", "?", "}"):
                return None

        close = self._skip_balanced(brace)
        if close is None:
            return None

        after = self._skip_trivia(close)
        if text.startswith("@", after):
            match = IDENTIFIER_PATTERN.match(text, self._skip_trivia(after + 1))
            if not match:
                return None
            after = self._skip_trivia(match.end())

        if text.startswith(":", after):
            return after + 1
        return None

    def _identifier_lambda_end(self, name_end: int) -> int | None:
        """If the identifier ending at name_end is a lambda parameter, return the offset past its head."""
        text = self.text
        after = name_end
        match = _WHITESPACE.match(text, after)
        if match:
            after = match.end()

        if text.startswith(":", after):
            return after + 1

        if text.startswith("@", after):
            brace = self._skip_trivia(after + 1)
            if text.startswith("{", brace):
                return self._pattern_lambda_end(brace)
        return None

    def _attribute_path_end(self, pos: int) -> int:
        """Extend an identifier over `.ident` segments (a.b.c)."""
        text = self.text
        match = IDENTIFIER_PATTERN.match(text, pos)
        end = match.end()
        while text.startswith(".", end):
            segment = IDENTIFIER_PATTERN.match(text, end + 1)
            if not segment:
                break
            end = segment.end()
        return end

    # ------------------------------------------------------------------
    # Main loop
    # ------------------------------------------------------------------

    def scan(self) -> Iterator[ScanEvent]:
        """Yield scan events for the whole text, in source order."""
        text = self.text
        pos = 0

        while pos < self.length:
            match = _WHITESPACE.match(text, pos)
            if match:
                pos = match.end()
                continue

            char = text[pos]

            if char == "#":
                end = self._skip_line_comment(pos)
                yield self._event(EventKind.COMMENT, pos, end)
                pos = end
                continue

            if text.startswith("/*", pos):
                end = self._skip_block_comment(pos)
                yield self._event(EventKind.COMMENT, pos, end)
                pos = end
                continue

            if char == '"':
                end = self._skip_string(pos + 1)
                yield self._event(EventKind.OTHER, pos, end)
                pos = end
                continue

            if text.startswith("''", pos):
                end = self._skip_indented_string(pos + 2)
                yield self._event(EventKind.OTHER, pos, end)
                pos = end
                continue

            if char == "{":
                end = self._pattern_lambda_end(pos)
                if end is not None:
                    yield self._event(EventKind.LAMBDA, pos, end)
                    pos = end
                else:
                    yield self._event(EventKind.OTHER, pos, pos + 1)
                    pos += 1
                continue

            if char == "<":
                match = SEARCH_PATH_PATTERN.match(text, pos)
                if match:
                    yield self._event(EventKind.OTHER, pos, match.end())
                    pos = match.end()
                    continue

            if char.isalpha():
                match = URI_PATTERN.match(text, pos)
                if match:
                    yield self._event(EventKind.OTHER, pos, match.end())
                    pos = match.end()
                    continue

            if char in "./~" or char in _IDENTIFIER_CHARS:
                match = PATH_PATTERN.match(text, pos)
                if match:
                    yield self._event(EventKind.OTHER, pos, match.end())
                    pos = match.end()
                    continue

            if IDENTIFIER_PATTERN.match(text, pos):
                end = self._attribute_path_end(pos)
                if "." not in text[pos:end]:
                    head_end = self._identifier_lambda_end(end)
                    if head_end is not None:
                        yield self._event(EventKind.LAMBDA, pos, head_end)
                        pos = head_end
                        continue
                yield self._event(EventKind.IDENTIFIER, pos, end)
                pos = end
                continue

            match = NUMBER_PATTERN.match(text, pos)
            if match and (char.isdigit() or char == "."):
                yield self._event(EventKind.OTHER, pos, match.end())
                pos = match.end()
                continue

            for operator in OPERATORS:
                if text.startswith(operator, pos):
                    yield self._event(EventKind.OTHER, pos, pos + len(operator))
                    pos += len(operator)
                    break
            else:
                kind = EventKind.ASSIGN if char == "=" else EventKind.OTHER
                yield self._event(kind, pos, pos + 1)
                pos += 1


def scan(text: str) -> list[ScanEvent]:
    """Scan text and return all events as a list."""
    return list(NixScanner(text).scan())
