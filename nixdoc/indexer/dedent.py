"""Comment normalization.

Turns a raw comment block into documentation text: comment markers are
stripped, then the block's common left margin is removed while deeper lines
keep their extra indentation, so embedded code examples survive intact.

The first line is special. It usually sits on the same physical line as the
opening marker (`# Adds two numbers.` or `/* Adds two numbers.`), so its
indentation says nothing about the block's margin; it is left-trimmed and
excluded from the margin computation.
"""

from nixdoc.models import CommentBlock
from nixdoc.utils.logging import logger

from .exceptions import MalformedCommentLayout


def strip_markers(block: CommentBlock) -> str:
    """Remove comment markers from a block, returning the bare comment text.

    Line comments lose one leading `#` each. Block comments lose the opening
    `/*` (or `/**`) and the closing `*/`, stripped independently, so a block
    whose closing marker is missing keeps its last line.
    """
    if block.style == "line":
        return "\n".join(line[1:] if line.startswith("#") else line for line in block.lines)

    text = "\n".join(block.lines)
    if text.startswith("/**") and not text.startswith("/**/"):
        text = text[3:]
    elif text.startswith("/*"):
        text = text[2:]
    if text.endswith("*/"):
        text = text[:-2]
    return text


def _leading_whitespace(line: str) -> str:
    return line[:len(line) - len(line.lstrip())]


def common_margin(lines: list[str]) -> str:
    """Return the leading whitespace shared by every non-blank line.

    Raises:
        MalformedCommentLayout: if the indentation prefixes disagree (tabs in
            some lines, spaces in others at the same depth)
    """
    prefixes = [_leading_whitespace(line) for line in lines if line.strip()]
    if not prefixes:
        return ""

    margin = min(prefixes, key=len)
    for prefix in prefixes:
        if not prefix.startswith(margin):
            raise MalformedCommentLayout(
                f"inconsistent indentation: {margin!r} is not a prefix of {prefix!r}"
            )
    return margin


def _trim_blank_edges(lines: list[str]) -> list[str]:
    start = 0
    end = len(lines)
    while start < end and not lines[start]:
        start += 1
    while end > start and not lines[end - 1]:
        end -= 1
    return lines[start:end]


def dedent(text: str) -> str:
    """Normalize marker-free comment text.

    Idempotent: dedent(dedent(x)) == dedent(x). When the indentation has no
    consistent common margin the text is returned un-dedented (apart from
    trailing whitespace and blank edge lines) rather than failing.
    """
    lines = _trim_blank_edges([line.rstrip() for line in text.split("\n")])
    if not lines:
        return ""

    first, rest = lines[0], lines[1:]
    try:
        margin = common_margin(rest)
    except MalformedCommentLayout as e:
        logger.debug(f"Keeping comment un-dedented: {e}")
        return "\n".join(lines)

    body = [line[len(margin):] if line else line for line in rest]
    return "\n".join([first.lstrip(), *body])


def dedent_comment(block: CommentBlock) -> str:
    """Strip markers from a comment block and normalize its indentation."""
    return dedent(strip_markers(block))
