"""
Line-keyed suppression table built from nolint-style comments.

Recognized comment forms (after removing the comment delimiters):

    nolint                     blanket, optionally followed by whitespace and text
    nolint:a,pointless,b       scoped to the listed tool names
    pointless:ignore           tool-specific

A matching comment suppresses its own line and the line after it, which
covers both trailing comments and comments placed above a declaration.
"""

import logging

logger = logging.getLogger(__name__)

TOOL_NAME = "pointless"


def strip_comment_markers(text):
    text = text.strip()
    if text.startswith("//"):
        text = text[2:]
    elif text.startswith("/*"):
        text = text[2:]
        if text.endswith("*/"):
            text = text[:-2]
    return text.strip()


def is_nolint_comment(text, tool_name=TOOL_NAME):
    """
    Checks if stripped comment text suppresses the given tool.
    """
    if text.startswith("nolint"):
        rest = text[len("nolint"):]
        if rest == "" or rest[0] in " \t":
            return True
        if rest[0] == ":":
            names = rest[1:].split(",")
            if any(name.strip() == tool_name for name in names):
                return True

    return text == f"{tool_name}:ignore"


class SuppressionIndex:
    def __init__(self, lines=None):
        self._lines = frozenset(lines or ())

    @classmethod
    def from_comments(cls, comments, tool_name=TOOL_NAME):
        lines = set()
        for comment in comments:
            if is_nolint_comment(strip_comment_markers(comment.text), tool_name):
                lines.add(comment.line)
                lines.add(comment.line + 1)
        if lines:
            logger.debug("suppressed lines: %s", sorted(lines))
        return cls(lines)

    def is_suppressed(self, line):
        return line in self._lines

    def __len__(self):
        return len(self._lines)
