"""
Diagnostic data models for the pointless analyzer.
"""

from dataclasses import dataclass
from enum import Enum


class PatternCategory(Enum):
    """Which pointer pattern a diagnostic is about."""
    POINTER_RETURN = "pointer-return"
    POINTER_RECEIVER = "pointer-receiver"
    POINTER_SEQUENCE_RETURN = "pointer-sequence-return"
    POINTER_SEQUENCE_VARIABLE = "pointer-sequence-variable"


@dataclass(frozen=True)
class Diagnostic:
    """An advisory finding at one source position."""
    file: str
    line: int
    column: int
    category: PatternCategory
    message: str

    def __str__(self):
        return f"{self.file}:{self.line}:{self.column}: {self.message}"

    def to_dict(self):
        return {
            "file": self.file,
            "line": self.line,
            "column": self.column,
            "category": self.category.value,
            "message": self.message,
        }


def sequence_message(type_name, size, threshold):
    return (
        f"consider using []{type_name} instead of []*{type_name}: "
        f"better cache locality and lower GC pressure ({size} bytes, threshold: {threshold} bytes)"
    )
