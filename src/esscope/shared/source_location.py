"""
Source Location (Span)

ESTree Pattern: SourceLocation / Position
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class SourceLocation:
    """
    Source location attached to parsed nodes.

    - File, 1-based line and column, plus start/end character offsets
    - End line/column when the parser propagated them (0 otherwise)
    - Immutable (frozen) for hashability

    Synthesized nodes (builders, injections) carry no location at all.
    """
    file: str
    line: int
    column: int
    start: int = 0
    end: int = 0
    end_line: int = 0
    end_column: int = 0

    def __str__(self) -> str:
        """Format as file:line:column"""
        return f"{self.file}:{self.line}:{self.column}"
