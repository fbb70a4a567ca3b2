"""
Literal Parser
Decodes number and string tokens into Literal nodes
"""

import re

from ...shared.nodes import Literal
from ...shared.source_location import SourceLocation

_ESCAPE_PATTERN = re.compile(r"\\(u\{[0-9a-fA-F]+\}|u[0-9a-fA-F]{4}|x[0-9a-fA-F]{2}|[\s\S])")

_SIMPLE_ESCAPES = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "b": "\b",
    "f": "\f",
    "v": "\v",
    "0": "\0",
}


def _decode_escape(match: "re.Match[str]") -> str:
    sequence = match.group(1)
    if sequence.startswith("u{"):
        return chr(int(sequence[2:-1], 16))
    if len(sequence) == 5 and sequence[0] == "u":
        return chr(int(sequence[1:], 16))
    if len(sequence) == 3 and sequence[0] == "x":
        return chr(int(sequence[1:], 16))
    return _SIMPLE_ESCAPES.get(sequence, sequence)


class LiteralParser:
    """Dedicated parser for literal tokens"""

    @staticmethod
    def parse_number(raw: str, location: SourceLocation) -> Literal:
        """Hex and integer spellings become int, anything with a fraction or exponent float"""
        if raw[:2] in ("0x", "0X"):
            return Literal(int(raw, 16), raw, location)
        if "." in raw or "e" in raw or "E" in raw:
            return Literal(float(raw), raw, location)
        return Literal(int(raw), raw, location)

    @staticmethod
    def parse_string(raw: str, location: SourceLocation) -> Literal:
        """Strip the quotes and decode escape sequences; ``raw`` keeps the source spelling"""
        return Literal(LiteralParser.decode_string(raw), raw, location)

    @staticmethod
    def decode_string(raw: str) -> str:
        return _ESCAPE_PATTERN.sub(_decode_escape, raw[1:-1])
