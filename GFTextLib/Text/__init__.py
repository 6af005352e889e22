from .cipher import IV, MULTIPLIER, crypt, crypt_line, line_seed
from .dialect import DIALECTS, EXTENDED, STANDARD, DialectConfig, PaddingMode, load_name_table
from .entry import Command, Entry, Literal, Segment, Special
from .grammar import decode_line, encode_line
from .tagged import parse_tagged_text, render_tagged_text

__all__ = [
    "IV",
    "MULTIPLIER",
    "crypt",
    "crypt_line",
    "line_seed",
    "DIALECTS",
    "STANDARD",
    "EXTENDED",
    "DialectConfig",
    "PaddingMode",
    "load_name_table",
    "Command",
    "Entry",
    "Literal",
    "Segment",
    "Special",
    "decode_line",
    "encode_line",
    "parse_tagged_text",
    "render_tagged_text",
]
