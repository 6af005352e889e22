"""
Reader/writer for Game Freak style enciphered text containers and their tagged text form.
"""

from .Exceptions import ContractViolation, FormatError, LengthMismatchError
from .File import TextFile, decode, encode
from .Text import (
    DIALECTS,
    EXTENDED,
    STANDARD,
    Command,
    DialectConfig,
    Entry,
    Literal,
    PaddingMode,
    Special,
    load_name_table,
    parse_tagged_text,
    render_tagged_text,
)

__all__ = [
    "ContractViolation",
    "FormatError",
    "LengthMismatchError",
    "TextFile",
    "decode",
    "encode",
    "DIALECTS",
    "EXTENDED",
    "STANDARD",
    "Command",
    "DialectConfig",
    "Entry",
    "Literal",
    "PaddingMode",
    "Special",
    "load_name_table",
    "parse_tagged_text",
    "render_tagged_text",
]
