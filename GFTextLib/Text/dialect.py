"""
Format dialects: command name tables, special code ranges and encoder padding policy.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, FrozenSet, Mapping, Optional, Tuple


class PaddingMode(Enum):
    NONE = "none"
    MIN_LENGTH = "min_length"
    DOUBLE = "double"


COMMAND_NAMES: Dict[int, str] = {
    0xBDFF: "NULL",
    0xBE00: "SCROLL",
    0xBE01: "CLEAR",
    0xBE02: "WAIT",
    0xFF00: "COLOR",
    0x0100: "TRNAME",
    0x0101: "PKNAME",
    0x0102: "PKNICK",
    0x0103: "TYPE",
    0x0105: "LOCATION",
    0x0106: "ABILITY",
    0x0107: "MOVE",
    0x0108: "ITEM1",
    0x0109: "ITEM2",
    0x010A: "sTRBAG",
    0x010B: "BOX",
    0x010D: "EVSTAT",
    0x0110: "OPOWER",
    0x0127: "RIBBON",
    0x0134: "MIINAME",
    0x013E: "WEATHER",
    0x0189: "TRNICK",
    0x018A: "1stchrTR",
    0x018B: "SHOUTOUT",
    0x018E: "BERRY",
    0x018F: "REMFEEL",
    0x0190: "REMQUAL",
    0x0191: "WEBSITE",
    0x019C: "CHOICECOS",
    0x01A1: "GSYNCID",
    0x0192: "PRVIDSAY",
    0x0193: "BTLTEST",
    0x0195: "GENLOC",
    0x0199: "CHOICEFOOD",
    0x019A: "HOTELITEM",
    0x019B: "TAXISTOP",
    0x019F: "MAISTITLE",
    0x1000: "ITEMPLUR0",
    0x1001: "ITEMPLUR1",
    0x1100: "GENDBR",
    0x1101: "NUMBRNCH",
    0x1302: "iCOLOR2",
    0x1303: "iCOLOR3",
    0x0200: "NUM1",
    0x0201: "NUM2",
    0x0202: "NUM3",
    0x0203: "NUM4",
    0x0204: "NUM5",
    0x0205: "NUM6",
    0x0206: "NUM7",
    0x0207: "NUM8",
    0x0208: "NUM9",
}

FIXED_CHARS: Dict[int, str] = {
    0xE07F: "\u00a0",  # non-breaking space
    0xE08D: "…",  # ellipsis
    0xE08E: "♂",  # male sign
    0xE08F: "♀",  # female sign
}

PRIVATE_USE_AREA = (0xE000, 0xF8FF)


@dataclass(frozen=True)
class DialectConfig:
    name: str
    names: Mapping[int, str] = field(default_factory=dict)
    special_range: Optional[Tuple[int, int]] = PRIVATE_USE_AREA
    special_codes: FrozenSet[int] = frozenset()
    fixed_chars: Mapping[int, str] = field(default_factory=dict)
    padding_mode: PaddingMode = PaddingMode.NONE
    separator: str = " "
    special_format: str = "dec"
    reverse_names: Mapping[str, int] = field(init=False, repr=False, compare=False)
    reverse_fixed_chars: Mapping[str, int] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if self.separator not in (" ", ","):
            raise ValueError(f"Unsupported argument separator {self.separator!r}")
        if self.special_format not in ("dec", "hex"):
            raise ValueError(f"Unsupported special code format {self.special_format!r}")
        object.__setattr__(self, "reverse_names", {value: key for key, value in self.names.items()})
        object.__setattr__(self, "reverse_fixed_chars", {value: key for key, value in self.fixed_chars.items()})

    def is_special(self, word: int) -> bool:
        if word in self.special_codes:
            return True
        if self.special_range is None:
            return False
        return self.special_range[0] <= word <= self.special_range[1]

    def command_name(self, code: int) -> str:
        return self.names.get(code, f"{code:04X}")

    def command_code(self, token: str) -> Optional[int]:
        """Resolve a command mnemonic, falling back to the hex code form it is rendered with."""
        if token in self.reverse_names:
            return self.reverse_names[token]
        return parse_word(token, base=16)

    def format_command(self, value) -> str:
        hint = f"[COMMAND {self.command_name(value[0])}"
        if len(value) > 1:
            hint += " " + self.separator.join(str(arg) for arg in value[1:])
        return hint + "]"

    def format_special(self, code: int) -> str:
        if self.special_format == "hex":
            return f"[SPECIAL {code:08X}]"
        return f"[SPECIAL {code}]"

    def parse_special(self, token: str) -> Optional[int]:
        return parse_word(token, base=16 if self.special_format == "hex" else 10)

    def with_names(self, extra: Mapping[int, str], name: Optional[str] = None) -> "DialectConfig":
        merged = dict(self.names)
        merged.update(extra)
        return dataclasses.replace(self, name=name or self.name, names=merged)


def parse_word(token: str, base: int = 10, signed: bool = False) -> Optional[int]:
    """Parse a 16-bit value, `0x` always selects hex. None when it does not parse or fit."""
    token = token.strip()
    try:
        if token.lower().startswith(("0x", "-0x")):
            value = int(token, 16)
        else:
            value = int(token, base)
    except ValueError:
        return None
    low, high = (-0x8000, 0x7FFF) if signed else (0, 0xFFFF)
    if not low <= value <= high:
        return None
    return value


def load_name_table(text: str) -> Dict[int, str]:
    """Read `NAME=code` lines (code in decimal or 0x hex), skipping blanks and # comments."""
    table: Dict[int, str] = {}
    for number, line in enumerate(text.replace("\r", "").split("\n"), start=1):
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        parts = line.split("=")
        if len(parts) != 2:
            continue
        name, code_text = parts[0].strip(), parts[1].strip()
        code = parse_word(code_text)
        if not name or code is None:
            raise ValueError(f"Bad name table entry on line {number}: {line!r}")
        table[code] = name
    return table


STANDARD = DialectConfig(name="standard", names=COMMAND_NAMES)

EXTENDED = DialectConfig(
    name="extended",
    names=COMMAND_NAMES,
    fixed_chars=FIXED_CHARS,
    padding_mode=PaddingMode.MIN_LENGTH,
    separator=",",
    special_format="hex",
)

DIALECTS: Dict[str, DialectConfig] = {dialect.name: dialect for dialect in (STANDARD, EXTENDED)}


__all__ = [
    "PaddingMode",
    "DialectConfig",
    "COMMAND_NAMES",
    "FIXED_CHARS",
    "STANDARD",
    "EXTENDED",
    "DIALECTS",
    "load_name_table",
    "parse_word",
]
