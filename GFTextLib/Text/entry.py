from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Union

from GFTextLib.Exceptions import ContractViolation


def _check_words(kind: str, value: List[int]) -> None:
    for word in value:
        if not 0 <= word <= 0xFFFF:
            raise ContractViolation(f"{kind} value 0x{word:X} does not fit in 16 bits.")


@dataclass
class Literal:
    hint: str

    is_command = False
    is_special = False


@dataclass
class Command:
    hint: str
    value: List[int]

    is_command = True
    is_special = False

    def __post_init__(self) -> None:
        self.value = list(self.value)
        if not self.value:
            raise ContractViolation("is-command is set but no value data is passed, use [COMMAND NULL] for null lines.")
        _check_words("Command", self.value)

    @property
    def code(self) -> int:
        return self.value[0]

    @property
    def arguments(self) -> List[int]:
        return self.value[1:]


@dataclass
class Special:
    hint: str
    value: List[int]

    is_command = False
    is_special = True

    def __post_init__(self) -> None:
        self.value = list(self.value)
        if len(self.value) != 1:
            raise ContractViolation(f"is-special is set but {len(self.value)} values were passed, expected exactly one.")
        _check_words("Special", self.value)

    @property
    def code(self) -> int:
        return self.value[0]


Segment = Union[Literal, Command, Special]


@dataclass
class Entry:
    text: str = ""
    syntax_tree: Optional[List[Segment]] = None
    ex_data: int = 0
    min_length: int = 0
    force_full_width: bool = False

    def segments(self) -> List[Segment]:
        """The syntax tree, or a single literal wrapping `text` for plain lines."""
        if self.syntax_tree is None:
            return [Literal(self.text)]
        if not self.syntax_tree:
            if not self.text:
                raise ContractViolation("empty line? use [COMMAND NULL] for null lines.")
            return [Literal(self.text)]
        return self.syntax_tree


__all__ = ["Literal", "Command", "Special", "Segment", "Entry"]
