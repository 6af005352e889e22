"""
Line token grammar: a decrypted word stream <-> syntax segments and rendered text.

Words are UTF-16 code units. 0x0000 ends the line, 0x0010 opens a command
(count word, then `count` words starting with the command code), and words
the dialect reserves are specials unless they map to a fixed display
character.
"""

from __future__ import annotations

import struct
from typing import List, Optional, Sequence, Tuple

from GFTextLib.Exceptions import ContractViolation, FormatError
from GFTextLib.Text.dialect import DialectConfig
from GFTextLib.Text.entry import Command, Literal, Segment, Special

TERMINATOR = 0x0000
COMMAND_ESCAPE = 0x0010


def words_to_str(words: Sequence[int]) -> str:
    return struct.pack(f"<{len(words)}H", *words).decode("utf-16-le", errors="surrogatepass")


def str_to_words(text: str) -> List[int]:
    data = text.encode("utf-16-le", errors="surrogatepass")
    return list(struct.unpack(f"<{len(data) // 2}H", data))


def decode_line(words: Sequence[int], dialect: DialectConfig) -> Tuple[str, Optional[List[Segment]]]:
    syntax_tree: List[Segment] = []
    pending: List[int] = []

    def flush() -> None:
        if pending:
            syntax_tree.append(Literal(words_to_str(pending)))
            pending.clear()

    index = 0
    while index < len(words):
        word = words[index]
        index += 1
        if word == TERMINATOR:
            break

        if word == COMMAND_ESCAPE:
            if index >= len(words):
                raise FormatError(f"Command escape at word {index - 1} has no argument count.")
            count = words[index]
            index += 1
            if count == 0:
                raise FormatError(f"Command at word {index - 2} has an argument count of zero.")
            if index + count > len(words):
                raise FormatError(f"Command at word {index - 2} wants {count} words but only {len(words) - index} remain.")
            value = list(words[index:index + count])
            index += count
            flush()
            syntax_tree.append(Command(dialect.format_command(value), value))
        elif word in dialect.fixed_chars:
            pending.extend(str_to_words(dialect.fixed_chars[word]))
        elif dialect.is_special(word):
            flush()
            syntax_tree.append(Special(dialect.format_special(word), [word]))
        else:
            pending.append(word)

    if not syntax_tree:
        # plain line, no codes
        return words_to_str(pending), None

    flush()
    return "".join(segment.hint for segment in syntax_tree), syntax_tree


def encode_literal(hint: str, dialect: DialectConfig, force_full_width: bool = False) -> List[int]:
    words: List[int] = []
    for char in hint:
        if char in dialect.reverse_fixed_chars:
            words.append(dialect.reverse_fixed_chars[char])
            continue
        code_point = ord(char)
        if force_full_width and 0x3A < code_point < 0x7F:
            code_point += 0xFF00 - 0x20
        words.extend(str_to_words(chr(code_point)))
    if TERMINATOR in words:
        raise ContractViolation(f"Literal {hint!r} contains an embedded string terminator.")
    if COMMAND_ESCAPE in words:
        raise ContractViolation(f"Literal {hint!r} contains an embedded command escape.")
    return words


def encode_line(segments: Sequence[Segment], dialect: DialectConfig, force_full_width: bool = False) -> List[int]:
    """Encode segments to words, without the terminator."""
    words: List[int] = []
    for segment in segments:
        if segment.is_special:
            if len(segment.value) != 1:
                raise ContractViolation("is-special is set but no value data is passed?")
            words.append(segment.value[0])
        elif segment.is_command:
            if not segment.value:
                raise ContractViolation("is-command is set but no value data is passed?")
            words.append(COMMAND_ESCAPE)
            words.append(len(segment.value))
            words.extend(segment.value)
        else:
            words.extend(encode_literal(segment.hint, dialect, force_full_width))
    return words


__all__ = ["TERMINATOR", "COMMAND_ESCAPE", "decode_line", "encode_line", "encode_literal", "words_to_str", "str_to_words"]
