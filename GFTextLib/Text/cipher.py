from typing import MutableSequence

IV = 0x7C89
MULTIPLIER = 0x2983


def line_seed(line_index: int) -> int:
    return (IV + MULTIPLIER * line_index) & 0xFFFF


def crypt(words: MutableSequence[int], seed: int) -> None:
    """XOR `words` in place with the rolling line key. Running it twice restores the input."""
    key = seed & 0xFFFF
    for index in range(len(words)):
        words[index] ^= key
        key = ((key << 3) | (key >> 13)) & 0xFFFF


def crypt_line(words: MutableSequence[int], line_index: int) -> None:
    crypt(words, line_seed(line_index))
