from __future__ import annotations

import logging
from dataclasses import dataclass
from io import BytesIO
from typing import List, Optional, Sequence, Tuple

from GFTextLib.Exceptions import ContractViolation, FormatError, LengthMismatchError
from GFTextLib.IO.extended_binary import ExtendedBinaryReader, ExtendedBinaryWriter
from GFTextLib.Text.cipher import crypt_line
from GFTextLib.Text.dialect import STANDARD, DialectConfig, PaddingMode
from GFTextLib.Text.entry import Entry
from GFTextLib.Text.grammar import TERMINATOR, decode_line, encode_line

from .file_base import FileBase

log = logging.getLogger(__name__)

HEADER_SIZE = 0x10
DESCRIPTOR_SIZE = 8


@dataclass
class TextHeader:
    # a.k.a. LanguageBlocks/MaxBlockSize/Reserved or TextSections/TotalLength/Vector
    section_count: int
    line_count: int
    total_length: int
    reserved: int
    section_data_offset: int

    @classmethod
    def read(cls, reader: ExtendedBinaryReader) -> "TextHeader":
        return cls(
            section_count=reader.read_uint16(),
            line_count=reader.read_uint16(),
            total_length=reader.read_int32(),
            reserved=reader.read_uint32(),
            section_data_offset=reader.read_int32(),
        )

    def validate(self, file_length: int) -> None:
        if self.reserved != 0:
            raise FormatError("reserved value is non-zero")
        if self.section_count != 1:
            raise FormatError(f"Not a text file, expected 1 text section but got {self.section_count}.")
        if self.section_data_offset < HEADER_SIZE or self.total_length < 4:
            raise FormatError(f"Not a text file, section at 0x{self.section_data_offset:X} with length {self.total_length}.")
        if self.section_data_offset + self.total_length != file_length:
            raise LengthMismatchError("File size", self.section_data_offset + self.total_length, file_length)
        if 4 + DESCRIPTOR_SIZE * self.line_count > self.total_length:
            raise FormatError(f"Line table for {self.line_count} lines does not fit in a {self.total_length} byte section.")


def read_entries(reader: ExtendedBinaryReader, dialect: DialectConfig = STANDARD, crypt_enabled: bool = True) -> List[Entry]:
    file_length = reader.get_length()
    if file_length < HEADER_SIZE:
        raise FormatError(f"File is {file_length} bytes, too short for the {HEADER_SIZE} byte header.")

    reader.jump_to(0)
    header = TextHeader.read(reader)
    header.validate(file_length)
    log.debug("Header: %s", header)

    reader.jump_to(header.section_data_offset)
    section_length = reader.read_uint32()
    if section_length != header.total_length:
        raise LengthMismatchError("Text section size", header.total_length, section_length)

    entries: List[Entry] = []
    for line_index in range(header.line_count):
        reader.jump_to(header.section_data_offset + 4 + line_index * DESCRIPTOR_SIZE)
        offset = reader.read_uint32() + header.section_data_offset
        length = reader.read_uint16()
        ex_data = reader.read_int16()
        if offset + length * 2 > file_length:
            raise FormatError(f"Line {line_index} at 0x{offset:08X} with {length} words runs past the end of the file.")

        reader.jump_to(offset)
        words = reader.read_words(length)
        if crypt_enabled:
            crypt_line(words, line_index)

        try:
            text, syntax_tree = decode_line(words, dialect)
        except FormatError as e:
            raise FormatError(f"Line {line_index}: {e.message}") from e

        entries.append(
            Entry(
                text=text,
                syntax_tree=syntax_tree,
                ex_data=ex_data,
                min_length=length if dialect.padding_mode == PaddingMode.MIN_LENGTH else 0,
            )
        )

    log.debug("Decoded %d lines", len(entries))
    return entries


def encode_entry_words(entry: Entry, dialect: DialectConfig, padding_mode: PaddingMode) -> List[int]:
    """Plaintext words for one line: tokens, terminator, then dialect padding."""
    words = encode_line(entry.segments(), dialect, entry.force_full_width)
    content_length = len(words)
    words.append(TERMINATOR)

    if padding_mode == PaddingMode.MIN_LENGTH:
        if entry.min_length > len(words):
            words.extend([0] * (entry.min_length - len(words)))
    elif padding_mode == PaddingMode.DOUBLE:
        words.extend([0] * content_length)

    if len(words) > 0xFFFF:
        raise ContractViolation(f"Line is {len(words)} words long, the line table only holds 16-bit lengths.")
    return words


def write_entries(
    writer: ExtendedBinaryWriter,
    entries: Sequence[Entry],
    dialect: DialectConfig = STANDARD,
    crypt_enabled: bool = True,
    padding_mode: Optional[PaddingMode] = None,
):
    if padding_mode is None:
        padding_mode = dialect.padding_mode
    if len(entries) > 0xFFFF:
        raise ContractViolation(f"{len(entries)} lines do not fit in a 16-bit line count.")

    writer.write_uint16(1)
    writer.write_uint16(len(entries))
    writer.add_offset("TotalLength")
    writer.write_uint32(0)
    writer.write_int32(HEADER_SIZE)

    section_data_offset = writer.get_position()
    writer.add_offset("SectionLength")
    table_position = writer.get_position()
    writer.write_nulls(len(entries) * DESCRIPTOR_SIZE)

    descriptors: List[Tuple[int, int, int]] = []
    for line_index, entry in enumerate(entries):
        if not -0x8000 <= entry.ex_data <= 0x7FFF:
            raise ContractViolation(f"Line {line_index} ex-data {entry.ex_data} does not fit in 16 bits.")
        words = encode_entry_words(entry, dialect, padding_mode)
        if crypt_enabled:
            crypt_line(words, line_index)

        descriptors.append((writer.get_position() - section_data_offset, len(words), entry.ex_data))
        writer.write_words(words)
        writer.fix_padding(4)

    end_position = writer.get_position()
    total_length = end_position - section_data_offset

    writer.jump_to(table_position)
    for offset, length, ex_data in descriptors:
        writer.write_uint32(offset)
        writer.write_uint16(length)
        writer.write_int16(ex_data)
    writer.jump_to(end_position)

    writer.fill_in_offset("TotalLength", total_length, signed=True)
    writer.fill_in_offset("SectionLength", total_length)
    log.debug("Encoded %d lines into a %d byte section", len(entries), total_length)


def decode(data: bytes, dialect: DialectConfig = STANDARD, crypt_enabled: bool = True) -> List[Entry]:
    return read_entries(ExtendedBinaryReader(BytesIO(data)), dialect, crypt_enabled)


def encode(
    entries: Sequence[Entry],
    dialect: DialectConfig = STANDARD,
    crypt_enabled: bool = True,
    padding_mode: Optional[PaddingMode] = None,
) -> bytes:
    stream = BytesIO()
    write_entries(ExtendedBinaryWriter(stream), entries, dialect, crypt_enabled, padding_mode)
    return stream.getvalue()


class TextFile(FileBase):
    def __init__(self, dialect: DialectConfig = STANDARD, crypt_enabled: bool = True, padding_mode: Optional[PaddingMode] = None):
        self.dialect = dialect
        self.crypt_enabled = crypt_enabled
        self.padding_mode = padding_mode
        self.entries: List[Entry] = []

    def load_from_reader(self, reader: ExtendedBinaryReader):
        self.entries = read_entries(reader, self.dialect, self.crypt_enabled)

    def save_from_writer(self, writer: ExtendedBinaryWriter):
        # offsets are absolute, so lay the container out in its own buffer first
        writer.write_bytes(encode(self.entries, self.dialect, self.crypt_enabled, self.padding_mode))

    def __len__(self) -> int:
        return len(self.entries)
