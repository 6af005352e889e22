import struct
from typing import BinaryIO, Dict, List, Optional, Sequence

from GFTextLib.Exceptions import FormatError


class ExtendedBinaryReader:
    def __init__(self, stream: BinaryIO):
        self.stream = stream

    def get_length(self) -> int:
        current = self.stream.tell()
        self.stream.seek(0, 2)  # Seek to end
        length = self.stream.tell()
        self.stream.seek(current)
        return length

    def get_position(self) -> int:
        return self.stream.tell()

    def jump_to(self, position: int):
        self.stream.seek(position)

    def _read_exact(self, count: int) -> bytes:
        position = self.stream.tell()
        data = self.stream.read(count)
        if len(data) != count:
            raise FormatError(f"Unexpected end of data at 0x{position:08X}, wanted {count} bytes but got {len(data)}.")
        return data

    def read_int16(self) -> int:
        """Read a 16-bit signed integer"""
        return struct.unpack("<h", self._read_exact(2))[0]

    def read_uint16(self) -> int:
        """Read a 16-bit unsigned integer"""
        return struct.unpack("<H", self._read_exact(2))[0]

    def read_int32(self) -> int:
        """Read a 32-bit signed integer"""
        return struct.unpack("<i", self._read_exact(4))[0]

    def read_uint32(self) -> int:
        """Read a 32-bit unsigned integer"""
        return struct.unpack("<I", self._read_exact(4))[0]

    def read_words(self, count: int) -> List[int]:
        """Read `count` 16-bit unsigned integers"""
        return list(struct.unpack(f"<{count}H", self._read_exact(count * 2)))


class ExtendedBinaryWriter:
    def __init__(self, stream: BinaryIO):
        self.stream = stream
        self.offsets: Dict[str, int] = {}

    def get_position(self) -> int:
        return self.stream.tell()

    def jump_to(self, position: int):
        self.stream.seek(position)

    def add_offset(self, name: str, offset_length: int = 4):
        self.offsets[name] = self.stream.tell()
        self.write_nulls(offset_length)

    def has_offset(self, name: str) -> bool:
        return name in self.offsets

    def fill_in_offset(self, name: str, value: Optional[int] = None, signed: bool = False, remove_offset: bool = True):
        if not self.has_offset(name):
            return

        cur_pos = self.stream.tell()

        if value is None:
            value = cur_pos

        self.stream.seek(self.offsets[name])

        if signed:
            self.write_int32(value)
        else:
            self.write_uint32(value)

        if remove_offset:
            del self.offsets[name]

        self.stream.seek(cur_pos)

    def write_nulls(self, count: int):
        """Write multiple null bytes"""
        self.stream.write(b"\x00" * count)

    def fix_padding(self, amount: int = 4):
        if amount < 1:
            return

        pad_amount = 0
        while (self.stream.tell() + pad_amount) % amount != 0:
            pad_amount += 1
        self.write_nulls(pad_amount)

    def write_int16(self, value: int):
        """Write a 16-bit signed integer"""
        self.stream.write(struct.pack("<h", value))

    def write_uint16(self, value: int):
        """Write a 16-bit unsigned integer"""
        self.stream.write(struct.pack("<H", value))

    def write_int32(self, value: int):
        """Write a 32-bit signed integer"""
        self.stream.write(struct.pack("<i", value))

    def write_uint32(self, value: int):
        """Write a 32-bit unsigned integer"""
        self.stream.write(struct.pack("<I", value))

    def write_words(self, words: Sequence[int]):
        """Write a run of 16-bit unsigned integers"""
        self.stream.write(struct.pack(f"<{len(words)}H", *words))

    def write_bytes(self, data: bytes):
        self.stream.write(data)
