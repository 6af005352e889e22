from io import BytesIO

import pytest

from GFTextLib.Exceptions import FormatError
from GFTextLib.IO import ExtendedBinaryReader, ExtendedBinaryWriter


def test_short_read_is_format_error():
    reader = ExtendedBinaryReader(BytesIO(b"\x01\x02\x03"))
    assert reader.read_uint16() == 0x0201
    with pytest.raises(FormatError):
        reader.read_uint16()


def test_fill_in_offset_and_padding():
    stream = BytesIO()
    writer = ExtendedBinaryWriter(stream)
    writer.write_uint16(7)
    writer.add_offset("Size")
    writer.write_words([0x41, 0x42, 0x43])
    writer.fix_padding(4)
    assert writer.get_position() == 12
    writer.write_uint16(1)
    writer.fix_padding(4)
    writer.fill_in_offset("Size", -2, signed=True)
    assert not writer.has_offset("Size")
    assert stream.getvalue() == b"\x07\x00\xfe\xff\xff\xff" + b"A\x00B\x00C\x00" + b"\x01\x00\x00\x00"

    reader = ExtendedBinaryReader(BytesIO(stream.getvalue()))
    assert reader.get_length() == 16
    reader.jump_to(2)
    assert reader.read_int32() == -2
    assert reader.read_words(3) == [0x41, 0x42, 0x43]
