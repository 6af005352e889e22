from .file_base import FileBase
from .text_file import TextFile, TextHeader, decode, encode, read_entries, write_entries

__all__ = ["FileBase", "TextFile", "TextHeader", "decode", "encode", "read_entries", "write_entries"]
