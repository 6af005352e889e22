import os
from typing import BinaryIO

from ..IO.extended_binary import ExtendedBinaryReader, ExtendedBinaryWriter


class FileBase:
    def load(self, path_or_stream):
        if isinstance(path_or_stream, (str, os.PathLike)):
            # Load from file path
            with open(path_or_stream, "rb") as stream:
                self._load_from_stream(stream)
        else:
            # Load from stream
            self._load_from_stream(path_or_stream)

    def _load_from_stream(self, stream: BinaryIO):
        self.load_from_reader(ExtendedBinaryReader(stream))

    def load_from_reader(self, reader: ExtendedBinaryReader):
        raise NotImplementedError

    def save(self, path_or_stream):
        if isinstance(path_or_stream, (str, os.PathLike)):
            # Save to file path
            with open(path_or_stream, "wb") as stream:
                self._save_to_stream(stream)
        else:
            # Save to stream
            self._save_to_stream(path_or_stream)

    def _save_to_stream(self, stream: BinaryIO):
        self.save_from_writer(ExtendedBinaryWriter(stream))

    def save_from_writer(self, writer: ExtendedBinaryWriter):
        raise NotImplementedError
