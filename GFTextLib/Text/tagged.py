from __future__ import annotations

import logging
from typing import List, Optional

from GFTextLib.Text.dialect import STANDARD, DialectConfig, PaddingMode, parse_word
from GFTextLib.Text.entry import Command, Entry, Literal, Segment, Special

log = logging.getLogger(__name__)

TAG_NAME_LENGTH = 7


class _TaggedTextParser:
    def __init__(self, text: str, dialect: DialectConfig, base: Optional[Entry]):
        self.text = text
        self.dialect = dialect
        self.segments: List[Segment] = []
        self.pending: List[str] = []
        self.ex_data = base.ex_data if base is not None else 0
        self.min_length = base.min_length if base is not None else 0
        self.force_full_width = base.force_full_width if base is not None else False

    def flush(self) -> None:
        if self.pending:
            self.segments.append(Literal("".join(self.pending)))
            self.pending.clear()

    def try_tag(self, index: int) -> Optional[int]:
        """Consume the tag starting at `index`, returning the index after it or None to keep it as text."""
        end = self.text.find("]", index + TAG_NAME_LENGTH + 1)
        if end == -1:
            return None
        full_tag = self.text[index:end + 1]
        tag = full_tag[1:TAG_NAME_LENGTH + 1]
        tag_value = full_tag[TAG_NAME_LENGTH + 1:-1].replace(",", " ").split()
        if not tag_value:
            return None

        if tag == "EXTDATA" and len(tag_value) == 1:
            ex_data = parse_word(tag_value[0], signed=True)
            if ex_data is None:
                return None
            self.ex_data = ex_data
        elif tag == "MINLNTH" and len(tag_value) == 1:
            min_length = parse_word(tag_value[0])
            if min_length is None:
                return None
            self.min_length = min_length
        elif tag == "COMMAND":
            code = self.dialect.command_code(tag_value[0])
            arguments = [parse_word(token) for token in tag_value[1:]]
            if code is None or None in arguments:
                return None
            value = [code] + arguments
            self.flush()
            self.segments.append(Command(self.dialect.format_command(value), value))
        elif tag == "SPECIAL" and len(tag_value) == 1:
            code = self.dialect.parse_special(tag_value[0])
            if code is None:
                return None
            self.flush()
            self.segments.append(Special(self.dialect.format_special(code), [code]))
        else:
            return None
        return end + 1

    def parse(self) -> Entry:
        text = self.text
        index = 0
        while index < len(text):
            char = text[index]
            if char == "\\" and text[index + 1:index + 2] in ("n", "\\"):
                self.pending.append("\n" if text[index + 1] == "n" else "\\")
                index += 2
                continue
            if char == "[" and len(text) > index + 10:
                next_index = self.try_tag(index)
                if next_index is not None:
                    index = next_index
                    continue
                log.debug("Keeping %r as literal text", text[index:index + 16])
            self.pending.append(char)
            index += 1
        self.flush()

        syntax_tree = self.segments or None
        return Entry(
            text="".join(segment.hint for segment in self.segments),
            syntax_tree=syntax_tree,
            ex_data=self.ex_data,
            min_length=self.min_length,
            force_full_width=self.force_full_width,
        )


def parse_tagged_text(text: str, dialect: DialectConfig = STANDARD, base: Optional[Entry] = None) -> Entry:
    """
    Rebuild an entry from an edited tagged string.

    `[COMMAND ...]` and `[SPECIAL ...]` become segments, `[EXTDATA n]` and
    `[MINLNTH n]` set metadata, `\\n` is a line feed and `\\\\` a backslash.
    Tags that do not parse are kept as literal text. Metadata not given by a
    tag comes from `base`.
    """
    return _TaggedTextParser(text, dialect, base).parse()


def render_tagged_text(entry: Entry, dialect: DialectConfig = STANDARD) -> str:
    line = entry.text.replace("\\", "\\\\").replace("\n", "\\n") + f"[EXTDATA {entry.ex_data}]"
    if dialect.padding_mode == PaddingMode.MIN_LENGTH:
        line += f"[MINLNTH {entry.min_length}]"
    return line


__all__ = ["parse_tagged_text", "render_tagged_text"]
