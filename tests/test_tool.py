from GFTextLib import Entry, decode, encode, parse_tagged_text
from GFTextLib.Text.dialect import EXTENDED

import TextTool


def sample_entries():
    return [
        parse_tagged_text("Hello[COMMAND WAIT 5][SPECIAL 57471]"),
        Entry(text="two\nlines", ex_data=4),
        Entry(text=""),
    ]


def test_dump_then_build(tmp_path):
    container = tmp_path / "msg.dat"
    container.write_bytes(encode(sample_entries()))

    assert TextTool.main(["dump", str(container)]) == 0
    dumped = (tmp_path / "msg.txt").read_text(encoding="utf-8").splitlines()
    assert dumped == [
        "Hello[COMMAND WAIT 5][SPECIAL 57471][EXTDATA 0]",
        "two\\nlines[EXTDATA 4]",
        "[EXTDATA 0]",
    ]

    out_dir = tmp_path / "out"
    assert TextTool.main(["build", str(tmp_path / "msg.txt"), "-o", str(out_dir)]) == 0
    assert (out_dir / "msg.dat").read_bytes() == container.read_bytes()


def test_extended_dialect_keeps_min_length(tmp_path):
    container = tmp_path / "msg.bin"
    container.write_bytes(encode([Entry(text="abc", min_length=10)], EXTENDED, crypt_enabled=False))

    assert TextTool.main(["dump", str(container), "--dialect", "extended", "--no-crypt"]) == 0
    assert (tmp_path / "msg.txt").read_text(encoding="utf-8") == "abc[EXTDATA 0][MINLNTH 10]\n"

    assert TextTool.main(["build", str(tmp_path / "msg.txt"), "--dialect", "extended", "--no-crypt", "--ext", ".bin"]) == 0
    assert container.read_bytes() == encode([Entry(text="abc", min_length=10)], EXTENDED, crypt_enabled=False)


def test_names_file(tmp_path):
    names = tmp_path / "names.txt"
    names.write_text("FOO=0x1234\n", encoding="utf-8")
    source = tmp_path / "msg.txt"
    source.write_text("[COMMAND FOO 1]\n", encoding="utf-8")

    assert TextTool.main(["build", str(source), "--names", str(names)]) == 0
    entries = decode((tmp_path / "msg.dat").read_bytes())
    assert entries[0].syntax_tree[0].value == [0x1234, 1]
    assert entries[0].text == "[COMMAND 1234 1]"


def test_bad_files_are_skipped(tmp_path):
    bad = tmp_path / "bad.dat"
    bad.write_bytes(b"\x01\x00" * 4)
    good = tmp_path / "good.dat"
    good.write_bytes(encode([Entry(text="ok")]))
    missing = tmp_path / "missing.dat"

    assert TextTool.main(["dump", str(bad), str(missing), str(good)]) == 1
    assert not (tmp_path / "bad.txt").exists()
    assert (tmp_path / "good.txt").read_text(encoding="utf-8") == "ok[EXTDATA 0]\n"


def test_other_line_breaks_stay_inside_entries(tmp_path):
    entries = [Entry(text="scroll\rnext"), Entry(text="sep\u2028x\x0bend"), Entry(text="last")]
    container = tmp_path / "msg.dat"
    container.write_bytes(encode(entries))

    assert TextTool.main(["dump", str(container)]) == 0
    out_dir = tmp_path / "out"
    assert TextTool.main(["build", str(tmp_path / "msg.txt"), "-o", str(out_dir)]) == 0

    rebuilt = decode((out_dir / "msg.dat").read_bytes())
    assert [entry.text for entry in rebuilt] == ["scroll\rnext", "sep\u2028x\x0bend", "last"]
    assert (out_dir / "msg.dat").read_bytes() == container.read_bytes()


def test_backslashes_survive_dump_and_build(tmp_path):
    container = tmp_path / "path.dat"
    container.write_bytes(encode([Entry(text="C:\\new\\table\nnext")]))

    assert TextTool.main(["dump", str(container)]) == 0
    assert (tmp_path / "path.txt").read_text(encoding="utf-8") == "C:\\\\new\\\\table\\nnext[EXTDATA 0]\n"

    out_dir = tmp_path / "out"
    assert TextTool.main(["build", str(tmp_path / "path.txt"), "-o", str(out_dir)]) == 0
    assert decode((out_dir / "path.dat").read_bytes())[0].text == "C:\\new\\table\nnext"


def test_lone_surrogate_round_trips(tmp_path):
    container = tmp_path / "odd.dat"
    container.write_bytes(encode([Entry(text="a\ud800b")]))
    good = tmp_path / "good.dat"
    good.write_bytes(encode([Entry(text="ok")]))

    assert TextTool.main(["dump", str(container), str(good)]) == 0
    assert (tmp_path / "good.txt").exists()

    out_dir = tmp_path / "out"
    assert TextTool.main(["build", str(tmp_path / "odd.txt"), "-o", str(out_dir)]) == 0
    assert (out_dir / "odd.dat").read_bytes() == container.read_bytes()


def test_undecodable_text_file_is_skipped(tmp_path):
    bad = tmp_path / "bad.txt"
    bad.write_bytes(b"\xff\xfe broken\n")
    good = tmp_path / "good.txt"
    good.write_text("fine[EXTDATA 1]\n", encoding="utf-8")

    assert TextTool.main(["build", str(bad), str(good)]) == 1
    assert not (tmp_path / "bad.dat").exists()
    assert decode((tmp_path / "good.dat").read_bytes()) == [Entry(text="fine", ex_data=1)]
