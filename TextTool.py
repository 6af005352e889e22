import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from rich.progress import BarColumn, MofNCompleteColumn, Progress, TextColumn, TimeElapsedColumn

from GFTextLib import DIALECTS, ContractViolation, DialectConfig, FormatError, PaddingMode, TextFile, load_name_table, parse_tagged_text, render_tagged_text

logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
info = logging.info
error = logging.error


def parse_args(args=None, namespace=None):
    p = argparse.ArgumentParser(description="Dump enciphered text containers to tagged text and build them back.")
    p.add_argument("mode", choices=["dump", "build"], help="dump: container -> .txt, build: .txt -> container")
    p.add_argument("files", nargs="+", type=Path)
    p.add_argument("-o", "--output", type=Path, default=None, help="output directory, default is next to each input")
    p.add_argument("--dialect", choices=sorted(DIALECTS), default="standard")
    p.add_argument("--names", type=Path, default=None, help="extra NAME=code command names")
    p.add_argument("--no-crypt", dest="crypt", action="store_false", help="read/write plaintext lines")
    p.add_argument("--padding", choices=[mode.value for mode in PaddingMode], default=None, help="override the dialect padding")
    p.add_argument("--ext", default=".dat", help="container extension used by build")
    p.add_argument("-v", "--verbose", action="store_true")
    return p.parse_args(args=args, namespace=namespace)


def build_dialect(name: str, names_path: Optional[Path]) -> DialectConfig:
    dialect = DIALECTS[name]
    if names_path is not None:
        extra = load_name_table(names_path.read_text(encoding="utf-8"))
        info(f"Loaded {len(extra)} command names from {names_path}")
        dialect = dialect.with_names(extra)
    return dialect


def output_path(src: Path, out_dir: Optional[Path], suffix: str) -> Path:
    target = src.with_suffix(suffix)
    if out_dir is not None:
        out_dir.mkdir(parents=True, exist_ok=True)
        target = out_dir / target.name
    return target


def dump_file(src: Path, dst: Path, text_file: TextFile) -> int:
    text_file.load(src)
    lines = [render_tagged_text(entry, text_file.dialect) for entry in text_file.entries]
    # lone surrogates from the container survive as surrogatepass UTF-8
    with open(dst, "w", encoding="utf-8", errors="surrogatepass", newline="") as fp:
        fp.write("".join(line + "\n" for line in lines))
    return len(lines)


def build_file(src: Path, dst: Path, text_file: TextFile) -> int:
    # one entry per "\n" only, entries may hold \r or other line breaks
    with open(src, encoding="utf-8", errors="surrogatepass", newline="") as fp:
        lines = fp.read().split("\n")
    if lines[-1] == "":
        lines.pop()
    text_file.entries = [parse_tagged_text(line, text_file.dialect) for line in lines]
    text_file.save(dst)
    return len(text_file)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    dialect = build_dialect(args.dialect, args.names)
    padding_mode = PaddingMode(args.padding) if args.padding else None
    failed = 0

    with Progress(TextColumn("[progress.description]{task.description}"), BarColumn(), MofNCompleteColumn(), TimeElapsedColumn()) as progress:
        task = progress.add_task(args.mode, total=len(args.files))
        for src in args.files:
            text_file = TextFile(dialect, crypt_enabled=args.crypt, padding_mode=padding_mode)
            try:
                if args.mode == "dump":
                    dst = output_path(src, args.output, ".txt")
                    count = dump_file(src, dst, text_file)
                else:
                    dst = output_path(src, args.output, args.ext)
                    count = build_file(src, dst, text_file)
                info(f"{src} -> {dst} ({count} lines)")
            except (FormatError, ContractViolation, OSError, UnicodeError) as e:
                failed += 1
                error(f"Skipping {src}: {e}")
            progress.update(task, advance=1)

    if failed:
        error(f"{failed} of {len(args.files)} files failed")
    return 1 if failed else 0


if __name__ == "__main__":
    sys.exit(main())
