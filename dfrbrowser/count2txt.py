"""count2txt: turn JSTOR wordcounts*.CSV files into bag-of-words text.

Each input file has the header ``WORDCOUNTS,WEIGHT`` followed by
``word,count`` rows. Every word is repeated ``count`` times, in file order.

By default one line per input is printed to stdout, in the layout MALLET's
``import-file`` command expects (name, label, text)::

    wordcounts_10.2307_432.CSV X dog dog cat

With ``--multifile`` each input gets its own ``<stem>.txt`` instead.

Problems with a single input (missing, not a CSV, wrong header, bad row,
output already present) are logged as warnings and the file is skipped.
Failing to open an input or to write an output stops the run.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import List, Optional

import typer  # type: ignore

from dfrbrowser.errors import ConversionError, WordcountFormatError

logger = logging.getLogger(__name__)

app = typer.Typer(add_completion=False)

HEADER = "WORDCOUNTS,WEIGHT"


# ── Reading ────────────────────────────────────────────────────────────────────


def read_wordcounts(path: Path) -> list[tuple[str, int]]:
    """Read the ``(word, count)`` rows of a wordcount CSV, in file order.

    Raises:
        ConversionError: If the file cannot be opened or read.
        WordcountFormatError: On text that is not UTF-8, an unexpected
            header, or a malformed row.
    """
    try:
        with path.open(encoding="utf-8-sig") as countfile:
            lines = countfile.read().splitlines()
    except UnicodeDecodeError as exc:
        raise WordcountFormatError(f"{path.name}: not UTF-8 text") from exc
    except OSError as exc:
        raise ConversionError(f"cannot open {path}: {exc}") from exc

    header = lines[0].strip() if lines else ""
    if header != HEADER:
        raise WordcountFormatError(f"{path.name}: unexpected header {header!r}")

    rows: list[tuple[str, int]] = []
    for lineno, line in enumerate(lines[1:], start=2):
        line = line.strip()
        if not line:
            continue
        word, sep, weight = line.rpartition(",")
        try:
            count = int(weight)
        except ValueError:
            count = -1
        if not sep or not word or count < 0:
            raise WordcountFormatError(f"{path.name}:{lineno}: bad row {line!r}")
        rows.append((word, count))
    return rows


def bag_of_words(rows: list[tuple[str, int]]) -> str:
    """Spell out each word as many times as it was counted.

    Examples:
        >>> bag_of_words([("dog", 2), ("cat", 1)])
        'dog dog cat'
    """
    return " ".join(word for word, count in rows for _ in range(count))


# ── Writing ────────────────────────────────────────────────────────────────────


def output_path(path: Path, output_dir: Optional[Path] = None) -> Path:
    """Where ``--multifile`` writes the text for *path*."""
    return (output_dir or path.parent) / f"{path.stem}.txt"


def write_text(out_path: Path, body: str) -> bool:
    """Write *body* to a new file.

    Returns:
        False if the file already exists (nothing is written).

    Raises:
        ConversionError: If the file cannot be opened, written or closed.
    """
    try:
        with out_path.open("x", encoding="utf-8") as out:
            out.write(body + "\n")
    except FileExistsError:
        return False
    except OSError as exc:
        raise ConversionError(f"cannot write {out_path}: {exc}") from exc
    return True


def convert_file(
    path: Path,
    multifile: bool = False,
    dry_run: bool = False,
    output_dir: Optional[Path] = None,
) -> Optional[int]:
    """Convert one wordcount CSV.

    Args:
        path: The input CSV.
        multifile: Write ``<stem>.txt`` rather than printing a line.
        dry_run: Count tokens only; write and print nothing.
        output_dir: Directory for ``--multifile`` output (default: beside
            the input).

    Returns:
        Number of tokens produced, or ``None`` if the file was skipped.

    Raises:
        ConversionError: On a fatal I/O failure.
    """
    if not path.exists():
        logger.warning("%s: no such file, skipping", path)
        return None
    if path.suffix.lower() != ".csv":
        logger.warning("%s: not a .csv file, skipping", path)
        return None

    try:
        rows = read_wordcounts(path)
    except WordcountFormatError as exc:
        logger.warning("%s, skipping", exc)
        return None

    tokens = sum(count for _, count in rows)
    logger.info("%s: %d words, %d tokens", path.name, len(rows), tokens)
    if dry_run:
        return tokens

    body = bag_of_words(rows)
    if multifile:
        out_path = output_path(path, output_dir)
        if not write_text(out_path, body):
            logger.warning("%s already exists, skipping", out_path)
            return None
        logger.info("Wrote %s", out_path)
    else:
        typer.echo(f"{path.name} X {body}")
    return tokens


# ── CLI ────────────────────────────────────────────────────────────────────────


@app.command()
def main(
    files: List[Path] = typer.Argument(..., help="JSTOR wordcount CSV files"),
    dry_run: bool = typer.Option(
        False, "--dry-run", "-n", help="Count tokens but write nothing"
    ),
    multifile: bool = typer.Option(
        False, "--multifile", help="Write one .txt file per input"
    ),
    output_dir: Optional[Path] = typer.Option(
        None, "--output-dir", "-o", file_okay=False, help="Directory for --multifile output"
    ),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Only show warnings and errors"
    ),
):
    """
    Convert JSTOR wordcount CSVs into bag-of-words text.
    """
    log = logging.getLogger("dfrbrowser")
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    previous_level = log.level
    log.addHandler(handler)
    log.setLevel(logging.WARNING if quiet else logging.INFO)

    try:
        converted = 0
        for path in files:
            if convert_file(path, multifile, dry_run, output_dir) is not None:
                converted += 1
        logger.info("Converted %d of %d files", converted, len(files))
    except ConversionError as exc:
        logger.error("%s", exc)
        raise typer.Exit(code=1)
    finally:
        log.removeHandler(handler)
        log.setLevel(previous_level)


if __name__ == "__main__":
    app()
