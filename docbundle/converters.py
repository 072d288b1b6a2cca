"""Classify directory entries and normalise them into prompt-ready text files."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Callable, Iterable, List, Sequence

import pandas as pd
from markitdown import MarkItDown

from .config import DEFAULT_TEXT_SUFFIXES
from .errors import DirectoryNotFound, FileConversionFailure
from .logging import get_logger

SPREADSHEET_SUFFIXES: tuple[str, ...] = (".xlsx",)
TEXT_OUTPUT_SUFFIX = ".txt"
DEFAULT_DELIMITER = "\t"

MarkdownConverter = Callable[[Path], str]

_LOGGER = get_logger("converters")


@lru_cache(maxsize=1)
def _markitdown() -> MarkItDown:
    return MarkItDown()


def _default_markdown_converter(path: Path) -> str:
    return _markitdown().convert(str(path)).text_content


def convert_xlsx_to_txt(path: Path, *, delimiter: str = DEFAULT_DELIMITER) -> Path:
    """Write the first sheet of a workbook as delimited text next to it.

    The header line is taken from the sheet's header row; each data row follows
    with its values joined by ``delimiter``. Empty cells become empty strings.
    Returns the path of the written ``.txt`` file.
    """
    path = Path(path)
    _LOGGER.info("Converting spreadsheet to text: %s", path)
    if not path.is_file():
        raise FileConversionFailure(path, "file does not exist")

    try:
        frame = pd.read_excel(path, sheet_name=0, dtype=object)
    except Exception as exc:  # pandas/openpyxl raise a wide range of parse errors
        raise FileConversionFailure(path, str(exc)) from exc

    if frame.empty:
        raise FileConversionFailure(path, "first sheet has no data rows")

    headers = [str(column) for column in frame.columns]
    frame = frame.astype(object).where(frame.notna(), "")
    lines = [delimiter.join(headers)]
    for row in frame.itertuples(index=False, name=None):
        lines.append(delimiter.join(str(value) for value in row))

    target = path.with_suffix(TEXT_OUTPUT_SUFFIX)
    target.write_text("\n".join(lines), encoding="utf-8")
    _LOGGER.info("Spreadsheet converted to text: %s", target)
    return target


def convert_to_markdown(path: Path, converter: MarkdownConverter | None = None) -> Path:
    """Extract text from an arbitrary document and store it as ``<stem>.txt``."""
    path = Path(path)
    _LOGGER.info("Converting file to Markdown: %s", path)
    if not path.is_file():
        raise FileConversionFailure(path, "file does not exist")

    convert = converter or _default_markdown_converter
    try:
        content = convert(path)
    except FileConversionFailure:
        raise
    except Exception as exc:  # markitdown surfaces format-specific exception types
        raise FileConversionFailure(path, str(exc)) from exc

    target = path.with_suffix(TEXT_OUTPUT_SUFFIX)
    target.write_text(content or "", encoding="utf-8")
    _LOGGER.info("File converted to Markdown: %s", target)
    return target


class FileConverter:
    """Turns the entries of one directory into a list of text files."""

    def __init__(
        self,
        *,
        text_suffixes: Iterable[str] = DEFAULT_TEXT_SUFFIXES,
        always_include: Iterable[str] = (),
        keep_originals: bool = False,
        markdown_converter: MarkdownConverter | None = None,
        delimiter: str = DEFAULT_DELIMITER,
    ) -> None:
        self.text_suffixes = frozenset(suffix.lower() for suffix in text_suffixes)
        self.always_include = frozenset(always_include)
        self.keep_originals = keep_originals
        self.markdown_converter = markdown_converter
        self.delimiter = delimiter

    def list_convertible_files(
        self, directory: Path | str, company: str | None = None
    ) -> List[str]:
        """Return the names of text files in ``directory``, converting as needed.

        Plain-text entries are kept as they are, filtered by ``company`` when it
        is given. Spreadsheets are rewritten as delimited text and, unless
        ``keep_originals`` is set, the workbook is removed. Everything else goes
        through generic text extraction; a file that fails to convert is logged
        and skipped. A conversion whose ``<stem>.txt`` already exists is skipped
        too, and the original is left in place.
        """
        folder = Path(directory).expanduser()
        if not folder.is_dir():
            raise DirectoryNotFound(f"Directory not found: {directory}")
        try:
            entries = sorted(folder.iterdir(), key=lambda entry: entry.name)
        except OSError as exc:
            raise DirectoryNotFound(f"Directory cannot be read: {directory}: {exc}") from exc

        names: List[str] = []
        for entry in entries:
            if entry.is_dir():
                _LOGGER.debug("Skipping subdirectory %s", entry.name)
                continue
            suffix = entry.suffix.lower()
            if suffix in self.text_suffixes:
                if self._passes_filter(entry.name, company):
                    names.append(entry.name)
                continue
            try:
                converted = self._convert(entry, suffix)
            except FileConversionFailure as exc:
                _LOGGER.warning("Failed to convert %s to text: %s", entry.name, exc.reason)
                continue
            names.append(converted.name)

        result = _unique(names)
        _LOGGER.debug("File list: %s", result)
        return result

    def _convert(self, entry: Path, suffix: str) -> Path:
        # Never clobber a user's text file or an earlier conversion from this batch.
        target = entry.with_suffix(TEXT_OUTPUT_SUFFIX)
        if target.exists():
            raise FileConversionFailure(entry, f"{target.name} already exists")
        if suffix in SPREADSHEET_SUFFIXES:
            converted = convert_xlsx_to_txt(entry, delimiter=self.delimiter)
            if not self.keep_originals:
                entry.unlink()
                _LOGGER.info("Removed original spreadsheet %s", entry.name)
            return converted
        return convert_to_markdown(entry, self.markdown_converter)

    def _passes_filter(self, name: str, company: str | None) -> bool:
        if not company:
            return True
        return company in name or name in self.always_include


def list_convertible_files(
    directory: Path | str,
    company: str | None = None,
    *,
    text_suffixes: Sequence[str] = DEFAULT_TEXT_SUFFIXES,
    always_include: Sequence[str] = (),
    keep_originals: bool = False,
) -> List[str]:
    """Module-level shortcut around :class:`FileConverter`."""
    converter = FileConverter(
        text_suffixes=text_suffixes,
        always_include=always_include,
        keep_originals=keep_originals,
    )
    return converter.list_convertible_files(directory, company)


def _unique(names: Iterable[str]) -> List[str]:
    seen: set[str] = set()
    ordered: List[str] = []
    for name in names:
        if name not in seen:
            seen.add(name)
            ordered.append(name)
    return ordered


__all__ = [
    "FileConverter",
    "convert_to_markdown",
    "convert_xlsx_to_txt",
    "list_convertible_files",
]
