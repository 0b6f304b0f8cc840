"""Reading CSV text into rows of cells, and writing rows back to CSV text."""

from __future__ import annotations

import codecs
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Sequence

from quickcsv.params import LineReaderParams, SeparatorParams

# Characters removed by trimming: the C-locale whitespace set.
_WHITESPACE = " \t\n\v\f\r"
_QUOTE = '"'


class Encoding(Enum):
    """Text encodings a CSV document can be stored in."""

    UTF8 = "utf-8"
    UTF16_LE = "utf-16-le"
    UTF16_BE = "utf-16-be"


@dataclass
class ParseResult:
    """Rows of cells read from CSV text, and whether the text used CR/LF line endings."""

    rows: list[list[str]] = field(default_factory=list)
    has_cr: bool = False


def decode(data: bytes) -> tuple[str, Encoding]:
    """Decode raw CSV bytes, honouring a UTF-16 or UTF-8 byte order mark.

    Data without a UTF-16 byte order mark is taken as UTF-8; a UTF-8 byte
    order mark is skipped. Bytes that are not valid UTF-8 are preserved so
    that encoding the text again gives back the same bytes.
    """
    if data.startswith(codecs.BOM_UTF16_LE):
        return data[2:].decode(Encoding.UTF16_LE.value), Encoding.UTF16_LE
    if data.startswith(codecs.BOM_UTF16_BE):
        return data[2:].decode(Encoding.UTF16_BE.value), Encoding.UTF16_BE
    if data.startswith(codecs.BOM_UTF8):
        data = data[len(codecs.BOM_UTF8):]
    return data.decode("utf-8", "surrogateescape"), Encoding.UTF8


def encode(text: str, encoding: Encoding = Encoding.UTF8) -> bytes:
    """Encode CSV text; UTF-16 output starts with a byte order mark."""
    if encoding is Encoding.UTF16_LE:
        return codecs.BOM_UTF16_LE + text.encode(Encoding.UTF16_LE.value)
    if encoding is Encoding.UTF16_BE:
        return codecs.BOM_UTF16_BE + text.encode(Encoding.UTF16_BE.value)
    return text.encode("utf-8", "surrogateescape")


def trim(text: str, separator_params: SeparatorParams | None = None) -> str:
    """Strip leading and trailing whitespace if trimming is enabled."""
    params = separator_params if separator_params is not None else SeparatorParams()
    return text.strip(_WHITESPACE) if params.trim else text


def unquote(text: str, separator_params: SeparatorParams | None = None) -> str:
    """Remove surrounding quotes and unescape doubled quotes if auto-quoting is enabled."""
    params = separator_params if separator_params is not None else SeparatorParams()
    if params.auto_quote and len(text) >= 2 and text[0] == _QUOTE and text[-1] == _QUOTE:
        return text[1:-1].replace(_QUOTE * 2, _QUOTE)
    return text


def parse_csv(
    text: str,
    separator_params: SeparatorParams | None = None,
    line_reader_params: LineReaderParams | None = None,
) -> ParseResult:
    """Split CSV text into rows of cells.

    Carriage returns outside quoted line breaks are dropped and counted; the
    text is taken to use CR/LF when more than half its line feeds have one.
    """
    sep_params = separator_params if separator_params is not None else SeparatorParams()
    line_params = line_reader_params if line_reader_params is not None else LineReaderParams()
    separator = sep_params.separator
    keep_linebreaks = sep_params.quoted_linebreaks

    def finish(chars: list[str]) -> str:
        return unquote(trim("".join(chars), sep_params), sep_params)

    rows: list[list[str]] = []
    row: list[str] = []
    cell: list[str] = []
    quoted = False
    cr_count = 0
    lf_count = 0

    for char in text:
        if char == _QUOTE:
            if not cell or cell[0] == _QUOTE:
                quoted = not quoted
            cell.append(char)
        elif char == separator:
            if quoted:
                cell.append(char)
            else:
                row.append(finish(cell))
                cell = []
        elif char == "\r":
            if keep_linebreaks and quoted:
                cell.append(char)
            else:
                cr_count += 1
        elif char == "\n":
            if keep_linebreaks and quoted:
                cell.append(char)
                continue
            lf_count += 1
            if line_params.skip_empty_lines and not row and not cell:
                continue
            row.append(finish(cell))
            is_comment = (
                line_params.skip_comment_lines
                and row[0][:1] == line_params.comment_prefix
            )
            if not is_comment:
                rows.append(row)
            row = []
            cell = []
            quoted = False
        else:
            cell.append(char)

    if cell or row:
        row.append(finish(cell))
        rows.append(row)

    return ParseResult(rows=rows, has_cr=cr_count > lf_count // 2)


def _format_cell(cell: str, params: SeparatorParams) -> str:
    if params.auto_quote and (params.separator in cell or " " in cell):
        return _QUOTE + cell.replace(_QUOTE, _QUOTE * 2) + _QUOTE
    return cell


def write_csv(
    rows: Iterable[Sequence[str]],
    separator_params: SeparatorParams | None = None,
) -> str:
    """Render rows of cells as CSV text, every row ending with a line break."""
    params = separator_params if separator_params is not None else SeparatorParams()
    line_end = "\r\n" if params.has_cr else "\n"
    return "".join(
        params.separator.join(_format_cell(cell, params) for cell in row) + line_end
        for row in rows
    )