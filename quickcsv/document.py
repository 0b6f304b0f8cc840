"""A CSV document held in memory, addressed by index or by label."""

from __future__ import annotations

import dataclasses
import io
import operator
import os
from typing import IO, Any, Callable, Sequence, Union

from quickcsv.converter import Converter, NoConverterError, ValueKind
from quickcsv.params import (
    ConverterParams,
    LabelParams,
    LineReaderParams,
    SeparatorParams,
)
from quickcsv.parser import Encoding, decode, encode, parse_csv, write_csv

PathType = Union[str, "os.PathLike[str]"]
Source = Union[PathType, IO[Any]]
Key = Union[int, str]
Kind = Union[ValueKind, type, Callable[[str], Any]]


def _is_path(value: object) -> bool:
    return isinstance(value, (str, os.PathLike))


def _non_negative(value: int, what: str) -> int:
    index = operator.index(value)
    if index < 0:
        raise IndexError(f"{what} index must not be negative: {index}")
    return index


def _at(seq: Sequence[Any], index: int, what: str) -> Any:
    if not 0 <= index < len(seq):
        raise IndexError(f"{what} index {index} out of range (size {len(seq)})")
    return seq[index]


def _resize(row: list[str], size: int) -> None:
    size = max(size, 0)
    del row[size:]
    row.extend([""] * (size - len(row)))


class Document:
    """A CSV document: a grid of text cells with optional row and column labels.

    Indices passed to and returned by the methods exclude the label row and
    the label column; cells can also be addressed by their labels.
    """

    def __init__(
        self,
        source: Source | None = None,
        label_params: LabelParams | None = None,
        separator_params: SeparatorParams | None = None,
        converter_params: ConverterParams | None = None,
        line_reader_params: LineReaderParams | None = None,
    ) -> None:
        self.path = ""
        self._data: list[list[str]] = []
        self._column_names: dict[str, int] = {}
        self._row_names: dict[str, int] = {}
        self._encoding = Encoding.UTF8
        self._configure(label_params, separator_params, converter_params, line_reader_params)
        if _is_path(source):
            self.path = os.fspath(source)
            if self.path:
                self._read_path()
        elif source is not None:
            self._read_stream(source)

    # ------------------------------------------------------------------ I/O

    def load(
        self,
        source: Source,
        label_params: LabelParams | None = None,
        separator_params: SeparatorParams | None = None,
        converter_params: ConverterParams | None = None,
        line_reader_params: LineReaderParams | None = None,
    ) -> None:
        """Replace the document with data read from a path or a stream."""
        self._configure(label_params, separator_params, converter_params, line_reader_params)
        if _is_path(source):
            self.path = os.fspath(source)
            self._read_path()
        else:
            self.path = ""
            self._read_stream(source)

    def save(self, target: Source | None = None) -> None:
        """Write the document to a path, a stream, or the path it was loaded from.

        Files keep the encoding the document was read in; streams get UTF-8
        bytes, or text when the stream is a text stream.
        """
        if target is None or _is_path(target):
            if target is not None and os.fspath(target):
                self.path = os.fspath(target)
            if not self.path:
                raise ValueError("no path to save the document to")
            with open(self.path, "wb") as handle:
                handle.write(encode(self._render(), self._encoding))
            return
        text = self._render()
        if isinstance(target, io.TextIOBase):
            target.write(text)
        else:
            target.write(encode(text))

    def clear(self) -> None:
        """Remove all data and labels."""
        self._data = []
        self._column_names = {}
        self._row_names = {}
        self._encoding = Encoding.UTF8

    # -------------------------------------------------------------- columns

    def get_column_idx(self, column_name: str) -> int:
        """Return the index of a labelled column, or -1 if there is none."""
        if self.label_params.column_name_idx >= 0 and column_name in self._column_names:
            return self._column_names[column_name] - self._rn1
        return -1

    def get_column(self, column: Key, kind: Kind = ValueKind.STRING) -> list[Any]:
        """Return the values of a column, converted to the given kind."""
        column_idx = self._column_index(column)
        read = self._reader(kind)
        data_col = column_idx + self._rn1
        cni = self.label_params.column_name_idx
        values = []
        for row_pos, row in enumerate(self._data):
            if row_pos <= cni:
                continue
            if data_col >= len(row):
                raise IndexError(
                    f"requested column index {column_idx} >= {len(row) - self._rn1} "
                    f"(number of columns on row index {row_pos - self._cn1})"
                )
            values.append(read(row[data_col]))
        return values

    def set_column(self, column: Key, values: Sequence[Any]) -> None:
        """Set the values of a column, growing the document as needed."""
        data_col = self._column_index(column) + self._rn1
        while len(values) + self._cn1 > len(self._data):
            self._data.append([""] * self._data_column_count())
        if data_col + 1 > self._data_column_count():
            for row in self._data:
                _resize(row, data_col + 1 + self._rn1)
        for pos, value in enumerate(values):
            row = _at(self._data, pos + self._cn1, "row")
            _at(row, data_col, "column")
            row[data_col] = self._converter.to_str(value)

    def remove_column(self, column: Key) -> None:
        """Remove a column from every row."""
        data_col = self._column_index(column) + self._rn1
        for row in self._data:
            _at(row, data_col, "column")
        for row in self._data:
            del row[data_col]

    def insert_column(
        self,
        column_idx: int,
        values: Sequence[Any] = (),
        column_name: str = "",
    ) -> None:
        """Insert a column before the given index, optionally with values and a label."""
        column_idx = _non_negative(column_idx, "column")
        data_col = column_idx + self._rn1
        if not values:
            cells = [""] * len(self._data)
        else:
            cells = [""] * (len(values) + self._cn1)
            for pos, value in enumerate(values):
                cells[pos + self._cn1] = self._converter.to_str(value)
        while len(cells) > len(self._data):
            width = max(self._cn1, self._data_column_count())
            self._data.append([""] * width)
        if len(cells) < len(self._data):
            raise IndexError(
                f"column data has {len(cells)} rows, document has {len(self._data)}"
            )
        for row in self._data:
            if data_col > len(row):
                raise IndexError(f"column index {data_col} out of range (size {len(row)})")
        for row, cell in zip(self._data, cells):
            row.insert(data_col, cell)
        if column_name:
            self.set_column_name(column_idx, column_name)

    def column_count(self) -> int:
        """Return the number of data columns, excluding the label column."""
        return max(self._data_column_count() - self._rn1, 0)

    # ----------------------------------------------------------------- rows

    def get_row_idx(self, row_name: str) -> int:
        """Return the index of a labelled row, or -1 if there is none."""
        if self.label_params.row_name_idx >= 0 and row_name in self._row_names:
            return self._row_names[row_name] - self._cn1
        return -1

    def get_row(self, row: Key, kind: Kind = ValueKind.STRING) -> list[Any]:
        """Return the values of a row, converted to the given kind."""
        data_row = self._row_index(row) + self._cn1
        cells = _at(self._data, data_row, "row")
        read = self._reader(kind)
        rni = self.label_params.row_name_idx
        return [read(cell) for pos, cell in enumerate(cells) if pos > rni]

    def set_row(self, row: Key, values: Sequence[Any]) -> None:
        """Set the values of a row, growing the document as needed."""
        data_row = self._row_index(row) + self._cn1
        while data_row + 1 > len(self._data):
            self._data.append([""] * self._data_column_count())
        if len(values) > self._data_column_count():
            for cells in self._data:
                _resize(cells, len(values) + self._rn1)
        cells = self._data[data_row]
        for pos, value in enumerate(values):
            _at(cells, pos + self._rn1, "column")
            cells[pos + self._rn1] = self._converter.to_str(value)

    def remove_row(self, row: Key) -> None:
        """Remove a row."""
        data_row = self._row_index(row) + self._cn1
        _at(self._data, data_row, "row")
        del self._data[data_row]

    def insert_row(
        self,
        row_idx: int,
        values: Sequence[Any] = (),
        row_name: str = "",
    ) -> None:
        """Insert a row before the given index, optionally with values and a label."""
        row_idx = _non_negative(row_idx, "row")
        data_row = row_idx + self._cn1
        if not values:
            cells = [""] * self._data_column_count()
        else:
            cells = [""] * (len(values) + self._rn1)
            for pos, value in enumerate(values):
                cells[pos + self._rn1] = self._converter.to_str(value)
        while data_row > len(self._data):
            self._data.append([""] * self._data_column_count())
        self._data.insert(data_row, cells)
        if row_name:
            self.set_row_name(row_idx, row_name)

    def row_count(self) -> int:
        """Return the number of data rows, excluding the label row."""
        return max(len(self._data) - self._cn1, 0)

    # ---------------------------------------------------------------- cells

    def get_cell(self, column: Key, row: Key, kind: Kind = ValueKind.STRING) -> Any:
        """Return one cell, converted to the given kind."""
        data_col = self._column_index(column) + self._rn1
        data_row = self._row_index(row) + self._cn1
        cells = _at(self._data, data_row, "row")
        return self._reader(kind)(_at(cells, data_col, "column"))

    def set_cell(self, column: Key, row: Key, value: Any) -> None:
        """Set one cell, growing the document as needed."""
        data_col = self._column_index(column) + self._rn1
        data_row = self._row_index(row) + self._cn1
        while data_row + 1 > len(self._data):
            self._data.append([""] * self._data_column_count())
        if data_col + 1 > self._data_column_count():
            for cells in self._data:
                _resize(cells, data_col + 1)
        cells = self._data[data_row]
        _at(cells, data_col, "column")
        cells[data_col] = self._converter.to_str(value)

    # --------------------------------------------------------------- labels

    def get_column_name(self, column_idx: int) -> str:
        """Return the label of a column."""
        data_col = _non_negative(column_idx, "column") + self._rn1
        cni = self.label_params.column_name_idx
        if cni < 0:
            raise IndexError(f"column name row index < 0: {cni}")
        return _at(_at(self._data, cni, "row"), data_col, "column")

    def set_column_name(self, column_idx: int, column_name: str) -> None:
        """Set the label of a column, growing the label row as needed."""
        data_col = _non_negative(column_idx, "column") + self._rn1
        self._column_names[column_name] = data_col
        cni = self.label_params.column_name_idx
        if cni < 0:
            raise IndexError(f"column name row index < 0: {cni}")
        while cni >= len(self._data):
            self._data.append([])
        row = self._data[cni]
        if data_col >= len(row):
            _resize(row, data_col + 1)
        row[data_col] = column_name

    def get_column_names(self) -> list[str]:
        """Return the column labels, excluding the one above the label column."""
        cni = self.label_params.column_name_idx
        if cni < 0:
            return []
        return list(_at(self._data, cni, "row")[self._rn1:])

    def get_row_name(self, row_idx: int) -> str:
        """Return the label of a row."""
        data_row = _non_negative(row_idx, "row") + self._cn1
        rni = self.label_params.row_name_idx
        if rni < 0:
            raise IndexError(f"row name column index < 0: {rni}")
        return _at(_at(self._data, data_row, "row"), rni, "column")

    def set_row_name(self, row_idx: int, row_name: str) -> None:
        """Set the label of a row, growing the document as needed."""
        data_row = _non_negative(row_idx, "row") + self._cn1
        self._row_names[row_name] = data_row
        rni = self.label_params.row_name_idx
        if rni < 0:
            raise IndexError(f"row name column index < 0: {rni}")
        while data_row >= len(self._data):
            self._data.append([])
        row = self._data[data_row]
        if rni >= len(row):
            _resize(row, rni + 1)
        row[rni] = row_name

    def get_row_names(self) -> list[str]:
        """Return the row labels, excluding the one beside the label row."""
        rni = self.label_params.row_name_idx
        if rni < 0:
            return []
        cni = self.label_params.column_name_idx
        return [
            _at(row, rni, "column")
            for pos, row in enumerate(self._data)
            if pos > cni
        ]

    # ------------------------------------------------------------- internal

    def _configure(
        self,
        label_params: LabelParams | None,
        separator_params: SeparatorParams | None,
        converter_params: ConverterParams | None,
        line_reader_params: LineReaderParams | None,
    ) -> None:
        self.label_params = dataclasses.replace(label_params or LabelParams())
        self.separator_params = dataclasses.replace(separator_params or SeparatorParams())
        self.converter_params = dataclasses.replace(converter_params or ConverterParams())
        self.line_reader_params = dataclasses.replace(
            line_reader_params or LineReaderParams()
        )
        self._converter = Converter(self.converter_params)

    @property
    def _cn1(self) -> int:
        return self.label_params.column_name_idx + 1

    @property
    def _rn1(self) -> int:
        return self.label_params.row_name_idx + 1

    def _data_column_count(self) -> int:
        return len(self._data[0]) if self._data else 0

    def _column_index(self, column: Key) -> int:
        if isinstance(column, str):
            index = self.get_column_idx(column)
            if index < 0:
                raise KeyError(f"column not found: {column}")
            return index
        return _non_negative(column, "column")

    def _row_index(self, row: Key) -> int:
        if isinstance(row, str):
            index = self.get_row_idx(row)
            if index < 0:
                raise KeyError(f"row not found: {row}")
            return index
        return _non_negative(row, "row")

    def _reader(self, kind: Kind) -> Callable[[str], Any]:
        if isinstance(kind, (ValueKind, type)):
            converter = self._converter
            return lambda text: converter.to_val(text, kind)
        if callable(kind):
            return kind
        raise NoConverterError()

    def _read_path(self) -> None:
        with open(self.path, "rb") as handle:
            raw = handle.read()
        self._ingest(raw)

    def _read_stream(self, stream: IO[Any]) -> None:
        if stream.seekable():
            stream.seek(0)
        self._ingest(stream.read())

    def _ingest(self, raw: bytes | str) -> None:
        self.clear()
        if isinstance(raw, str):
            text = raw[1:] if raw.startswith("\ufeff") else raw
            encoding = Encoding.UTF8
        else:
            text, encoding = decode(raw)
        self._encoding = encoding
        result = parse_csv(text, self.separator_params, self.line_reader_params)
        self._data = result.rows
        self.separator_params.has_cr = result.has_cr

        cni = self.label_params.column_name_idx
        rni = self.label_params.row_name_idx
        if cni >= 0 and len(self._data) > cni:
            self._column_names = {
                name: pos for pos, name in enumerate(self._data[cni])
            }
        if rni >= 0 and len(self._data) > cni + 1:
            labels = (row[rni] for row in self._data if len(row) > rni)
            self._row_names = {name: pos for pos, name in enumerate(labels)}

    def _render(self) -> str:
        return write_csv(self._data, self.separator_params)