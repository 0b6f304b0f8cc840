# quickcsv

A small library for reading, editing and writing CSV documents held in
memory. Cells can be reached by position or by label: one row of the file
can hold the column labels and one column can hold the row labels.

## Installation

    pip install quickcsv

## Reading

```python
from quickcsv.converter import ValueKind
from quickcsv.document import Document
from quickcsv.params import LabelParams, SeparatorParams

doc = Document("prices.csv", label_params=LabelParams(0, 0))

close = doc.get_column("Close", ValueKind.FLOAT)
row = doc.get_row("2017-02-22", ValueKind.FLOAT)
volume = doc.get_cell("Volume", "2017-02-22", ValueKind.LONG_LONG)
```

Columns and rows are given either as a zero-based index or as a label.
Indices never count the label row or the label column.
`LabelParams(column_name_idx, row_name_idx)` says which row holds the
column labels (default `0`) and which column holds the row labels (default
`-1`). `-1` turns label lookup off for that direction, so that row or column
is ordinary data.

`get_column_idx` and `get_row_idx` return the index of a label, or `-1`
when there is none. `get_column_names`, `get_row_names`, `column_count` and
`row_count` describe the document's shape.

### Parameters

- `SeparatorParams(separator=",", trim=False, has_cr=..., quoted_linebreaks=False, auto_quote=True)`:
  the field separator, trimming of whitespace around cells, CR/LF line
  endings for new documents (on reading, it is set from what the data uses),
  line breaks inside quoted cells, and removing quotes on read / adding them
  on write.
- `LineReaderParams(skip_comment_lines=False, comment_prefix="#", skip_empty_lines=False)`:
  lines to leave out while reading.
- `ConverterParams(has_default_converter=False, default_float=nan, default_integer=0, numeric_locale=True)`:
  what happens with text that is not a valid number, and whether float
  parsing honours the current `LC_NUMERIC` decimal point.

## Conversions

Cells are returned as strings unless a kind is given. A kind is a
`ValueKind` member (`INT`, `LONG`, `LONG_LONG`, `UNSIGNED`, `UNSIGNED_LONG`,
`UNSIGNED_LONG_LONG`, `FLOAT`, `DOUBLE`, `LONG_DOUBLE`, `CHAR`, `STRING`),
one of the types `int`, `float` or `str`, or any callable taking the cell
text.

Text that is not a valid number raises `ValueError` (or `OverflowError` when
it is out of range for the kind). With `ConverterParams(has_default_converter=True, ...)`
the default value is returned instead. A kind that cannot be converted raises
`NoConverterError`.

The same conversions are available directly through
`quickcsv.converter.Converter`, whose `to_val(text, kind)` and
`to_str(value)` turn text into values and values into text (floats are
written with six significant digits).

## Editing and writing

```python
doc = Document(label_params=LabelParams(0, 0))
doc.insert_column(0, [4, 9, 16, 25], "B")
doc.insert_column(0, [2, 3, 4, 5], "A")
doc.set_row_name(0, "0")
doc.set_cell(0, 0, 7)
doc.save("out.csv")
```

`set_cell`, `set_row` and `set_column` grow the document as needed;
`insert_row`, `insert_column`, `remove_row` and `remove_column` add and take
away whole rows and columns; `set_column_name` and `set_row_name` set labels.
A label that is not found raises `KeyError`; an index out of range raises
`IndexError`.

`Document(...)` and `load` accept a path or a file object (binary or text).
`save` writes to a path, to the path the document was loaded from, or to a
file object. Files with a UTF-8 byte order mark, and UTF-16 files (little or
big endian, with a byte order mark), are read; when saved to a path, a
document is written back in the encoding it was read in. File objects always
receive UTF-8.

The lower-level functions in `quickcsv.parser` (`decode`, `encode`,
`parse_csv`, `write_csv`, `trim`, `unquote`) can be used on their own.

## Scope

quickcsv is a library only: it has no command-line tool, and it keeps the
whole document in memory rather than streaming it.

## Running the tests

    pip install quickcsv[test]
    pytest