"""Parameter sets controlling how CSV documents are read, converted and written."""

from __future__ import annotations

import math
import os
from dataclasses import dataclass

#: Whether newly created documents use CR/LF line endings by default.
PLATFORM_HAS_CR: bool = os.name == "nt"


def _require_single_char(name: str, value: str) -> None:
    if not isinstance(value, str) or len(value) != 1:
        raise ValueError(f"{name} must be a single character, got {value!r}")


@dataclass
class ConverterParams:
    """How text that is not a valid number (including empty text) is converted.

    When ``has_default_converter`` is false, an invalid number raises an error.
    Otherwise ``default_float`` or ``default_integer`` is returned in its place.
    ``numeric_locale`` selects whether float parsing honours the current
    LC_NUMERIC locale.
    """

    has_default_converter: bool = False
    default_float: float = math.nan
    default_integer: int = 0
    numeric_locale: bool = True


@dataclass
class LabelParams:
    """Which row holds the column labels and which column holds the row labels.

    An index of -1 disables lookup by label along that axis, so all rows (or
    columns) are treated as document data.
    """

    column_name_idx: int = 0
    row_name_idx: int = -1


@dataclass
class SeparatorParams:
    """How fields and lines of CSV data are separated and quoted.

    ``has_cr`` selects CR/LF line endings for new documents; for documents that
    are read it is replaced by what the data itself uses.
    """

    separator: str = ","
    trim: bool = False
    has_cr: bool = PLATFORM_HAS_CR
    quoted_linebreaks: bool = False
    auto_quote: bool = True

    def __post_init__(self) -> None:
        _require_single_char("separator", self.separator)


@dataclass
class LineReaderParams:
    """How comment lines and empty lines are treated when reading."""

    skip_comment_lines: bool = False
    comment_prefix: str = "#"
    skip_empty_lines: bool = False

    def __post_init__(self) -> None:
        _require_single_char("comment_prefix", self.comment_prefix)