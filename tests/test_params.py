import dataclasses
import math
import os

import pytest

from quickcsv.params import (
    PLATFORM_HAS_CR,
    ConverterParams,
    LabelParams,
    LineReaderParams,
    SeparatorParams,
)


def test_converter_params_defaults():
    params = ConverterParams()
    assert params.has_default_converter is False
    assert math.isnan(params.default_float)
    assert params.default_integer == 0
    assert params.numeric_locale is True


def test_converter_params_custom_values():
    params = ConverterParams(True, 0.0, 1)
    assert params.has_default_converter is True
    assert params.default_float == 0.0
    assert params.default_integer == 1
    assert params.numeric_locale is True


def test_converter_params_numeric_locale_can_be_disabled():
    params = ConverterParams()
    params.numeric_locale = False
    assert params.numeric_locale is False


def test_label_params_defaults():
    params = LabelParams()
    assert params.column_name_idx == 0
    assert params.row_name_idx == -1


def test_label_params_positional_order():
    params = LabelParams(-1, 0)
    assert params.column_name_idx == -1
    assert params.row_name_idx == 0


def test_label_params_single_argument_shifts_column_labels():
    params = LabelParams(1)
    assert params.column_name_idx == 1
    assert params.row_name_idx == -1


def test_separator_params_defaults():
    params = SeparatorParams()
    assert params.separator == ","
    assert params.trim is False
    assert params.has_cr is PLATFORM_HAS_CR
    assert params.quoted_linebreaks is False
    assert params.auto_quote is True


def test_separator_params_default_cr_follows_os():
    params = SeparatorParams(";")
    assert params.has_cr == (os.name == "nt")


def test_separator_params_positional_order():
    params = SeparatorParams(";", True, True, True, False)
    assert params.separator == ";"
    assert params.trim is True
    assert params.has_cr is True
    assert params.quoted_linebreaks is True
    assert params.auto_quote is False


@pytest.mark.parametrize("bad", ["", ",,", "ab"])
def test_separator_params_rejects_non_single_char(bad):
    with pytest.raises(ValueError):
        SeparatorParams(bad)


def test_line_reader_params_defaults():
    params = LineReaderParams()
    assert params.skip_comment_lines is False
    assert params.comment_prefix == "#"
    assert params.skip_empty_lines is False


def test_line_reader_params_positional_order():
    params = LineReaderParams(False, "#", True)
    assert params.skip_comment_lines is False
    assert params.comment_prefix == "#"
    assert params.skip_empty_lines is True


@pytest.mark.parametrize("bad", ["", "##"])
def test_line_reader_params_rejects_non_single_char(bad):
    with pytest.raises(ValueError):
        LineReaderParams(True, bad)


def test_params_copy_is_independent():
    original = SeparatorParams(";")
    copy = dataclasses.replace(original)
    copy.has_cr = not original.has_cr
    assert copy.separator == original.separator
    assert copy.has_cr != original.has_cr


def test_label_params_equality():
    assert LabelParams(0, 0) == LabelParams(0, 0)
    assert (LabelParams(0, 0) == LabelParams(0, -1)) is False