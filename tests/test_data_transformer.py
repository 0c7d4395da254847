"""Tests for type coercion and NA normalization."""

import pytest
import sys
import os

import pandas as pd

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(__file__)))

from metconfig.loaders.data_transformer import (
    TypeCoercionError,
    coerce_column_types,
    drop_blank_rows,
    normalize_na,
)

from conftest import make_config_frame


class TestCoerceColumnTypes:
    """Test conversion to the declared column types."""

    def test_numeric_column(self):
        raw = pd.DataFrame({'VERSION': [5, "6.1", None, "NA"]}, dtype=object)
        typed = coerce_column_types(raw, {'VERSION': 'numeric'})
        assert typed['VERSION'].dtype == 'float64'
        assert typed['VERSION'].tolist()[:2] == [5.0, 6.1]
        assert typed['VERSION'].isna().tolist() == [False, False, True, True]

    def test_logical_column(self):
        raw = pd.DataFrame({'SUPPORTED': [True, "FALSE", "t", None, "NA"]}, dtype=object)
        typed = coerce_column_types(raw, {'SUPPORTED': 'logical'})
        assert typed['SUPPORTED'].dtype == 'boolean'
        assert typed['SUPPORTED'].tolist()[:3] == [True, False, True]
        assert typed['SUPPORTED'].isna().tolist() == [False, False, False, True, True]

    def test_character_column_keeps_sentinel(self):
        """Text columns keep "NA" as text; normalize_na removes it later."""
        raw = pd.DataFrame({'TABLE': [7.0, " T2 ", "NA", None]}, dtype=object)
        typed = coerce_column_types(raw, {'TABLE': 'character'})
        assert typed['TABLE'].dtype == 'string'
        assert typed['TABLE'].tolist()[:3] == ["7", "T2", "NA"]
        assert typed['TABLE'].isna().tolist() == [False, False, False, True]

    def test_boolean_is_not_a_number(self):
        raw = pd.DataFrame({'VERSION': [True]}, dtype=object)
        with pytest.raises(TypeCoercionError):
            coerce_column_types(raw, {'VERSION': 'numeric'})

    def test_error_carries_column_and_value(self):
        raw = pd.DataFrame({'MULTI_COLUMN': ["yes"]}, dtype=object)
        with pytest.raises(TypeCoercionError) as exc_info:
            coerce_column_types(raw, {'MULTI_COLUMN': 'logical'})
        assert exc_info.value.column == 'MULTI_COLUMN'
        assert exc_info.value.value == "yes"
        assert isinstance(exc_info.value, ValueError)

    def test_unknown_declared_type(self):
        raw = pd.DataFrame({'X': [1]}, dtype=object)
        with pytest.raises(ValueError, match="Unknown declared type"):
            coerce_column_types(raw, {'X': 'complex'})


class TestNormalizeNA:
    """Test replacement of the "NA" sentinel."""

    def test_sentinel_becomes_missing(self):
        frame = make_config_frame([
            (5.0, "Point", "NA", "MPR", "NA", False, "NA", True, "NA"),
        ])
        normalized = normalize_na(frame)
        assert normalized.loc[0, 'TABLE'] is pd.NA
        assert normalized.loc[0, 'NAME'] is pd.NA
        assert normalized.loc[0, 'DESCRIPTION'] is pd.NA
        assert normalized.loc[0, 'DATATYPE'] is pd.NA

    def test_other_values_and_dtypes_preserved(self):
        frame = make_config_frame([
            (5.0, "Point", "T1", "MPR", "OBS_LVL", False, "x", True, "numeric"),
            (6.0, "Grid", "NA", "CNT", "FBAR", True, "NA value", None, "numeric"),
        ])
        normalized = normalize_na(frame)

        pd.testing.assert_series_equal(normalized.dtypes, frame.dtypes)
        pd.testing.assert_frame_equal(normalized.drop(columns=['TABLE']),
                                      frame.drop(columns=['TABLE']))
        assert normalized['TABLE'].tolist()[0] == "T1"
        assert normalized['TABLE'].isna().tolist() == [False, True]
        # Only exact matches are replaced
        assert normalized.loc[1, 'DESCRIPTION'] == "NA value"

    def test_fixture_row_unchanged(self):
        """A row without the sentinel passes through untouched."""
        frame = make_config_frame([
            (5.0, "Point", "T1", "MPR", "OBS_LVL", False, "x", True, "numeric"),
        ])
        pd.testing.assert_frame_equal(normalize_na(frame), frame)

    def test_input_not_modified(self):
        frame = make_config_frame([
            (5.0, "Point", "NA", "MPR", "OBS_LVL", False, "x", True, "numeric"),
        ])
        normalize_na(frame)
        assert frame.loc[0, 'TABLE'] == "NA"

    def test_no_sentinel_left(self):
        frame = make_config_frame([
            ("NA", "NA", "NA", "NA", "NA", "NA", "NA", "NA", "NA"),
        ])
        normalized = normalize_na(frame)
        assert normalized.isna().all(axis=None)

    def test_custom_sentinel(self):
        frame = make_config_frame([
            (5.0, "Point", "-", "MPR", "OBS_LVL", False, "x", True, "numeric"),
        ])
        assert normalize_na(frame, sentinel="-").loc[0, 'TABLE'] is pd.NA


def test_drop_blank_rows():
    raw = pd.DataFrame({'A': ["x", None, "  "], 'B': [None, None, None]}, dtype=object)
    result = drop_blank_rows(raw)
    assert len(result) == 1
    assert list(result.index) == [0]


def test_drop_blank_rows_empty_frame():
    raw = pd.DataFrame({'A': []}, dtype=object)
    assert len(drop_blank_rows(raw)) == 0
