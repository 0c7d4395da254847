"""
Data transformation utilities for the MET tables workbook.

This module turns the raw object-typed frame read from the workbook into the
typed configuration table:
    - Dropping fully blank rows left behind by sheet formatting
    - Coercing each column to its declared type
    - Replacing the "NA" text sentinel with a real missing value

Functions:
    drop_blank_rows: Remove rows where every cell is empty
    coerce_column_types: Apply the column-to-type map
    normalize_na: Replace sentinel cells with the canonical missing value
"""

import pandas as pd

from metconfig.config import COLUMN_TYPES, PANDAS_DTYPES, NA_SENTINEL


class TypeCoercionError(ValueError):
    """A cell value cannot be converted to its column's declared type."""

    def __init__(self, column, value, declared_type):
        self.column = column
        self.value = value
        self.declared_type = declared_type
        super().__init__(
            f"Column '{column}': cannot convert {value!r} to {declared_type}"
        )


_TRUE_STRINGS = {'TRUE', 'T'}
_FALSE_STRINGS = {'FALSE', 'F'}


def _is_missing(value):
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() == ''
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False


def drop_blank_rows(frame):
    """
    Remove rows where every cell is empty.

    Sheets often carry formatted but empty rows below the data; openpyxl
    reports them as part of the used range.

    Args:
        frame: Raw DataFrame read from the workbook

    Returns:
        DataFrame without blank rows, index reset to 0..n-1
    """
    if len(frame) == 0:
        return frame.reset_index(drop=True)
    blank = frame.apply(lambda row: all(_is_missing(v) for v in row), axis=1)
    return frame.loc[~blank].reset_index(drop=True)


def _to_logical(value, column):
    """
    Convert one cell to a nullable boolean.

    Examples:
        >>> _to_logical('TRUE', 'SUPPORTED')
        True
        >>> _to_logical(False, 'SUPPORTED')
        False
        >>> _to_logical('NA', 'SUPPORTED') is pd.NA
        True
    """
    if _is_missing(value):
        return pd.NA
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        text = value.strip().upper()
        if text == NA_SENTINEL:
            return pd.NA
        if text in _TRUE_STRINGS:
            return True
        if text in _FALSE_STRINGS:
            return False
    raise TypeCoercionError(column, value, 'logical')


def _to_numeric(value, column):
    if _is_missing(value):
        return float('nan')
    if isinstance(value, bool):
        raise TypeCoercionError(column, value, 'numeric')
    if isinstance(value, str):
        text = value.strip()
        if text == NA_SENTINEL:
            return float('nan')
        value = text
    try:
        return float(value)
    except (TypeError, ValueError):
        raise TypeCoercionError(column, value, 'numeric') from None


def _to_character(value):
    """
    Convert one cell to text.

    Whole-number floats lose their trailing '.0' so that a table number
    typed as 6 in Excel reads as '6', not '6.0'.

    Examples:
        >>> _to_character(6.0)
        '6'
        >>> _to_character('  Ensemble ')
        'Ensemble'
    """
    if _is_missing(value):
        return pd.NA
    if isinstance(value, bool):
        return 'TRUE' if value else 'FALSE'
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value).strip()


def coerce_column_types(frame, column_types=None):
    """
    Coerce every column of the frame to its declared type.

    numeric columns become float64, logical columns the nullable 'boolean'
    dtype and character columns the 'string' dtype. In numeric and logical
    columns the NA sentinel reads as missing; character columns keep it as
    text for normalize_na to deal with.

    Args:
        frame: DataFrame with object columns named as in column_types
        column_types: Mapping of column name -> declared type
                      (defaults to config.COLUMN_TYPES)

    Returns:
        New DataFrame with typed columns

    Raises:
        TypeCoercionError: If a cell cannot be converted
    """
    if column_types is None:
        column_types = COLUMN_TYPES

    typed = {}
    for column, declared_type in column_types.items():
        values = frame[column].tolist()
        if declared_type == 'numeric':
            converted = [_to_numeric(v, column) for v in values]
        elif declared_type == 'logical':
            converted = [_to_logical(v, column) for v in values]
        elif declared_type == 'character':
            converted = [_to_character(v) for v in values]
        else:
            raise ValueError(f"Unknown declared type for '{column}': {declared_type}")
        typed[column] = pd.Series(converted, index=frame.index, dtype=PANDAS_DTYPES[declared_type])

    return pd.DataFrame(typed, index=frame.index)


def normalize_na(frame, sentinel=NA_SENTINEL):
    """
    Replace every cell equal to the sentinel text with a missing value.

    Only text columns can hold the sentinel; other columns and all dtypes
    are left as they are.

    Args:
        frame: Typed configuration DataFrame
        sentinel: Text marking a missing value (default "NA")

    Returns:
        New DataFrame; the input is not modified

    Examples:
        >>> df = pd.DataFrame({'NAME': pd.array(['OBS', 'NA'], dtype='string')})
        >>> normalize_na(df)['NAME'].isna().tolist()
        [False, True]
    """
    normalized = frame.copy()
    for column in normalized.columns:
        series = normalized[column]
        if not (pd.api.types.is_string_dtype(series.dtype) or series.dtype == object):
            continue
        is_sentinel = series.eq(sentinel).fillna(False).astype(bool)
        if is_sentinel.any():
            normalized[column] = series.mask(is_sentinel)
    return normalized
