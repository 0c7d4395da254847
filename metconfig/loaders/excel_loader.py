"""
Main Excel loading orchestration for the MET output table configuration.

This module coordinates the whole pipeline:
    1. Switch to the project base directory
    2. Read the MET tables sheet into a typed DataFrame
    3. Replace "NA" text with real missing values
    4. Persist the table to the package-internal store

Functions:
    read_met_tables: Read and type the workbook sheet
    create_met_config_file: Main entry point, runs the whole pipeline
    working_directory: Temporarily change the process working directory
"""

import os
import warnings
from contextlib import contextmanager

import pandas as pd

from metconfig.config import (
    BASE_PATH,
    WORKBOOK_SOURCE,
    WORKBOOK_SHEET,
    DATA_HEADER,
    COLUMN_TYPES,
    SYSDATA_PATH,
)
from metconfig.models.database import write_met_config
from .data_transformer import drop_blank_rows, coerce_column_types, normalize_na

# Suppress openpyxl warnings about styles/formatting (we only read data values)
warnings.filterwarnings('ignore', category=UserWarning, module='openpyxl')


class SchemaMismatchError(ValueError):
    """The header row does not hold the expected columns."""

    def __init__(self, expected, found):
        self.expected = list(expected)
        self.found = list(found)
        missing = [c for c in self.expected if c not in self.found]
        unexpected = [c for c in self.found if c not in self.expected]
        details = []
        if missing:
            details.append(f"missing {missing}")
        if unexpected:
            details.append(f"unexpected {unexpected}")
        if not details:
            details.append(f"order {self.found}")
        super().__init__(f"Header row does not match the expected columns: {', '.join(details)}")


@contextmanager
def working_directory(path):
    """Change into path for the duration of the block, then change back."""
    previous = os.getcwd()
    os.chdir(path)
    try:
        yield
    finally:
        os.chdir(previous)


def _header_columns(frame):
    # Columns pandas invents for cells right of the header ("Unnamed: 9")
    # are dropped when they hold no data.
    keep = []
    for column in frame.columns:
        name = str(column).strip()
        if name.startswith('Unnamed:') and frame[column].isna().all():
            continue
        keep.append(column)
    frame = frame[keep].copy()
    frame.columns = [str(column).strip() for column in keep]
    return frame


def read_met_tables(workbook_path=WORKBOOK_SOURCE, sheet_name=WORKBOOK_SHEET,
                    data_header=DATA_HEADER, column_types=None):
    """
    Read the MET tables sheet into a DataFrame with typed columns.

    The rows above the header contain explanatory descriptions and are
    skipped. Every cell is read as a raw object first so that the declared
    column types, not pandas' inference, decide the final dtypes.

    Args:
        workbook_path: Path to the .xlsx workbook
        sheet_name: Sheet holding the table
        data_header: 1-based row number of the header row
        column_types: Mapping of column name -> declared type
                      (defaults to config.COLUMN_TYPES)

    Returns:
        DataFrame with one row per table entry. Columns follow column_types;
        numeric -> float64, logical -> boolean, character -> string.

    Raises:
        FileNotFoundError: If the workbook does not exist
        ValueError: If the sheet does not exist (raised by pandas)
        SchemaMismatchError: If the header row does not match column_types
        TypeCoercionError: If a cell cannot be converted to its column type

    Examples:
        >>> config = read_met_tables('data-raw/met_tables.xlsx')
        >>> str(config.dtypes['SUPPORTED'])
        'boolean'
    """
    if column_types is None:
        column_types = COLUMN_TYPES

    print(f"Loading Excel file: {workbook_path}...")
    raw = pd.read_excel(
        workbook_path,
        sheet_name=sheet_name,
        header=data_header - 1,
        dtype=object,
        keep_default_na=False,
        na_values=[''],
        engine='openpyxl',
    )
    print(f"Processing sheet: {sheet_name}")

    raw = _header_columns(raw)
    expected = list(column_types.keys())
    if list(raw.columns) != expected:
        raise SchemaMismatchError(expected, raw.columns)

    raw = drop_blank_rows(raw)
    typed = coerce_column_types(raw, column_types)
    print(f"  Loaded {len(typed)} rows from '{sheet_name}'")
    return typed


def create_met_config_file(base_path=BASE_PATH, workbook_source=WORKBOOK_SOURCE,
                           sheet_name=WORKBOOK_SHEET, data_header=DATA_HEADER,
                           output_path=SYSDATA_PATH):
    """
    Build the configuration store from the MET tables workbook.

    Reads the workbook relative to base_path, normalizes the "NA" sentinel
    and overwrites the store at output_path. The working directory is
    restored afterwards, also when a step fails. Errors are not caught.

    Args:
        base_path: Directory the workbook path is relative to
        workbook_source: Workbook path relative to base_path
        sheet_name: Sheet holding the table
        data_header: 1-based row number of the header row
        output_path: Store location (relative paths resolve against base_path)

    Returns:
        The normalized configuration DataFrame that was persisted
    """
    with working_directory(base_path):
        config = read_met_tables(workbook_source, sheet_name, data_header)
        config = normalize_na(config)
        write_met_config(config, output_path)
    return config


if __name__ == "__main__":
    config = create_met_config_file()
    print(f"\nLoaded {len(config)} configuration rows")
    print(config.head())
