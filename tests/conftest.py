import os
import sys

import openpyxl
import pandas as pd
import pytest

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(__file__)))

from metconfig.config import COLUMN_TYPES
from metconfig.loaders.data_transformer import coerce_column_types

HEADER = list(COLUMN_TYPES.keys())

# One row per line, mirroring the real sheet: explanatory text above the table
EXPLANATORY_ROWS = [
    "MET output tables",
    "Source: MET User's Guide, output file formats",
    "VERSION: MET version that introduced the column",
    "TOOL: Point, Grid or Ensemble",
    "MULTI_COLUMN: TRUE when the data spans several columns",
    "SUPPORTED: TRUE when the line type can be read",
]


def write_met_workbook(path, rows, sheet_name="MET_Tables", header_row=16, header=None):
    """
    Write a workbook laid out like met_tables.xlsx.

    Rows above header_row hold explanatory text in column A, the header sits
    on header_row and rows follow directly below it.
    """
    wb = openpyxl.Workbook()
    ws = wb.active
    ws.title = sheet_name

    for row_idx, text in enumerate(EXPLANATORY_ROWS[:header_row - 1], 1):
        ws.cell(row=row_idx, column=1, value=text)

    for col_idx, name in enumerate(header or HEADER, 1):
        ws.cell(row=header_row, column=col_idx, value=name)

    for row_idx, row in enumerate(rows, header_row + 1):
        for col_idx, value in enumerate(row, 1):
            if value is not None:
                ws.cell(row=row_idx, column=col_idx, value=value)

    wb.save(path)
    return path


def make_config_frame(rows):
    """Typed configuration DataFrame from plain row tuples (None = missing)."""
    raw = pd.DataFrame(rows, columns=HEADER, dtype=object)
    return coerce_column_types(raw)


@pytest.fixture
def single_row():
    return (5.0, "Point", "T1", "MPR", "OBS_LVL", False, "x", True, "numeric")


@pytest.fixture
def project_dir(tmp_path, single_row):
    """A base directory holding data-raw/met_tables.xlsx with one row."""
    (tmp_path / "data-raw").mkdir()
    write_met_workbook(tmp_path / "data-raw" / "met_tables.xlsx", [single_row])
    return tmp_path
