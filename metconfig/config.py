"""
Configuration constants for MET output table loading.

This module centralizes all configuration parameters used while reading the
MET tables workbook, making it easy to point the loader at another copy of
the spreadsheet without touching core logic.
"""

from pathlib import Path

# Project root; the workbook path below is relative to it
BASE_PATH = Path(__file__).resolve().parents[1]

# Workbook, sheet and header location
WORKBOOK_SOURCE = "data-raw/met_tables.xlsx"
WORKBOOK_SHEET = "MET_Tables"
DATA_HEADER = 16  # 1-based; rows above it hold explanatory text

# Column name -> declared type, in sheet order
COLUMN_TYPES = {
    'VERSION': 'numeric',
    'TOOL': 'character',
    'TABLE': 'character',
    'LINETYPE': 'character',
    'NAME': 'character',
    'MULTI_COLUMN': 'logical',
    'DESCRIPTION': 'character',
    'SUPPORTED': 'logical',
    'DATATYPE': 'character',
}

# Declared type -> pandas dtype
PANDAS_DTYPES = {
    'numeric': 'float64',
    'character': 'string',
    'logical': 'boolean',
}

# Text used in the workbook for a missing value
NA_SENTINEL = "NA"

# Verification tools: Point (point_stat), Grid (grid_stat), Ensemble (ensemble_stat)
TOOLS = ['Point', 'Grid', 'Ensemble']

# Pseudo line type holding the header columns shared by every line type
COMMON_LINETYPE = "COMMON"

# Package-internal store read by metconfig.models and metconfig.services
SYSDATA_PATH = Path(__file__).resolve().parent / "data" / "sysdata.db"
