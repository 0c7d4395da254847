"""
Excel loaders for the MET output table configuration.

This package reads the MET tables workbook, types and cleans its single
table, and hands the result to metconfig.models for storage.

Architecture:
    Excel → excel_loader → data_transformer → SQLite store

Modules:
    excel_loader: Main orchestration logic
    data_transformer: Type coercion and "NA" normalization
"""

from .excel_loader import create_met_config_file, read_met_tables, working_directory
from .data_transformer import coerce_column_types, normalize_na

__all__ = [
    'create_met_config_file',
    'read_met_tables',
    'working_directory',
    'coerce_column_types',
    'normalize_na',
]
