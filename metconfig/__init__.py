"""
MET output table configuration.

Reads the MET tables workbook, stores it as package data and makes it
available to callers.

Usage:
    from metconfig import load_met_config
    config = load_met_config()
    mpr_names = config.loc[config['LINETYPE'] == 'MPR', 'NAME'].tolist()
"""

from .loaders import create_met_config_file, read_met_tables
from .models import load_met_config
from .services import MetConfigService

__all__ = ['create_met_config_file', 'read_met_tables', 'load_met_config', 'MetConfigService']
