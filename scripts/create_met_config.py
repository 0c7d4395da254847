import sys
import os

# Add project root to sys.path
sys.path.append(os.getcwd())

from metconfig.config import SYSDATA_PATH
from metconfig.loaders import create_met_config_file

def create_met_config():
    print("Building MET configuration store...")
    try:
        config = create_met_config_file()
    except Exception as e:
        print(f"Error building configuration: {e}")
        sys.exit(1)

    tools = sorted(config['TOOL'].dropna().unique())
    print(f"Stored {len(config)} rows for tools {tools} in {SYSDATA_PATH}")

if __name__ == "__main__":
    create_met_config()
