import sys
import os

# Add project root to sys.path
sys.path.append(os.getcwd())

from metconfig.config import TOOLS
from metconfig.models import get_engine, get_session_factory
from metconfig.services import MetConfigService

def inspect_config():
    engine = get_engine()
    SessionLocal = get_session_factory(engine)
    with SessionLocal() as session:
        service = MetConfigService(session)
        print("Total Rows:", len(service.get_all_entries()))

        present = service.get_tools()
        for tool in [t for t in TOOLS if t in present]:
            linetypes = service.get_linetypes(tool)
            supported = service.get_linetypes(tool, supported_only=True)
            print(f"\n{tool}: {len(linetypes)} line types")
            for lt in linetypes:
                flag = "supported" if lt in supported else "-"
                print(f" - {lt:<8} {flag}")

if __name__ == "__main__":
    inspect_config()
