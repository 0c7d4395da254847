from .database import (
    Base,
    MetConfigEntry,
    get_engine,
    get_session_factory,
    write_met_config,
    load_met_config,
)

__all__ = [
    'Base',
    'MetConfigEntry',
    'get_engine',
    'get_session_factory',
    'write_met_config',
    'load_met_config',
]
