from .met_config_service import MetConfigService

__all__ = ['MetConfigService']
