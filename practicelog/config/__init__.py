from .config import load_config, validate_config, analytics_config

__all__ = ["load_config", "validate_config", "analytics_config"]
