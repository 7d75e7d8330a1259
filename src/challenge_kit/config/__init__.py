from .loader import ConfigError, load_yaml_mapping, validate_model
from .models import LoggingConfig

# Config exports are intentionally small.
__all__ = ["ConfigError", "LoggingConfig", "load_yaml_mapping", "validate_model"]
