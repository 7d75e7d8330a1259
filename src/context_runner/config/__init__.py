from .loader import DEFAULT_CONFIG_PATH, load_config
from .models import RunnerConfig

__all__ = ["DEFAULT_CONFIG_PATH", "RunnerConfig", "load_config"]
