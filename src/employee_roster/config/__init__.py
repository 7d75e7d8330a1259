from .loader import DEFAULT_CONFIG_PATH, load_config
from .models import EmployeeDecl, RosterConfig

__all__ = ["DEFAULT_CONFIG_PATH", "EmployeeDecl", "RosterConfig", "load_config"]
