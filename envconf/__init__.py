"""Load typed settings from a .env file or the process environment."""

__version__ = "0.1.0"

from envconf.config import EnvSettings, load, load_or_exit
from envconf.errors import ConfigError

__all__ = ["ConfigError", "EnvSettings", "load", "load_or_exit", "__version__"]
