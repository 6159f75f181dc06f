"""slurp: load source files from directories, conditionally and exactly once."""

__version__ = "1.0.0"

from slurp.core.loader import Slurp
from slurp.functions import slurp, slurp_hooked
from slurp.exceptions import (
    SlurpError,
    InvalidConfigurationError,
    UnauthorizedDirectoryError,
    DumpError,
    LoadError,
    ConfigError,
)

__all__ = [
    "Slurp",
    "slurp",
    "slurp_hooked",
    "SlurpError",
    "InvalidConfigurationError",
    "UnauthorizedDirectoryError",
    "DumpError",
    "LoadError",
    "ConfigError",
]
