# slurp/config/__init__.py
"""
Configuration for the slurp command line: the SlurpConfig dataclass and the
TOML loading/merging that feeds it.
"""
from .settings import SlurpConfig
from .loader import build_config, load_and_merge_configs

__all__ = ["SlurpConfig", "build_config", "load_and_merge_configs"]
