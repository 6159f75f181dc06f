# slurp/config/loader.py
"""
Handles loading and merging of configuration from TOML files.
"""
import toml
from dataclasses import fields as dataclass_fields, MISSING
from pathlib import Path
from typing import Any, Dict, Optional
import structlog

from slurp.exceptions import ConfigError

from .settings import SlurpConfig

log = structlog.get_logger(__name__)

PROJECT_CONFIG_FILENAMES = [".slurp.toml", "slurp.toml", "pyproject.toml"]
USER_CONFIG_DIR = Path.home() / ".config" / "slurp"
USER_CONFIG_FILE = USER_CONFIG_DIR / "config.toml"

CONFIG_KEYS = {
    "targets", "recursive", "excluded", "add_excluded", "allowed_roots",
    "whitelist", "extension", "follow_symlinks", "dump_file",
}

def _load_toml_file_data(file_path: Path) -> Dict[str, Any]:
    if not file_path.is_file():
        return {}
    log.debug("loading_toml_config_file", path=str(file_path))
    try:
        data = toml.load(file_path)
    except (toml.TomlDecodeError, OSError) as e:
        raise ConfigError(f"Could not read config file {file_path}: {e}")
    if file_path.name == "pyproject.toml":
        return data.get("tool", {}).get("slurp", {})
    return data

def load_and_merge_configs(
    project_dir: Path,
    include_user_config: bool = True,
    user_config_file: Optional[Path] = None,
) -> Dict[str, Any]:
    # user-level settings first, then the first project file found on top.
    merged: Dict[str, Any] = {}
    if user_config_file is None:
        user_config_file = USER_CONFIG_FILE
    if include_user_config and user_config_file.is_file():
        log.info("loading_user_global_config", path=str(user_config_file))
        merged.update(_load_toml_file_data(user_config_file))

    for filename in PROJECT_CONFIG_FILENAMES:
        candidate = project_dir / filename
        if not candidate.is_file():
            continue
        project_settings = _load_toml_file_data(candidate)
        if not project_settings:
            continue
        log.info("loading_project_local_config", path=str(candidate))
        profiles = merged.get("profiles", {})
        project_profiles = project_settings.pop("profiles", {})
        if isinstance(profiles, dict) and isinstance(project_profiles, dict):
            profiles.update(project_profiles)
            merged["profiles"] = profiles
        merged.update(project_settings)
        break

    if not merged:
        log.debug("no_configuration_files_loaded")
    return merged

def _apply_settings(options: Dict[str, Any], settings: Dict[str, Any], source: str):
    for key, value in settings.items():
        if key == "profiles":
            continue
        if key not in CONFIG_KEYS:
            log.warning("unknown_config_key_ignored", key=key, source=source)
            continue
        options[key] = value

def _check_types(options: Dict[str, Any]):
    for key in ("targets", "excluded", "add_excluded", "allowed_roots", "whitelist"):
        value = options.get(key)
        if isinstance(value, str):
            options[key] = [value]
        elif not isinstance(value, list):
            raise ConfigError(f"Config key '{key}' must be a list of strings")
    for key in ("recursive", "follow_symlinks"):
        if not isinstance(options.get(key), bool):
            raise ConfigError(f"Config key '{key}' must be true or false")

def build_config(
    base_dir: Path,
    file_settings: Dict[str, Any],
    profile_name: Optional[str] = None,
    cli_overrides: Optional[Dict[str, Any]] = None,
) -> SlurpConfig:
    # layers dataclass defaults < config files < profile < command line.
    options: Dict[str, Any] = {}
    for fd in dataclass_fields(SlurpConfig):
        if fd.init:
            options[fd.name] = fd.default_factory() if fd.default_factory is not MISSING else fd.default

    _apply_settings(options, file_settings, "config_file")

    if profile_name:
        profile = file_settings.get("profiles", {}).get(profile_name)
        if profile is None:
            raise ConfigError(f"Profile '{profile_name}' not found in configuration files")
        log.info("applying_profile_settings", profile=profile_name)
        _apply_settings(options, profile, f"profile:{profile_name}")

    for key, value in (cli_overrides or {}).items():
        if value is not None:
            options[key] = value

    _check_types(options)
    options["base_dir"] = base_dir
    return SlurpConfig(**options)
