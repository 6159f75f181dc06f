# slurp/core/discovery/path_resolution.py
from pathlib import Path
from typing import Optional, Union
import structlog

from slurp.exceptions import InvalidConfigurationError

log = structlog.get_logger(__name__)

def sanitize_path(path: str) -> str:
    # textual cleanup of a caller-supplied path: unify separators and drop
    # "." / ".." segments. never touches the filesystem and never raises.
    text = str(path).replace("\\", "/").replace("\0", "")
    is_absolute = text.startswith("/")
    segments = [seg for seg in text.split("/") if seg not in ("", ".", "..")]
    cleaned = "/".join(segments)
    if is_absolute:
        return "/" + cleaned
    return cleaned

def validate_base_dir(base_dir: Union[str, Path, None]) -> Path:
    # returns the absolute, normalized form of a base directory or raises.
    if base_dir is None or str(base_dir) == "":
        raise InvalidConfigurationError("Invalid base directory provided: empty path")
    candidate = Path(base_dir).expanduser()
    if not candidate.is_dir():
        raise InvalidConfigurationError(f"Invalid base directory provided: {base_dir}")
    return candidate.resolve()

def resolve_target_dir(base_dir: Path, target: Optional[str]) -> Path:
    # joins a sanitized target below the base directory. the result is
    # absolute but not symlink-resolved.
    if not target:
        return base_dir
    relative = sanitize_path(target).lstrip("/")
    resolved = base_dir / relative if relative else base_dir
    log.debug("target_dir_resolved", target=target, directory=str(resolved))
    return resolved

def canonicalize_dir(directory: Path) -> Optional[Path]:
    # resolves symlinks for an existing directory; None when it is absent.
    try:
        canonical = directory.resolve(strict=True)
    except (FileNotFoundError, NotADirectoryError):
        return None
    except OSError as e:
        log.warning("error_resolving_directory", directory=str(directory), error=str(e))
        return None
    if not canonical.is_dir():
        return None
    return canonical
