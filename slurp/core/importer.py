# slurp/core/importer.py
"""
Process-wide load-once primitive for source files.

Each file is imported under a synthetic module name derived from its
canonical path. A path that has already loaded successfully is never
executed again for the lifetime of the process.
"""
import hashlib
import importlib.util
import sys
from pathlib import Path
from types import ModuleType
from typing import Callable, Dict, Optional, Union
import structlog

from slurp.exceptions import LoadError

log = structlog.get_logger(__name__)

SourceLoader = Callable[[Path], bool]

_LOADED_MODULES: Dict[Path, ModuleType] = {}

def module_name_for(path: Path) -> str:
    digest = hashlib.sha1(str(path).encode("utf-8")).hexdigest()[:12]
    stem = "".join(ch if ch.isalnum() else "_" for ch in path.stem)
    return f"_slurp_{stem}_{digest}"

def load_source_file(file_path: Union[str, Path]) -> bool:
    # executes the file once. returns True when it ran now, False when it had
    # already been loaded earlier in this process.
    canonical = Path(file_path).resolve()
    if canonical in _LOADED_MODULES:
        log.debug("source_already_loaded", path=str(canonical))
        return False

    module_name = module_name_for(canonical)
    spec = importlib.util.spec_from_file_location(module_name, str(canonical))
    if spec is None or spec.loader is None:
        raise LoadError(canonical, ImportError(f"no import spec for {canonical}"))

    module = importlib.util.module_from_spec(spec)
    sys.modules[module_name] = module
    try:
        spec.loader.exec_module(module)
    except Exception as e:
        sys.modules.pop(module_name, None)
        log.error("source_load_failed", path=str(canonical), error=str(e))
        raise LoadError(canonical, e) from e

    _LOADED_MODULES[canonical] = module
    log.debug("source_executed", path=str(canonical), module=module_name)
    return True

def get_loaded_module(file_path: Union[str, Path]) -> Optional[ModuleType]:
    return _LOADED_MODULES.get(Path(file_path).resolve())

def is_loaded(file_path: Union[str, Path]) -> bool:
    return Path(file_path).resolve() in _LOADED_MODULES
