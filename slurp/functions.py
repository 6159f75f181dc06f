# slurp/functions.py
"""
Convenience entry points wrapping the Slurp class.
"""
from pathlib import Path
from typing import Any, Callable, Iterable, Optional, Union
import structlog

from slurp.core.loader import DEFAULT_EXCLUDED, Slurp
from slurp.core.targets import Predicate, Targets
from slurp.hooks import DEFAULT_PRIORITY, HookRegistry, default_registry

log = structlog.get_logger(__name__)

def slurp(
    base_dir: Union[str, Path],
    targets: Targets = (),
    recursive: bool = False,
    global_predicate: Optional[Predicate] = None,
    excluded: Iterable[str] = DEFAULT_EXCLUDED,
    error_callback: Optional[Callable[[Exception], Any]] = None,
) -> Optional[Slurp]:
    """Build a Slurp for `base_dir` and include `targets` in one call.

    Failures never propagate, including ones raised by a predicate: the error
    is logged, passed to `error_callback` when one is given, and None is
    returned.
    """
    try:
        loader = Slurp(base_dir, global_predicate, excluded)
        loader.include(targets, recursive)
        return loader
    except Exception as e:
        log.error("slurp_failed", base_dir=str(base_dir), error_type=type(e).__name__, message=str(e))
        if error_callback is not None and callable(error_callback):
            error_callback(e)
        return None

def slurp_hooked(
    hook: str,
    base_dir: Union[str, Path],
    targets: Targets = (),
    recursive: bool = False,
    global_predicate: Optional[Predicate] = None,
    excluded: Iterable[str] = DEFAULT_EXCLUDED,
    priority: int = DEFAULT_PRIORITY,
    accepted_args: int = 1,
    registry: Optional[HookRegistry] = None,
) -> None:
    # defers a slurp() call until `hook` fires on the registry.
    registry = registry if registry is not None else default_registry

    def _run_slurp(*_args: Any) -> None:
        slurp(base_dir, targets, recursive, global_predicate, excluded)

    registry.add_action(hook, _run_slurp, priority, accepted_args)
