# slurp/core/targets.py
"""
Normalization of the `targets` argument accepted by `Slurp.include`.

Callers may pass nothing (the base directory), a single directory name, a
sequence of names, or a mapping of name to predicate. All of these collapse
into an ordered list of TargetSpec before any directory is touched.
"""
from dataclasses import dataclass
from typing import Any, Callable, List, Mapping, Optional, Union, Iterable

from slurp.exceptions import InvalidConfigurationError

Predicate = Callable[[str], bool]
Targets = Union[None, str, Iterable[str], Mapping[str, Optional[Predicate]]]

@dataclass(frozen=True)
class TargetSpec:
    # one directory to scan and the predicate that gates its files.
    name: str
    predicate: Optional[Predicate]

def validate_predicate(predicate: Any) -> Optional[Predicate]:
    if predicate is not None and not callable(predicate):
        raise InvalidConfigurationError(f"Provided callback is not callable: {predicate!r}")
    return predicate

def _validate_name(name: Any) -> str:
    if not isinstance(name, str):
        raise InvalidConfigurationError(f"Target directory names must be strings, got {name!r}")
    return name

def normalize_targets(targets: Targets, global_predicate: Optional[Predicate]) -> List[TargetSpec]:
    # plain names use the global predicate. in a mapping the value is the
    # predicate for that target alone; None there falls back to the global one.
    validate_predicate(global_predicate)

    if targets is None:
        return [TargetSpec(name="", predicate=global_predicate)]
    if isinstance(targets, str):
        return [TargetSpec(name=targets, predicate=global_predicate)]
    if isinstance(targets, Mapping):
        return [
            TargetSpec(
                name=_validate_name(name),
                predicate=global_predicate if predicate is None else validate_predicate(predicate),
            )
            for name, predicate in targets.items()
        ]
    if isinstance(targets, bytes) or not hasattr(targets, "__iter__"):
        raise InvalidConfigurationError(
            f"Targets must be a string, an iterable of strings or a mapping, got {type(targets).__name__}"
        )
    return [TargetSpec(name=_validate_name(name), predicate=global_predicate) for name in targets]
