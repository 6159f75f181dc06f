# slurp/core/discovery/exclusions.py
from typing import Iterable, Iterator, List, Union
import structlog

from slurp.exceptions import InvalidConfigurationError

log = structlog.get_logger(__name__)

def _validated_names(names: Iterable[str]) -> List[str]:
    if isinstance(names, (str, bytes)) or not hasattr(names, "__iter__"):
        raise InvalidConfigurationError("Exclusions must be a string or an iterable of strings.")
    names = list(names)
    for name in names:
        if not isinstance(name, str):
            raise InvalidConfigurationError(f"All excluded files must be strings, got {name!r}.")
    return names

class ExclusionSet:
    """Bare filenames that are never loaded, whatever directory holds them.

    Matching is exact and case-sensitive against the file's base name.
    """

    def __init__(self, names: Iterable[str] = ()):
        self._names: dict = {}
        self.replace(names)

    def add(self, names: Union[str, Iterable[str]]) -> None:
        # a single name or an iterable of names; duplicates are ignored.
        if isinstance(names, str):
            names = [names]
        for name in _validated_names(names):
            self._names.setdefault(name, None)
        log.debug("exclusions_added", excluded=self.all())

    def replace(self, names: Iterable[str]) -> None:
        validated = _validated_names(names)
        self._names = dict.fromkeys(validated)

    def contains(self, name: str) -> bool:
        return name in self._names

    def all(self) -> List[str]:
        return list(self._names)

    def __contains__(self, name: object) -> bool:
        return name in self._names

    def __len__(self) -> int:
        return len(self._names)

    def __iter__(self) -> Iterator[str]:
        return iter(self.all())
