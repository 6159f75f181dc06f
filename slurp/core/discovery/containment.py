# slurp/core/discovery/containment.py
"""
Directory containment checks.

A ContainmentGuard holds a set of canonical root directories. An empty guard
permits every directory; a populated one permits a directory only when it is
one of the roots or lives below one of them.
"""
from pathlib import Path
from typing import Iterator, List, Optional, Union
import structlog

from slurp.exceptions import InvalidConfigurationError

log = structlog.get_logger(__name__)

class ContainmentGuard:
    def __init__(self, name: str, base_dir: Optional[Path] = None, require_existing: bool = False):
        self.name = name
        self.base_dir = base_dir
        self.require_existing = require_existing
        self._roots: List[Path] = []

    def _canonical(self, path: Union[str, Path]) -> Path:
        candidate = Path(path).expanduser()
        if not candidate.is_absolute() and self.base_dir is not None:
            candidate = self.base_dir / candidate
        if self.require_existing:
            if not candidate.is_dir():
                raise InvalidConfigurationError(f"{self.name} entry is not a directory: {path}")
            return candidate.resolve(strict=True)
        return candidate.resolve()

    def add(self, path: Union[str, Path]) -> Path:
        if not isinstance(path, (str, Path)) or str(path) == "":
            raise InvalidConfigurationError(f"{self.name} entry must be a non-empty path, got {path!r}")
        root = self._canonical(path)
        if root not in self._roots:
            self._roots.append(root)
            log.debug("containment_root_added", guard=self.name, root=str(root))
        return root

    @property
    def roots(self) -> List[Path]:
        return list(self._roots)

    def is_permitted(self, resolved_dir: Path) -> bool:
        # resolved_dir must already be canonical (see canonicalize_dir).
        if not self._roots:
            return True
        return any(resolved_dir == root or root in resolved_dir.parents for root in self._roots)

    def __bool__(self) -> bool:
        return bool(self._roots)

    def __len__(self) -> int:
        return len(self._roots)

    def __iter__(self) -> Iterator[Path]:
        return iter(list(self._roots))
