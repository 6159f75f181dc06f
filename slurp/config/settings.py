from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional
import structlog

from slurp.core.discovery.walker import DEFAULT_EXTENSION
from slurp.core.loader import DEFAULT_EXCLUDED

log = structlog.get_logger(__name__)

@dataclass
class SlurpConfig:
    # holds all settings for a single command-line run.
    base_dir: Path = field(default_factory=lambda: Path.cwd())
    targets: List[str] = field(default_factory=list)
    recursive: bool = False
    excluded: List[str] = field(default_factory=lambda: list(DEFAULT_EXCLUDED))
    add_excluded: List[str] = field(default_factory=list)
    allowed_roots: List[Path] = field(default_factory=list)
    whitelist: List[Path] = field(default_factory=list)
    extension: str = DEFAULT_EXTENSION
    follow_symlinks: bool = False
    dump_file: Optional[str] = None

    def __post_init__(self):
        # performs initial normalization after dataclass instantiation.
        self.base_dir = Path(self.base_dir)
        self.allowed_roots = [Path(p) for p in self.allowed_roots]
        self.whitelist = [Path(p) for p in self.whitelist]
