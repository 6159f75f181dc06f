# slurp/core/loader.py
from pathlib import Path
from typing import Iterable, List, Optional, Union
import structlog

from slurp.core.discovery.containment import ContainmentGuard
from slurp.core.discovery.exclusions import ExclusionSet
from slurp.core.discovery.path_resolution import (
    canonicalize_dir,
    resolve_target_dir,
    validate_base_dir,
)
from slurp.core.discovery.walker import DEFAULT_EXTENSION, normalize_extension, walk_source_files
from slurp.core.importer import SourceLoader, load_source_file
from slurp.core.ledger import LoadLedger
from slurp.core.targets import Predicate, TargetSpec, Targets, normalize_targets, validate_predicate
from slurp.exceptions import InvalidConfigurationError, UnauthorizedDirectoryError

log = structlog.get_logger(__name__)

DEFAULT_EXCLUDED = ("__init__.py",)


class Slurp:
    """Loads source files found below a base directory.

    Usage:
        loader = Slurp("/srv/app")
        loader.include("handlers")                      # direct children only
        loader.include("handlers", recursive=True)      # whole subtree
        loader.include({"hooks": lambda p: "test" not in p})
        loader.dump_files("debug.txt")

    Each file is executed at most once per process (see slurp.core.importer);
    every admitted file is appended to the ledger returned by get_files().
    """

    def __init__(
        self,
        base_dir: Union[str, Path],
        global_predicate: Optional[Predicate] = None,
        excluded: Iterable[str] = DEFAULT_EXCLUDED,
        *,
        extension: str = DEFAULT_EXTENSION,
        follow_symlinks: bool = False,
        loader: Optional[SourceLoader] = None,
    ):
        self._base_dir: Path = validate_base_dir(base_dir)
        self._global_predicate: Optional[Predicate] = validate_predicate(global_predicate)
        self._excluded = ExclusionSet(excluded)
        self._allowed_roots = ContainmentGuard("allowed root", self._base_dir, require_existing=True)
        self._whitelist = ContainmentGuard("whitelist", self._base_dir)
        self._ledger = LoadLedger()
        self.extension = normalize_extension(extension)
        self.follow_symlinks = follow_symlinks
        self._loader: SourceLoader = loader or load_source_file
        self.log = structlog.get_logger(f"{__name__}.{self.__class__.__name__}").bind(base_dir=str(self._base_dir))

    @classmethod
    def from_file(cls, file_path: Union[str, Path], *args, **kwargs) -> "Slurp":
        # uses the directory containing `file_path` as the base directory.
        if not file_path:
            raise InvalidConfigurationError("Invalid file path provided: empty path")
        parent = Path(file_path).expanduser().resolve().parent
        if not parent.is_dir():
            raise InvalidConfigurationError(f"Directory of {file_path} does not exist")
        return cls(parent, *args, **kwargs)

    # --- configuration -------------------------------------------------

    @property
    def base_dir(self) -> Path:
        return self._base_dir

    def set_base_dir(self, base_dir: Union[str, Path]) -> None:
        self._base_dir = validate_base_dir(base_dir)
        self._allowed_roots.base_dir = self._base_dir
        self._whitelist.base_dir = self._base_dir
        self.log = self.log.bind(base_dir=str(self._base_dir))
        self.log.info("base_dir_changed")

    def set_callback(self, callback: Optional[Predicate]) -> None:
        self._global_predicate = validate_predicate(callback)

    def set_excluded(self, files: Iterable[str]) -> None:
        self._excluded.replace(files)

    def add_exclusion(self, exclusions: Union[str, Iterable[str]]) -> None:
        self._excluded.add(exclusions)

    def get_excluded(self) -> List[str]:
        return self._excluded.all()

    def add_allowed_root(self, path: Union[str, Path]) -> None:
        root = self._allowed_roots.add(path)
        self.log.info("allowed_root_added", root=str(root))

    def add_to_whitelist(self, path: Union[str, Path]) -> None:
        root = self._whitelist.add(path)
        self.log.info("whitelist_entry_added", root=str(root))

    @property
    def allowed_roots(self) -> List[Path]:
        return self._allowed_roots.roots

    @property
    def whitelist(self) -> List[Path]:
        return self._whitelist.roots

    # --- inclusion -----------------------------------------------------

    def include(self, targets: Targets = None, recursive: bool = False) -> None:
        """Load source files from one or more directories below the base directory.

        `targets` may be None (the base directory itself), a directory name, an
        iterable of names, or a mapping of name to predicate. Names use the
        global predicate; a mapping value applies to that target only, and a
        value of None falls back to the global predicate.

        Raises InvalidConfigurationError before touching any file if a target
        or predicate is malformed, and UnauthorizedDirectoryError when a
        directory falls outside the allowed roots. Targets processed before
        the failing one stay loaded.
        """
        specs = normalize_targets(targets, self._global_predicate)
        self.log.info("include_started", targets=[s.name for s in specs], recursive=recursive)
        for spec in specs:
            self._process_directory(spec, recursive)

    def _check_containment(self, directory: Path, canonical: Path) -> bool:
        if self._allowed_roots and not self._allowed_roots.is_permitted(canonical):
            self.log.warning("directory_not_allowed", directory=str(canonical))
            raise UnauthorizedDirectoryError(canonical)
        if self._whitelist and not self._whitelist.is_permitted(canonical):
            self.log.info("directory_not_whitelisted_skipped", directory=str(directory))
            return False
        return True

    def _process_directory(self, spec: TargetSpec, recursive: bool) -> None:
        directory = resolve_target_dir(self._base_dir, spec.name)

        canonical = canonicalize_dir(directory)
        if canonical is None:
            self.log.debug("target_directory_missing_skipped", directory=str(directory))
            return
        if not self._check_containment(directory, canonical):
            return

        loaded_count = 0
        for source in walk_source_files(directory, recursive, self.extension, self.follow_symlinks):
            file_path = str(source.path)

            if source.name in self._excluded:
                self.log.debug("file_excluded", file=file_path)
                continue

            if spec.predicate is not None and not spec.predicate(file_path):
                self.log.debug("file_rejected_by_predicate", file=file_path)
                continue

            self._loader(source.path)
            self._ledger.record(file_path)
            loaded_count += 1
            self.log.debug("file_loaded", file=file_path)

        self.log.info("directory_processed", directory=str(directory), loaded=loaded_count)

    # --- ledger --------------------------------------------------------

    def get_files(self) -> List[str]:
        return self._ledger.all()

    def dump_files(self, dump_file_name: str = "") -> Path:
        return self._ledger.dump(self._base_dir, dump_file_name)
