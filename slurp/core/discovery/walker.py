# slurp/core/discovery/walker.py
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator
import structlog

log = structlog.get_logger(__name__)

DEFAULT_EXTENSION = ".py"

@dataclass(frozen=True)
class SourceFile:
    # a candidate file found by the walker.
    path: Path
    name: str

def normalize_extension(extension: str) -> str:
    ext = extension.strip()
    if ext and not ext.startswith("."):
        ext = "." + ext
    return ext

def _is_source_file(entry: os.DirEntry, extension: str) -> bool:
    try:
        return entry.is_file() and Path(entry.name).suffix == extension
    except OSError:
        return False

def _walk_flat(directory: Path, extension: str) -> Iterator[SourceFile]:
    with os.scandir(directory) as it:
        entries = sorted(it, key=lambda e: e.name)
    for entry in entries:
        if _is_source_file(entry, extension):
            yield SourceFile(path=Path(entry.path), name=entry.name)

def _raise_walk_error(err: OSError) -> None:
    # an unreadable directory is fatal in both walk modes.
    log.warning("walk_directory_unreadable", directory=err.filename, error=str(err))
    raise err

def _walk_recursive(directory: Path, extension: str, follow_symlinks: bool) -> Iterator[SourceFile]:
    for root, dirs, files in os.walk(
        str(directory), topdown=True, onerror=_raise_walk_error, followlinks=follow_symlinks
    ):
        dirs.sort()
        for file_name in sorted(files):
            file_path = Path(root, file_name)
            if file_path.suffix == extension and file_path.is_file():
                yield SourceFile(path=file_path, name=file_name)

def walk_source_files(
    directory: Path,
    recursive: bool = False,
    extension: str = DEFAULT_EXTENSION,
    follow_symlinks: bool = False,
) -> Iterator[SourceFile]:
    # lazily yields regular files with the given extension below `directory`.
    # entries are sorted by name per directory; in recursive mode a directory's
    # own files come before its subdirectories' contents.
    # a missing directory yields nothing.
    if not directory.is_dir():
        log.debug("walk_directory_missing", directory=str(directory))
        return
    extension = normalize_extension(extension)
    log.debug("walk_started", directory=str(directory), recursive=recursive, extension=extension)
    if recursive:
        yield from _walk_recursive(directory, extension, follow_symlinks)
    else:
        yield from _walk_flat(directory, extension)
