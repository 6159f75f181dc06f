# slurp/core/ledger.py
import secrets
from pathlib import Path
from typing import Iterator, List
import structlog

from slurp.core.discovery.path_resolution import sanitize_path
from slurp.core.output import ensure_writable_dir, write_to_file
from slurp.exceptions import DumpError

log = structlog.get_logger(__name__)

DUMP_EXTENSION = ".txt"

def random_dump_name() -> str:
    return f"loaded_files_{secrets.token_hex(8)}{DUMP_EXTENSION}"

class LoadLedger:
    # ordered, append-only record of every file that was loaded.
    def __init__(self):
        self._paths: List[str] = []

    def record(self, path: str) -> None:
        self._paths.append(str(path))

    def all(self) -> List[str]:
        return list(self._paths)

    def render(self) -> str:
        # one absolute path per line, in load order.
        if not self._paths:
            return ""
        return "\n".join(self._paths) + "\n"

    def dump(self, base_dir: Path, dump_file_name: str = "") -> Path:
        """Write the ledger as text to a file under `base_dir`.

        An empty name picks a random `loaded_files_<hex>.txt`. Any other name
        must end in `.txt`, and the directory it lands in must be writable.
        """
        if not dump_file_name:
            dump_file_name = random_dump_name()
        elif not dump_file_name.endswith(DUMP_EXTENSION):
            raise DumpError(f"The dump file name must end with {DUMP_EXTENSION}: {dump_file_name}")

        relative = sanitize_path(dump_file_name).lstrip("/")
        if not relative.endswith(DUMP_EXTENSION) or Path(relative).name == DUMP_EXTENSION:
            raise DumpError(f"Invalid dump file name: {dump_file_name}")

        dump_file_path = base_dir / relative
        ensure_writable_dir(dump_file_path.parent)
        write_to_file(dump_file_path, self.render())
        log.info("loaded_files_dumped", path=str(dump_file_path), count=len(self._paths))
        return dump_file_path

    def __len__(self) -> int:
        return len(self._paths)

    def __iter__(self) -> Iterator[str]:
        return iter(self.all())
