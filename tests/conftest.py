import pytest
from pathlib import Path
from typing import Dict, List


def create_tree(root: Path, files: Dict[str, str]) -> Path:
    """Creates files (and parent directories) below root from a {relative_path: content} map."""
    for rel_path, content in files.items():
        file_path = root / rel_path
        file_path.parent.mkdir(parents=True, exist_ok=True)
        file_path.write_text(content)
    return root


class RecordingLoader:
    """Stands in for the importer: remembers every path it was asked to load."""

    def __init__(self):
        self.calls: List[Path] = []

    def __call__(self, path: Path) -> bool:
        self.calls.append(path)
        return True

    @property
    def names(self) -> List[str]:
        return [p.name for p in self.calls]


@pytest.fixture
def recording_loader() -> RecordingLoader:
    return RecordingLoader()


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """
    A small plugin tree:

        proj/
          boot.py
          classes/  a.py b.py index.py __init__.py notes.txt sub/c.py sub/deeper/d.py
          hooks/    h1.py h2_test.py
          other/    a.py
    """
    root = tmp_path / "proj"
    root.mkdir()
    return create_tree(root, {
        "boot.py": "BOOT = True\n",
        "classes/a.py": "A = 1\n",
        "classes/b.py": "B = 2\n",
        "classes/index.py": "INDEX = 1\n",
        "classes/__init__.py": "",
        "classes/notes.txt": "not python\n",
        "classes/sub/c.py": "C = 3\n",
        "classes/sub/deeper/d.py": "D = 4\n",
        "hooks/h1.py": "H1 = 1\n",
        "hooks/h2_test.py": "H2 = 2\n",
        "other/a.py": "OTHER_A = 1\n",
    })
