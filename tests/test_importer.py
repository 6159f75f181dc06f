# tests/test_importer.py
"""Tests for the process-wide load-once importer, alone and behind Slurp."""

import sys
import pytest
from pathlib import Path

from slurp import Slurp
from slurp.core.importer import get_loaded_module, is_loaded, load_source_file, module_name_for
from slurp.exceptions import LoadError


def counting_source(marker: Path, value: str = "1") -> str:
    # a module body that appends a line to `marker` every time it executes.
    return (
        f"with open({str(marker)!r}, 'a') as fh:\n"
        f"    fh.write('ran\\n')\n"
        f"VALUE = {value}\n"
    )


def executions(marker: Path) -> int:
    if not marker.exists():
        return 0
    return len(marker.read_text().splitlines())


def test_file_executes_once(tmp_path: Path):
    marker = tmp_path / "marker.log"
    source = tmp_path / "plugin.py"
    source.write_text(counting_source(marker, "42"))

    assert load_source_file(source) is True
    assert load_source_file(source) is False
    assert load_source_file(str(source)) is False
    assert executions(marker) == 1

    module = get_loaded_module(source)
    assert module is not None
    assert module.VALUE == 42
    assert is_loaded(source)
    assert sys.modules[module_name_for(source.resolve())] is module


def test_same_stem_in_different_directories_are_distinct(tmp_path: Path):
    marker = tmp_path / "marker.log"
    for sub in ("one", "two"):
        (tmp_path / sub).mkdir()
        (tmp_path / sub / "same.py").write_text(counting_source(marker))
    assert load_source_file(tmp_path / "one" / "same.py")
    assert load_source_file(tmp_path / "two" / "same.py")
    assert executions(marker) == 2


def test_failing_module_raises_load_error_and_can_retry(tmp_path: Path):
    source = tmp_path / "broken.py"
    source.write_text("raise RuntimeError('boom')\n")

    with pytest.raises(LoadError) as exc_info:
        load_source_file(source)
    assert "boom" in str(exc_info.value)
    assert exc_info.value.path == str(source.resolve())
    assert not is_loaded(source)
    assert module_name_for(source.resolve()) not in sys.modules

    source.write_text("OK = True\n")
    assert load_source_file(source) is True


def test_slurp_default_loader_executes_each_path_once(tmp_path: Path):
    marker = tmp_path / "marker.log"
    plugins = tmp_path / "plugins"
    plugins.mkdir()
    (plugins / "a.py").write_text(counting_source(marker))
    (plugins / "b.py").write_text(counting_source(marker))

    first = Slurp(tmp_path)
    first.include("plugins")
    first.include("plugins")
    Slurp(tmp_path).include("plugins")

    assert executions(marker) == 2
    assert len(first.get_files()) == 4


def test_slurp_propagates_load_errors(tmp_path: Path):
    (tmp_path / "bad").mkdir()
    (tmp_path / "bad" / "oops.py").write_text("1 / 0\n")
    with pytest.raises(LoadError):
        Slurp(tmp_path).include("bad")
