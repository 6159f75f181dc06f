# tests/test_functions.py
"""Tests for the slurp()/slurp_hooked() helpers and the hook registry."""

import pytest
from pathlib import Path
from unittest.mock import patch

from slurp import Slurp, slurp, slurp_hooked
from slurp.exceptions import InvalidConfigurationError, UnauthorizedDirectoryError
from slurp.hooks import HookRegistry


@pytest.fixture
def patched_loader(recording_loader):
    # route the default importer through the recording loader.
    with patch("slurp.core.loader.load_source_file", recording_loader):
        yield recording_loader


class TestSlurpFunction:
    def test_returns_loader_with_files(self, project: Path, patched_loader):
        result = slurp(project, ["hooks", "other"])
        assert isinstance(result, Slurp)
        assert patched_loader.names == ["h1.py", "h2_test.py", "a.py"]
        assert len(result.get_files()) == 3

    def test_string_target_and_recursion(self, project: Path, patched_loader):
        result = slurp(project, "classes", recursive=True, excluded=["index.py"])
        assert [Path(f).name for f in result.get_files()] == ["__init__.py", "a.py", "b.py", "c.py", "d.py"]

    def test_mapping_targets(self, project: Path, patched_loader):
        slurp(project, {"hooks": lambda p: "test" in Path(p).name})
        assert patched_loader.names == ["h2_test.py"]

    def test_default_targets_load_nothing(self, project: Path, patched_loader):
        result = slurp(project)
        assert result is not None
        assert result.get_files() == []

    def test_global_predicate(self, project: Path, patched_loader):
        slurp(project, ["hooks"], global_predicate=lambda p: p.endswith("h1.py"))
        assert patched_loader.names == ["h1.py"]

    def test_failure_returns_none_and_reports(self, tmp_path: Path, patched_loader):
        errors = []
        result = slurp(tmp_path / "missing", ["x"], error_callback=errors.append)
        assert result is None
        assert len(errors) == 1
        assert isinstance(errors[0], InvalidConfigurationError)

    def test_failure_without_callback_is_swallowed(self, project: Path, patched_loader):
        assert slurp(project, {"hooks": "not callable"}) is None
        assert patched_loader.calls == []

    def test_raising_predicate_is_reported(self, project: Path, patched_loader):
        errors = []
        result = slurp(project, "hooks", global_predicate=lambda p: 1 / 0, error_callback=errors.append)
        assert result is None
        assert len(errors) == 1
        assert isinstance(errors[0], ZeroDivisionError)
        assert patched_loader.calls == []


class TestHookRegistry:
    def test_priority_then_registration_order(self):
        registry = HookRegistry()
        calls = []
        registry.add_action("init", lambda: calls.append("late"), priority=20, accepted_args=0)
        registry.add_action("init", lambda: calls.append("first"), priority=5, accepted_args=0)
        registry.add_action("init", lambda: calls.append("second"), priority=5, accepted_args=0)
        registry.do_action("init")
        assert calls == ["first", "second", "late"]

    def test_accepted_args_limits_arguments(self):
        registry = HookRegistry()
        received = []
        registry.add_action("save", lambda *args: received.append(args), accepted_args=2)
        registry.do_action("save", 1, 2, 3)
        assert received == [(1, 2)]

    def test_unknown_hook_is_a_no_op(self):
        HookRegistry().do_action("nothing-registered")

    def test_has_and_remove(self):
        registry = HookRegistry()
        registry.add_action("init", print)
        assert registry.has_action("init")
        registry.remove_all("init")
        assert not registry.has_action("init")

    def test_rejects_bad_registration(self):
        registry = HookRegistry()
        with pytest.raises(InvalidConfigurationError):
            registry.add_action("", print)
        with pytest.raises(InvalidConfigurationError):
            registry.add_action("init", "print")


class TestSlurpHooked:
    def test_defers_until_hook_fires(self, project: Path, patched_loader):
        registry = HookRegistry()
        slurp_hooked("plugins_loaded", project, ["hooks"], registry=registry)
        assert patched_loader.calls == []

        registry.do_action("plugins_loaded", "ignored-argument")
        assert patched_loader.names == ["h1.py", "h2_test.py"]

    def test_priority_and_arg_count_passed_through(self, project: Path):
        registry = HookRegistry()
        with patch.object(registry, "add_action") as add_action:
            slurp_hooked("init", project, "hooks", priority=99, accepted_args=3, registry=registry)
        hook, callback, priority, accepted_args = add_action.call_args.args
        assert (hook, priority, accepted_args) == ("init", 99, 3)
        assert callable(callback)

    def test_uses_default_registry(self, project: Path, patched_loader):
        with patch("slurp.functions.default_registry", HookRegistry()) as registry:
            slurp_hooked("boot", project, None)
            registry.do_action("boot")
        assert patched_loader.names == ["boot.py"]

    def test_deferred_errors_do_not_propagate(self, project: Path, patched_loader):
        registry = HookRegistry()
        slurp_hooked("init", project, "hooks", registry=registry)
        with patch("slurp.functions.Slurp.include", side_effect=UnauthorizedDirectoryError(project)):
            registry.do_action("init")
        assert patched_loader.calls == []

    def test_raising_predicate_does_not_escape_hook(self, project: Path, patched_loader):
        registry = HookRegistry()
        slurp_hooked("init", project, {"hooks": lambda p: 1 / 0}, registry=registry)
        registry.do_action("init")
        assert patched_loader.calls == []
