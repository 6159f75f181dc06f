# slurp/hooks.py
"""
A minimal named-event registry.

Callbacks are attached to a hook name with a priority and an accepted
argument count. Firing the hook runs them in ascending priority, ties broken
by registration order, passing each one at most `accepted_args` of the
positional arguments given to `do_action`.
"""
import itertools
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List
import structlog

from slurp.exceptions import InvalidConfigurationError

log = structlog.get_logger(__name__)

DEFAULT_PRIORITY = 10

@dataclass(order=True)
class _Action:
    priority: int
    sequence: int
    callback: Callable[..., Any] = field(compare=False)
    accepted_args: int = field(compare=False, default=1)

class HookRegistry:
    def __init__(self):
        self._actions: Dict[str, List[_Action]] = {}
        self._counter = itertools.count()

    def add_action(self, hook: str, callback: Callable[..., Any], priority: int = DEFAULT_PRIORITY, accepted_args: int = 1) -> None:
        if not isinstance(hook, str) or not hook:
            raise InvalidConfigurationError("Hook name must be a non-empty string.")
        if not callable(callback):
            raise InvalidConfigurationError(f"Hook callback is not callable: {callback!r}")
        action = _Action(priority=priority, sequence=next(self._counter), callback=callback, accepted_args=max(0, accepted_args))
        self._actions.setdefault(hook, []).append(action)
        log.debug("hook_action_added", hook=hook, priority=priority, accepted_args=accepted_args)

    def has_action(self, hook: str) -> bool:
        return bool(self._actions.get(hook))

    def remove_all(self, hook: str) -> None:
        self._actions.pop(hook, None)

    def do_action(self, hook: str, *args: Any) -> None:
        actions = sorted(self._actions.get(hook, []))
        log.debug("hook_fired", hook=hook, actions=len(actions))
        for action in actions:
            action.callback(*args[:action.accepted_args])

default_registry = HookRegistry()
