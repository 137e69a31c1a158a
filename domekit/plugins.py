"""Plugins that hook into the engine's update and draw cycle."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Callable, List, Optional, Tuple

ERROR_MAX_LENGTH = 4096

HookFn = Callable[["PluginCollection"], Any]


class Hook(IntEnum):
    """The points in the engine's life at which plugins are called."""

    INIT = 0
    SHUTDOWN = 1
    PRE_UPDATE = 2
    POST_UPDATE = 3
    PRE_DRAW = 4
    POST_DRAW = 5
    UNKNOWN = 6


class ApiType(IntEnum):
    """The families of engine interfaces offered to plugins."""

    DOME = 0
    WREN = 1
    AUDIO = 2
    CANVAS = 3
    BITMAP = 4
    IO = 5


class PluginError(RuntimeError):
    """Raised when a plugin fails to initialise or a hook reports a problem."""

    def __init__(self, message: str, plugin: Optional[str] = None,
                 hook: Optional[Hook] = None):
        super().__init__(message)
        self.plugin = plugin
        self.hook = hook


_HOOK_NAMES = {
    Hook.PRE_UPDATE: "pre-update",
    Hook.POST_UPDATE: "post-update",
    Hook.PRE_DRAW: "pre-draw",
    Hook.POST_DRAW: "post-draw",
}


def hook_name(hook) -> str:
    """Return the display name of a hook, or "unknown"."""
    try:
        return _HOOK_NAMES.get(Hook(hook), "unknown")
    except ValueError:
        return "unknown"


@dataclass
class Plugin:
    """A set of optional hook callables.

    Each hook receives the owning PluginCollection. A hook reports a
    problem by returning False or by raising an exception; any other
    return value counts as success.
    """

    on_init: Optional[HookFn] = None
    pre_update: Optional[HookFn] = None
    post_update: Optional[HookFn] = None
    pre_draw: Optional[HookFn] = None
    post_draw: Optional[HookFn] = None
    on_shutdown: Optional[HookFn] = None

    def hook(self, hook: Hook) -> Optional[HookFn]:
        return {
            Hook.INIT: self.on_init,
            Hook.SHUTDOWN: self.on_shutdown,
            Hook.PRE_UPDATE: self.pre_update,
            Hook.POST_UPDATE: self.post_update,
            Hook.PRE_DRAW: self.pre_draw,
            Hook.POST_DRAW: self.post_draw,
        }.get(hook)


def _default_log(text: str) -> None:
    sys.stdout.write(text)


class PluginCollection:
    """The plugins loaded into one engine, in the order they were added."""

    def __init__(self, log: Optional[Callable[[str], Any]] = None):
        self._log = log if log is not None else _default_log
        self._plugins: List[Tuple[str, Plugin]] = []
        self._error_reason = ""

    def __len__(self) -> int:
        return len(self._plugins)

    @property
    def names(self) -> List[str]:
        return [name for name, _ in self._plugins]

    def _report(self, hook: Hook, name: str) -> None:
        self._log("DOME cannot continue as the following plugin reported a problem:\n")
        self._log(f"Plugin: {name} - hook: {hook_name(hook)}\n")
        self._log("Aborting.\n")

    def _call(self, fn: Optional[HookFn]) -> Tuple[bool, Optional[BaseException]]:
        if fn is None:
            return True, None
        try:
            return fn(self) is not False, None
        except Exception as exc:
            return False, exc

    def add(self, name: str, plugin: Plugin) -> None:
        """Add a plugin and run its init hook.

        The plugin stays in the collection even if initialisation fails,
        in which case PluginError is raised.
        """
        if plugin is None:
            raise PluginError(f"There was a problem initialising plugin: {name}", name, Hook.INIT)
        self._plugins.append((name, plugin))
        ok, exc = self._call(plugin.on_init)
        if not ok:
            raise PluginError(
                f"There was a problem initialising plugin: {name}", name, Hook.INIT
            ) from exc

    def run_hook(self, hook) -> None:
        """Run a hook on every plugin in order, stopping at the first failure.

        Only the update and draw hooks are run here; others do nothing.
        """
        hook = Hook(hook)
        if hook not in _HOOK_NAMES:
            return
        for name, plugin in self._plugins:
            ok, exc = self._call(plugin.hook(hook))
            if not ok:
                self._report(hook, name)
                raise PluginError(
                    f"Plugin {name} reported a problem in hook {hook_name(hook)}",
                    name, hook,
                ) from exc

    def close(self) -> None:
        """Run every shutdown hook, reporting failures, then drop all plugins."""
        for name, plugin in self._plugins:
            ok, _ = self._call(plugin.on_shutdown)
            if not ok:
                self._report(Hook.SHUTDOWN, name)
        self._plugins.clear()

    def set_error_reason(self, error: str) -> None:
        """Record why a plugin failed, truncated to the reason's maximum length."""
        self._error_reason = error[:ERROR_MAX_LENGTH - 1]

    def error_reason(self) -> str:
        """Return the last recorded error reason."""
        return self._error_reason