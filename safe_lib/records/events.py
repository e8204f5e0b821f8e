"""Minimal observer interface shared by models and collections.

Event names are plain strings; `on` and `off` accept several names
separated by spaces. Listeners registered for ``"all"`` receive every event
with the event name prepended to the arguments.
"""
from __future__ import annotations
from typing import Any, Callable, Dict, List, Optional

Listener = Callable[..., Any]


class Events:
    """Mixin providing `on`, `off` and `trigger`.

    The listener table is created lazily so subclasses don't need to call
    ``Events.__init__``.
    """

    def _listeners(self) -> Dict[str, List[Listener]]:
        table = self.__dict__.get("_events")
        if table is None:
            table = {}
            self.__dict__["_events"] = table
        return table

    def on(self, names: str, callback: Listener) -> "Events":
        table = self._listeners()
        for name in names.split():
            table.setdefault(name, []).append(callback)
        return self

    def off(self, names: Optional[str] = None, callback: Optional[Listener] = None) -> "Events":
        """Remove listeners by name and/or callback; no arguments removes all."""
        table = self._listeners()
        targets = names.split() if names else list(table)
        for name in targets:
            if name not in table:
                continue
            if callback is None:
                del table[name]
                continue
            remaining = [cb for cb in table[name] if cb != callback]
            if remaining:
                table[name] = remaining
            else:
                del table[name]
        return self

    def trigger(self, name: str, *args: Any) -> "Events":
        table = self._listeners()
        for callback in list(table.get(name, ())):
            # skip listeners removed by an earlier callback of this emission
            if callback in table.get(name, ()):
                callback(*args)
        if name != "all":
            for callback in list(table.get("all", ())):
                if callback in table.get("all", ()):
                    callback(name, *args)
        return self

    def has_listeners(self, name: str) -> bool:
        return bool(self._listeners().get(name))
