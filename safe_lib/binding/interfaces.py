from __future__ import annotations
from enum import Enum
from typing import Any, Callable, Protocol, Union, runtime_checkable


class BindingKind(str, Enum):
    SINGLE = "single"
    COLLECTION = "collection"


@runtime_checkable
class Observable(Protocol):
    """Event surface a bound object must expose."""

    def on(self, names: str, callback: Callable[..., Any]) -> Any: ...

    def off(self, names: str = ..., callback: Callable[..., Any] = ...) -> Any: ...

    def trigger(self, name: str, *args: Any) -> Any: ...


def classify(obj: Any) -> BindingKind:
    """Infer the binding kind from the object's shape.

    Objects exposing ``models`` and ``add`` are collections; objects exposing
    ``set`` and ``to_json`` are single records.
    """
    if not isinstance(obj, Observable):
        raise TypeError(f"{type(obj).__name__} does not emit events")
    if hasattr(obj, "models") and callable(getattr(obj, "add", None)):
        return BindingKind.COLLECTION
    if callable(getattr(obj, "set", None)) and callable(getattr(obj, "to_json", None)):
        return BindingKind.SINGLE
    raise TypeError(f"{type(obj).__name__} exposes neither a record nor a collection interface")


def resolve_kind(obj: Any, kind: Union[BindingKind, str, None] = None) -> BindingKind:
    if kind is None:
        return classify(obj)
    return BindingKind(kind)
