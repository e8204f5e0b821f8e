"""Collection: an ordered, observable list of models."""
from __future__ import annotations
from typing import Any, Callable, Dict, Iterable, Iterator, List, Mapping, Optional, Union

from .events import Events
from .model import Model

Item = Union[Model, Mapping[str, Any]]


class Collection(Events):
    """Ordered models with ``add``, ``remove``, ``reset`` and ``sort`` events.

    ``change`` events of member models are re-emitted on the collection. A
    member that triggers ``destroy`` is removed from the collection (emitting
    ``remove``); the collection itself only emits ``destroy`` from its own
    `destroy`.
    """

    model = Model

    def __init__(self, items: Optional[Iterable[Item]] = None) -> None:
        self.models: List[Model] = []
        if items:
            self.add(items, silent=True)

    def __len__(self) -> int:
        return len(self.models)

    def __iter__(self) -> Iterator[Model]:
        return iter(self.models)

    def get(self, model_id: Any) -> Optional[Model]:
        if model_id is None:
            return None
        for m in self.models:
            if m.id == model_id:
                return m
        return None

    def _prepare(self, item: Item) -> Model:
        if isinstance(item, Model):
            if item.collection is None:
                item.collection = self
            return item
        return self.model(item, collection=self)

    def add(self, items: Union[Item, Iterable[Item]], merge: bool = False, silent: bool = False, **options: Any) -> List[Model]:
        """Append items; an item whose id is already present is skipped, or
        merged into the existing model when `merge` is true."""
        if isinstance(items, (Model, Mapping)):
            items = [items]
        added: List[Model] = []
        for item in items:
            attrs = item.attributes if isinstance(item, Model) else item
            existing = self.get(attrs.get(self.model.id_attribute))
            if existing is not None:
                if merge and existing is not item:
                    existing.set(attrs, silent=silent, **options)
                continue
            model = self._prepare(item)
            self.models.append(model)
            model.on("all", self._on_model_event)
            added.append(model)
        if not silent:
            for model in added:
                self.trigger("add", model, self, options)
        return added

    def remove(self, items: Union[Model, Iterable[Model]], silent: bool = False, **options: Any) -> List[Model]:
        if isinstance(items, Model):
            items = [items]
        removed: List[Model] = []
        for model in list(items):
            if model not in self.models:
                continue
            self.models.remove(model)
            self._detach(model)
            removed.append(model)
            if not silent:
                self.trigger("remove", model, self, options)
        return removed

    def reset(self, items: Optional[Iterable[Item]] = None, silent: bool = False, **options: Any) -> "Collection":
        for model in self.models:
            self._detach(model)
        self.models = []
        if items:
            self.add(items, silent=True)
        if not silent:
            self.trigger("reset", self, options)
        return self

    def sort(self, key: Union[str, Callable[[Model], Any]], reverse: bool = False, silent: bool = False, **options: Any) -> "Collection":
        if isinstance(key, str):
            attr = key
            key = lambda m: m.get(attr)
        self.models.sort(key=key, reverse=reverse)
        if not silent:
            self.trigger("sort", self, options)
        return self

    def to_json(self) -> List[Dict[str, Any]]:
        return [m.to_json() for m in self.models]

    def sync(self, method: str, options: Dict[str, Any]) -> Any:
        """Remote persistence hook used by `fetch`.

        Plain records have no remote side, so `fetch` raises
        NotImplementedError unless a subclass overrides this or the object is
        bound and fetched from storage.
        """
        raise NotImplementedError(f"{type(self).__name__} has no remote sync")

    def fetch(self, options: Optional[Mapping[str, Any]] = None, **kwargs: Any) -> Any:
        opts = dict(options or {}, **kwargs)
        data = self.sync("read", opts)
        if data is not None:
            opts.setdefault("merge", True)
            self.add(data, **opts)
        return data

    def destroy(self, **options: Any) -> None:
        self.trigger("destroy", self, options)

    def _detach(self, model: Model) -> None:
        model.off("all", self._on_model_event)
        if model.collection is self:
            model.collection = None

    def _on_model_event(self, name: str, model: Model, *args: Any) -> None:
        if name == "destroy":
            self.remove(model)
        elif name == "change" or name.startswith("change:"):
            self.trigger(name, model, *args)
