"""Model: a single observable record of plain attributes."""
from __future__ import annotations
from typing import Any, Dict, Mapping, Optional

from .events import Events


class Model(Events):
    """A dict of attributes that announces its mutations.

    `set` triggers ``change:<attr>`` for every attribute whose value changed
    and then a single ``change``. `destroy` triggers ``destroy``; it does not
    talk to any remote service.
    """

    id_attribute = "id"

    def __init__(self, attributes: Optional[Mapping[str, Any]] = None, collection: Any = None) -> None:
        self.attributes: Dict[str, Any] = {}
        self.collection = collection
        if attributes:
            self.set(attributes, silent=True)

    @property
    def id(self) -> Any:
        return self.attributes.get(self.id_attribute)

    def get(self, attr: str, default: Any = None) -> Any:
        return self.attributes.get(attr, default)

    def set(self, attrs: Mapping[str, Any], silent: bool = False, **options: Any) -> "Model":
        changed = {
            k: v for k, v in attrs.items()
            if k not in self.attributes or self.attributes[k] != v
        }
        self.attributes.update(attrs)
        if silent or not changed:
            return self
        for attr, value in changed.items():
            self.trigger(f"change:{attr}", self, value, options)
        self.trigger("change", self, options)
        return self

    def unset(self, attr: str, silent: bool = False, **options: Any) -> "Model":
        if attr not in self.attributes:
            return self
        del self.attributes[attr]
        if not silent:
            self.trigger(f"change:{attr}", self, None, options)
            self.trigger("change", self, options)
        return self

    def to_json(self) -> Dict[str, Any]:
        return dict(self.attributes)

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
            self.set(data, **opts)
        return data

    def destroy(self, **options: Any) -> None:
        self.trigger("destroy", self, self.collection, options)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.attributes!r})"
