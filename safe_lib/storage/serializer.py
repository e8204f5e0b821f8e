from typing import Any, Protocol
import json


class Serializer(Protocol):
    """Serialize/deserialize snapshots to the text stored in a slot.

    Implementations should be symmetric: `dump` -> str, `load` <- str.
    """

    def dump(self, value: Any) -> str: ...

    def load(self, data: str) -> Any: ...


class JSONSerializer:
    """Compact JSON, matching what browsers write with `JSON.stringify`.

    `load` raises `ValueError` (json.JSONDecodeError) on malformed text.
    """

    def dump(self, value: Any) -> str:
        return json.dumps(value, separators=(",", ":"), ensure_ascii=False)

    def load(self, data: str) -> Any:
        return json.loads(data)
