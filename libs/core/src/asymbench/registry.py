from __future__ import annotations
from typing import Dict, Any, Callable


class _Registry:
    def __init__(self) -> None:
        self._items: Dict[str, Any] = {}

    def register(self, name: str) -> Callable[[Any], Any]:
        def _inner(cls_or_obj: Any) -> Any:
            self._items[name] = cls_or_obj
            return cls_or_obj
        return _inner

    def get(self, name: str) -> Any:
        try:
            return self._items[name]
        except KeyError:
            # Accept case-insensitive lookups from CLI/web input ("rsa", "ecc")
            lowered = name.lower()
            for key, value in self._items.items():
                if key.lower() == lowered:
                    return value
            raise

    def list(self) -> Dict[str, Any]:
        return dict(self._items)


registry = _Registry()
