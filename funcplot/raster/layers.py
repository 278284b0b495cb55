from __future__ import annotations

from typing import Any

import numpy as np


class LayerCache:
    """Keyed templates for chart layers that only change with size, bounds or style.

    A lookup hits only when the stored key equals the requested one; storing
    under a name replaces whatever was there.
    """

    def __init__(self) -> None:
        self._entries: dict[str, tuple[tuple[Any, ...], np.ndarray]] = {}

    def __contains__(self, name: str) -> bool:
        return name in self._entries

    def invalidate(self, name: str | None = None) -> None:
        if name is None:
            self._entries.clear()
        else:
            self._entries.pop(name, None)

    def lookup(self, name: str, key: tuple[Any, ...]) -> np.ndarray | None:
        entry = self._entries.get(name)
        if entry is None or entry[0] != key:
            return None
        return entry[1]

    def store(self, name: str, key: tuple[Any, ...], template: np.ndarray) -> np.ndarray:
        self._entries[name] = (key, template)
        return template
