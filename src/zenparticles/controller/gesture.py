"""
Gesture Sources
===============
Producers of raw ``{tension, expansion}`` samples.

The recognition itself is an external service; this module only defines the
shape of a source and ships a scripted one that replays recorded samples.
Sources are polled by ``GestureWorker`` on a background thread.
"""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Iterable, List, Mapping, Optional, Protocol, Union

logger = logging.getLogger(__name__)


class GestureSource(Protocol):
    name: str

    def open(self) -> None: ...
    def read(self) -> Optional[Mapping[str, Any]]: ...
    def close(self) -> None: ...


class ScriptedGestureSource:
    """
    Replays a fixed list of samples, one per ``read()``.

    When ``loop`` is False the source returns None once the script is
    exhausted, which the worker treats as "no new sample".
    """
    name = "scripted"

    def __init__(self, samples: Iterable[Mapping[str, Any]], loop: bool = True) -> None:
        self.samples: List[Mapping[str, Any]] = list(samples)
        self.loop = loop
        self._index = 0
        self.is_open = False

    @classmethod
    def from_file(cls, path: Union[str, Path], loop: bool = True) -> ScriptedGestureSource:
        """Load a JSON list of ``{"tension": .., "expansion": ..}`` objects."""
        path = Path(path)
        logger.info(f"Loading gesture script from: {path}")
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)

        if not isinstance(data, list) or not all(isinstance(item, dict) for item in data):
            raise ValueError(f"Gesture script '{path}' must be a JSON list of objects.")

        return cls(data, loop=loop)

    def open(self) -> None:
        self._index = 0
        self.is_open = True

    def read(self) -> Optional[Mapping[str, Any]]:
        if not self.samples:
            return None
        if self._index >= len(self.samples):
            if not self.loop:
                return None
            self._index = 0
        sample = self.samples[self._index]
        self._index += 1
        return sample

    def close(self) -> None:
        self.is_open = False
