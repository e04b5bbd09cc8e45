# src/gridpath/core/terrain.py
#!/usr/bin/env python3
"""
Node-type table: ordered terrain name -> traversal weight.

- Wall is always present and always infinite (impassable).
- Untyped cells use DEFAULT_WEIGHT.
- Editable weights are whole numbers in [MIN_WEIGHT, MAX_WEIGHT]; keeping
  every weight >= 1 keeps the Manhattan heuristic admissible.
"""

import logging
from math import inf, isinf
from typing import Dict, Iterable, Iterator, Optional, Tuple

logger = logging.getLogger(__name__)

WALL = "Wall"
DEFAULT_WEIGHT = 1
MIN_WEIGHT = 1
MAX_WEIGHT = 100

DEFAULT_NODE_TYPES: Tuple[Tuple[str, float], ...] = (
    (WALL, inf),
    ("Mud", 50),
    ("Water", 30),
    ("Sand", 10),
    ("Grass", 5),
)


class NodeTypeTable:
    def __init__(self, entries: Optional[Iterable[Tuple[str, float]]] = None):
        self._weights: Dict[str, float] = {}
        for name, weight in (DEFAULT_NODE_TYPES if entries is None else entries):
            if name == WALL:
                continue
            self._weights[name] = self._check_weight(name, weight)
        # wall first, whatever order the caller used
        self._weights = {WALL: inf, **self._weights}

    @staticmethod
    def _check_weight(name: str, weight: float) -> int:
        if isinf(weight) or int(weight) != weight:
            raise ValueError(f"weight for {name!r} must be a whole number, got {weight!r}")
        if not MIN_WEIGHT <= weight <= MAX_WEIGHT:
            raise ValueError(f"weight for {name!r} must be in [{MIN_WEIGHT}, {MAX_WEIGHT}], got {weight!r}")
        return int(weight)

    def __contains__(self, name: object) -> bool:
        return name in self._weights

    def __iter__(self) -> Iterator[Tuple[str, float]]:
        return iter(self._weights.items())

    def __len__(self) -> int:
        return len(self._weights)

    def names(self) -> list:
        return list(self._weights)

    def weight_of(self, name: Optional[str]) -> float:
        if name is None:
            return DEFAULT_WEIGHT
        return self._weights[name]

    def is_blocking(self, name: Optional[str]) -> bool:
        return isinf(self.weight_of(name))

    def set_weight(self, name: str, weight: float) -> bool:
        """Change one entry. Returns True when the stored weight actually changed."""
        if name not in self._weights:
            raise KeyError(name)
        if name == WALL:
            raise ValueError("the Wall weight is fixed")
        weight = self._check_weight(name, weight)
        if self._weights[name] == weight:
            return False
        logger.debug("node type %s: weight %s -> %s", name, self._weights[name], weight)
        self._weights[name] = weight
        return True
