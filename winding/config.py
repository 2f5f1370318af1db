"""Tuning knobs for the winding number engine.

The engine itself is stateless; every call reads a :class:`WindingConfig`
(explicitly passed, or :data:`DEFAULT_CONFIG`).  None of the fields change
results: they only decide how the work is split.

Environment overrides
---------------------
:meth:`WindingConfig.from_env` reads

``WINDING_MIN_PARALLEL_WORK``
    Minimum number of (origin, face) pairs per parallel worker.
``WINDING_MAX_WORKERS``
    Upper bound on the thread count (default: ``os.cpu_count()``).
``WINDING_FACE_BLOCK`` / ``WINDING_ORIGIN_BLOCK``
    Tile sizes used inside one worker.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from numbers import Integral
from typing import Mapping, Optional

# Minimum number of items per thread before the engine goes parallel.
MIN_PARALLEL_WORK = 1000

_ENV_KEYS = {
    "min_parallel_work": "WINDING_MIN_PARALLEL_WORK",
    "max_workers": "WINDING_MAX_WORKERS",
    "face_block": "WINDING_FACE_BLOCK",
    "origin_block": "WINDING_ORIGIN_BLOCK",
}


@dataclass(frozen=True)
class WindingConfig:
    """Parallel granularity and tiling for :func:`winding.engine.evaluate`."""

    min_parallel_work: int = MIN_PARALLEL_WORK
    max_workers: Optional[int] = None
    face_block: int = 64
    origin_block: int = 4096

    def __post_init__(self) -> None:
        for name in ("min_parallel_work", "max_workers", "face_block", "origin_block"):
            value = getattr(self, name)
            if name == "max_workers" and value is None:
                continue
            if isinstance(value, bool) or not isinstance(value, Integral):
                raise ValueError(f"{name} must be an integer, got {value!r}")
            if value < 1:
                raise ValueError(f"{name} must be >= 1, got {value}")

    @property
    def workers(self) -> int:
        """Resolved worker count (``max_workers`` or the CPU count)."""
        if self.max_workers is not None:
            return int(self.max_workers)
        return os.cpu_count() or 1

    def with_overrides(self, **changes) -> "WindingConfig":
        """Return a copy with *changes* applied."""
        return replace(self, **changes)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "WindingConfig":
        """Build a config from ``WINDING_*`` environment variables."""
        env = os.environ if environ is None else environ
        kwargs = {}
        for field_name, key in _ENV_KEYS.items():
            raw = env.get(key)
            if raw is None or raw.strip() == "":
                continue
            try:
                kwargs[field_name] = int(raw)
            except ValueError:
                raise ValueError(f"{key} must be an integer, got {raw!r}") from None
        return cls(**kwargs)


DEFAULT_CONFIG = WindingConfig()
