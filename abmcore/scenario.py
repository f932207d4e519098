"""Run parameters for a world.

A scenario bundles the seed and the free parameters of one simulation run.
Models read their parameters from ``world.scenario``; sweeps derive variants
with ``Scenario.replace``.
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterator, MutableMapping, Sequence
from functools import partial
from itertools import count
from typing import TYPE_CHECKING, Any, ClassVar

import numpy as np

SeedLike = int | np.integer | Sequence[int] | np.random.SeedSequence
RNGLike = np.random.Generator | np.random.BitGenerator


if TYPE_CHECKING:
    from abmcore.world import World

__all__ = ["RNGLike", "Scenario", "SeedLike"]


class Scenario(MutableMapping):
    """Parameters of a simulation run.

    Parameters are reachable both as items and as attributes. The ``rng`` entry
    is always present and seeds the world the scenario is given to.

    Attributes:
        world : the world using this scenario, None until one is created with it
        scenario_id : per class counter, starting from 0

    Notes:
        Parameters cannot change while the world is running. Clear
        ``world.running`` first, or derive a new scenario with ``replace``.

    """

    _ids: ClassVar[defaultdict] = defaultdict(partial(count, 0))
    _reserved: ClassVar[frozenset[str]] = frozenset({"world", "scenario_id", "_params"})

    def __init__(self, *, rng: RNGLike | SeedLike | None = None, **params: Any):
        """Initialize a Scenario.

        Args:
            rng: a random number generator or valid seed value for a numpy generator.
            params: all other run parameters

        """
        clash = self._reserved.intersection(params)
        if clash:
            raise ValueError(f"Reserved scenario names: {', '.join(sorted(clash))}")
        object.__setattr__(self, "_params", {"rng": rng, **params})
        object.__setattr__(self, "world", None)
        object.__setattr__(self, "scenario_id", next(self._ids[self.__class__]))

    @property
    def locked(self) -> bool:
        """Whether the owning world is running."""
        return self.world is not None and self.world.running

    def replace(self, **changes: Any) -> Scenario:
        """Return a new, unbound scenario with some parameters changed."""
        return self.__class__(**{**self._params, **changes})

    def __getitem__(self, key: str) -> Any:  # noqa: D105
        return self._params[key]

    def __setitem__(self, key: str, value: Any) -> None:  # noqa: D105
        if self.locked:
            raise ValueError("Cannot mutate scenario while world is running")
        if key in self._reserved:
            raise ValueError(f"{key} is a reserved scenario name")
        self._params[key] = value

    def __delitem__(self, key: str) -> None:  # noqa: D105
        if self.locked:
            raise ValueError("Cannot mutate scenario while world is running")
        del self._params[key]

    def __iter__(self) -> Iterator[str]:  # noqa: D105
        return iter(self._params)

    def __len__(self) -> int:  # noqa: D105
        return len(self._params)

    def __getattr__(self, key: str) -> Any:  # noqa: D105
        # only reached when normal lookup fails, i.e. for parameters
        try:
            return self.__dict__["_params"][key]
        except KeyError:
            raise AttributeError(key) from None

    def __setattr__(self, key: str, value: Any) -> None:  # noqa: D105
        if key == "world":
            object.__setattr__(self, key, value)
        else:
            self[key] = value

    def __delattr__(self, key: str) -> None:  # noqa: D105
        try:
            del self[key]
        except KeyError:
            raise AttributeError(key) from None

    def to_dict(self) -> dict[str, Any]:
        """Return a dict representation of the scenario."""
        return {**self._params, "scenario_id": self.scenario_id}

    def __repr__(self) -> str:  # noqa: D105
        params = ", ".join(f"{k}={v!r}" for k, v in self._params.items())
        return f"{self.__class__.__name__}({params})"
