"""Typing environments."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import Optional

from catinfer.typecheck.kinds import FunctionType


class Environment(Mapping[str, FunctionType]):
    """A map from the names of functions to their declared types."""

    def __init__(
        self, env: Optional[Mapping[str, FunctionType]] = None
    ) -> None:
        self._env = dict(env or {})

    def __getitem__(self, name: str) -> FunctionType:
        return self._env[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._env)

    def __len__(self) -> int:
        return len(self._env)

    def __or__(self, other: Mapping[str, FunctionType]) -> Environment:
        return Environment({**self, **other})

    def __str__(self) -> str:
        return '{' + ', '.join(f'{n}: {t}' for n, t in self.items()) + '}'

    def __repr__(self) -> str:
        return f'Environment({self._env!r})'
