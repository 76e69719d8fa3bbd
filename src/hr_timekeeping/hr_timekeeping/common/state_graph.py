from __future__ import annotations

from enum import Enum
from typing import Generic, Iterable, Mapping, TypeVar

from ..core.exceptions import InvalidTransitionError

S = TypeVar("S", bound=Enum)


class StateGraph(Generic[S]):
    """Allowed status transitions; a state without outgoing edges is terminal."""

    def __init__(self, name: str, transitions: Mapping[S, Iterable[S]]):
        self._name = name
        self._edges = {state: frozenset(targets) for state, targets in transitions.items()}

    def allows(self, current: S, target: S) -> bool:
        return target in self._edges.get(current, frozenset())

    def is_terminal(self, state: S) -> bool:
        return not self._edges.get(state)

    def require(self, current: S, target: S) -> None:
        if self.allows(current, target):
            return
        if self.is_terminal(current):
            raise InvalidTransitionError(
                f"{self._name} is already {current.value} and cannot move to {target.value}"
            )
        raise InvalidTransitionError(f"{self._name} cannot move from {current.value} to {target.value}")
