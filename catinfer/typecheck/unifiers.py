"""Unification of stack effects and resolution of the collected constraints.

A Unifier is used for exactly one inference pass: the caller feeds it pairs
of vectors or function types, then calls solve() once to get the principal
kind of every variable that was constrained.
"""

from __future__ import annotations

import functools
import logging
from typing import Dict, Optional, Set

from catinfer.logging import InferenceLogger
from catinfer.typecheck.constraints import Constraints
from catinfer.typecheck.errors import (
    KindMismatchError,
    OccursCheckError,
    UnsupportedKindPairingError,
    format_arity_mismatch_error,
    format_widening_warning,
)
from catinfer.typecheck.kinds import (
    FunctionType,
    Kind,
    SelfType,
    SimpleType,
    StackVariable,
    SubtypeLattice,
    TypeVariable,
    Vector,
    default_lattice,
)

_logger = InferenceLogger(logging.getLogger(__name__))


class Unifier:
    def __init__(
        self,
        lattice: SubtypeLattice = default_lattice,
        strict_arity: bool = False,
    ) -> None:
        self._lattice = lattice
        self._strict_arity = strict_arity
        self._constraints = Constraints(self)
        self._unifiers: Dict[str, Kind] = {}

    @property
    def constraints(self) -> Constraints:
        return self._constraints

    def add_constraint(self, name: str, kind: Kind) -> None:
        self._constraints.add(name, kind)

    def add_vector_constraint(self, v1: Vector, v2: Vector) -> None:
        """Unify two stacks, walking them from the top in lock-step."""
        original_v1, original_v2 = v1, v2
        while not v1.is_empty() and not v2.is_empty():
            k1 = v1.top
            k2 = v2.top

            # A stack variable absorbs everything below it, so there is
            # nothing left to align positionally.
            if isinstance(k1, StackVariable):
                self.add_constraint(str(k1), v2)
                if isinstance(k2, StackVariable):
                    self.add_constraint(str(k2), v1)
                return
            elif isinstance(k2, StackVariable):
                self.add_constraint(str(k2), v1)
                return

            if isinstance(k1, TypeVariable):
                self.add_constraint(str(k1), k2)
            if isinstance(k2, TypeVariable):
                self.add_constraint(str(k2), k1)
            if isinstance(k1, FunctionType) and isinstance(k2, FunctionType):
                self.add_function_constraint(k1, k2)

            if (
                isinstance(k1, SimpleType)
                and not k2.is_variable()
                or isinstance(k2, SimpleType)
                and not k1.is_variable()
            ):
                if not self._is_subtype(k2, k1) and not self._is_subtype(
                    k1, k2
                ):
                    raise KindMismatchError(k1, k2)

            v1 = v1.rest
            v2 = v2.rest

        rest = v2 if v1.is_empty() else v1
        if len(rest) == 1 and isinstance(rest.top, StackVariable):
            # The other side ran out, so the stack variable stands for
            # nothing.
            self.add_constraint(str(rest.top), Vector())
        elif self._strict_arity and not rest.is_empty():
            shorter, longer = (
                (original_v1, original_v2)
                if v1.is_empty()
                else (original_v2, original_v1)
            )
            raise KindMismatchError(
                original_v1,
                original_v2,
                format_arity_mismatch_error(shorter, longer),
            )

    def add_function_constraint(
        self, f1: FunctionType, f2: FunctionType
    ) -> None:
        if isinstance(f1, SelfType) or isinstance(f2, SelfType):
            return
        # Consumption first: variables shared with the production accumulate
        # the constraints of both calls.
        self.add_vector_constraint(f1.consumption, f2.consumption)
        self.add_vector_constraint(f1.production, f2.production)

    def solve(self) -> Dict[str, Kind]:
        """Resolve every constrained variable to its principal kind."""
        representatives: Dict[int, Kind] = {}
        for name, members in self._constraints.items():
            assert members, 'empty constraint class for {}'.format(name)
            class_id = self._constraints.class_id(name)
            if class_id not in representatives:
                if _logger.is_enabled_for(logging.DEBUG):
                    _logger.debug(
                        'Merging constraints: {}',
                        ' = '.join(str(kind) for kind in members),
                    )
                representative = functools.reduce(self.unify, members, None)
                assert representative is not None
                _logger.debug('Unified constraint = {}', representative)
                representatives[class_id] = representative
            self._unifiers[name] = representatives[class_id]
        self._resolve_unifiers()
        return dict(self._unifiers)

    def unify(self, k1: Optional[Kind], k2: Optional[Kind]) -> Optional[Kind]:
        """Choose the representative of two kinds in the same class."""
        if k1 is None:
            return k2
        if k2 is None:
            return k1

        if isinstance(k1, FunctionType) or isinstance(k2, FunctionType):
            if not isinstance(k1, FunctionType):
                return k2
            if not isinstance(k2, FunctionType):
                return k1
            if len(k1.consumption) > len(k2.consumption):
                return k1
            return k2
        elif isinstance(k1, Vector) or isinstance(k2, Vector):
            if not isinstance(k1, Vector):
                return k2
            if not isinstance(k2, Vector):
                return k1
            if len(k1) > len(k2):
                return k1
            return k2
        elif k1.is_variable() or k2.is_variable():
            if not k2.is_variable():
                return k2
            if not k1.is_variable():
                return k1
            if str(k1) <= str(k2):
                return k1
            return k2
        elif isinstance(k1, SimpleType) and isinstance(k2, SimpleType):
            if self._is_subtype(k1, k2):
                return k1
            if self._is_subtype(k2, k1):
                return k2
            _logger.warning('{}', format_widening_warning(k1, k2))
            return self._lattice.top
        raise UnsupportedKindPairingError(k1, k2)

    def resolve_kind(self, kind: Kind) -> Kind:
        """Substitute the resolved variables into kind."""
        return kind.apply_substitution(self._unifiers)

    def get_resolved_unifier(self, name: str) -> Kind:
        assert name in self._unifiers, 'no resolved kind for {}'.format(name)
        return self._unifiers[name]

    def clear(self) -> None:
        self._constraints.clear()
        self._unifiers.clear()

    def __str__(self) -> str:
        return str(self._constraints)

    def _resolve_unifiers(self) -> None:
        for name, kind in self._unifiers.items():
            if not kind.is_variable() and self._occurs_in(name, kind, set()):
                raise OccursCheckError(name, kind)
        # With no cycles, substitution reaches a fixed point within one
        # round per variable, whatever order the chains were visited in.
        for _ in range(len(self._unifiers) + 1):
            changed = False
            for name, kind in list(self._unifiers.items()):
                resolved = self.resolve_kind(kind)
                if resolved != kind:
                    self._unifiers[name] = resolved
                    changed = True
            if not changed:
                return

    def _occurs_in(self, name: str, kind: Kind, seen: Set[str]) -> bool:
        for variable in kind.variables():
            if variable.name == name:
                return True
            if variable.name in seen or variable.name not in self._unifiers:
                continue
            seen.add(variable.name)
            if self._occurs_in(name, self._unifiers[variable.name], seen):
                return True
        return False

    def _is_subtype(self, subtype: Kind, supertype: Kind) -> bool:
        return subtype.is_subtype_of(supertype, self._lattice)
