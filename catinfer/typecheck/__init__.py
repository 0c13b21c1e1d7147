"""The Cat type inferer.

Stack effects are composed by unifying the production of the first function
with the consumption of the second. Each composition is one inference pass
with its own Unifier.
"""

from __future__ import annotations

import logging
import string
from typing import TYPE_CHECKING, Dict, Iterable, Optional, TypeVar

import catinfer.parse
from catinfer.logging import InferenceLogger
from catinfer.typecheck.env import Environment
from catinfer.typecheck.errors import (
    NameError,
    StaticAnalysisError,
    UnhandledNodeTypeError,
)
from catinfer.typecheck.kinds import (
    FunctionType,
    Kind,
    SelfType,
    StackVariable,
    SubtypeLattice,
    TypeVariable,
    Vector,
    _Variable,
    char_type,
    default_lattice,
    float_type,
    int_type,
    string_type,
)
from catinfer.typecheck.unifiers import Unifier

if TYPE_CHECKING:
    from catinfer.parse import WordNode

_logger = InferenceLogger(logging.getLogger(__name__))

_K = TypeVar('_K', bound=Kind)


class TypeInferer:
    def __init__(
        self,
        env: Optional[Environment] = None,
        lattice: SubtypeLattice = default_lattice,
        strict_arity: bool = False,
    ) -> None:
        self._env = env if env is not None else Environment()
        self._lattice = lattice
        self._strict_arity = strict_arity
        self._next_id = 0

    @property
    def env(self) -> Environment:
        return self._env

    def reset(self) -> None:
        """Restart the numbering of fresh variables."""
        self._next_id = 0

    def fresh_type_variable(self) -> TypeVariable:
        self._next_id += 1
        return TypeVariable("'t{}".format(self._next_id))

    def fresh_stack_variable(self) -> StackVariable:
        self._next_id += 1
        return StackVariable("'S{}".format(self._next_id))

    def rename(self, kind: _K) -> _K:
        """Give every variable in kind a fresh name."""
        sub: Dict[str, Kind] = {}
        for variable in kind.variables():
            if variable.name not in sub:
                sub[variable.name] = self._fresh_like(variable)
        return kind.apply_substitution(sub)  # type: ignore

    def compose(self, f: FunctionType, g: FunctionType) -> FunctionType:
        """The type of running f and then g."""
        if isinstance(g, SelfType):
            return f
        if isinstance(f, SelfType):
            return g
        f = self._open(self.rename(f))
        g = self._open(self.rename(g))
        unifier = Unifier(self._lattice, self._strict_arity)
        unifier.add_vector_constraint(f.production, g.consumption)
        unifier.solve()
        _logger.debug('constraints for {} {}:\n{}', f, g, unifier)
        composed = unifier.resolve_kind(
            FunctionType(
                f.consumption,
                g.production,
                f.has_side_effects or g.has_side_effects,
            )
        )
        assert isinstance(composed, FunctionType)
        return composed

    def infer(
        self, words: Iterable[WordNode], self_name: Optional[str] = None
    ) -> FunctionType:
        """Infer the type of a sequence of words.

        Words named self_name refer to the function being defined."""
        effect = FunctionType([], [])
        for word in words:
            try:
                word_type = self.type_of_word(word, self_name)
                effect = self.compose(effect, word_type)
            except StaticAnalysisError as e:
                e.set_location_if_missing(word.location)
                raise
        return effect

    def infer_definition(
        self, name: str, words: Iterable[WordNode]
    ) -> FunctionType:
        return self.normalize(self.infer(words, self_name=name))

    def type_of_word(
        self, word: WordNode, self_name: Optional[str] = None
    ) -> FunctionType:
        if isinstance(word, catinfer.parse.NumberWordNode):
            if isinstance(word.value, int):
                return FunctionType([], [int_type])
            return FunctionType([], [float_type])
        if isinstance(word, catinfer.parse.StringWordNode):
            return FunctionType([], [string_type])
        if isinstance(word, catinfer.parse.CharWordNode):
            return FunctionType([], [char_type])
        if isinstance(word, catinfer.parse.QuoteWordNode):
            return FunctionType([], [self.infer(word.children, self_name)])
        if isinstance(word, catinfer.parse.NameWordNode):
            if word.value == self_name:
                return SelfType()
            if word.value not in self._env:
                raise NameError(word.value, word.location)
            return self._env[word.value]
        raise UnhandledNodeTypeError(
            "don't know how to handle '{}'".format(word)
        )

    def normalize(self, f: FunctionType) -> FunctionType:
        """Rename variables to 'a, 'b, ... and 'A, 'B, ... in written order.

        A stack variable that only passes through the function untouched is
        dropped, so ('A 'a -> 'A 'a 'a) becomes ('a -> 'a 'a)."""
        if isinstance(f, SelfType):
            return f
        f = _close(f)
        sub: Dict[str, Kind] = {}
        type_count = stack_count = 0
        for variable in f.variables():
            if variable.name in sub:
                continue
            if isinstance(variable, StackVariable):
                sub[variable.name] = StackVariable(
                    "'" + _letters(stack_count).upper()
                )
                stack_count += 1
            else:
                sub[variable.name] = TypeVariable("'" + _letters(type_count))
                type_count += 1
        normalized = f.apply_substitution(sub)
        assert isinstance(normalized, FunctionType)
        return normalized

    def _fresh_like(self, variable: _Variable) -> _Variable:
        if isinstance(variable, StackVariable):
            return self.fresh_stack_variable()
        return self.fresh_type_variable()

    def _open(self, f: FunctionType) -> FunctionType:
        # Functions only touch the top of the stack. Giving both sides the
        # same stack variable lets unification line up stacks of different
        # heights.
        if f.consumption.is_open() or f.production.is_open():
            return f
        rest = self.fresh_stack_variable()
        return FunctionType(
            Vector([*f.consumption, rest]),
            Vector([*f.production, rest]),
            f.has_side_effects,
        )


def _close(f: FunctionType) -> FunctionType:
    consumption, production = f.consumption, f.production
    if not (consumption.is_open() and production.is_open()):
        return f
    rest = consumption[-1]
    if rest != production[-1]:
        return f
    occurrences = sum(1 for v in f.variables() if v == rest)
    if occurrences != 2:
        return f
    return FunctionType(
        consumption[:-1], production[:-1], f.has_side_effects
    )


def _letters(n: int) -> str:
    suffix = str(n // 26) if n >= 26 else ''
    return string.ascii_lowercase[n % 26] + suffix
