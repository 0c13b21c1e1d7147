from __future__ import annotations

import builtins
from typing import TYPE_CHECKING, Optional

from catinfer.location import Location, format_location

if TYPE_CHECKING:
    from catinfer.typecheck.kinds import Kind


class StaticAnalysisError(Exception):
    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message
        self.location: Optional[Location] = None

    def set_location_if_missing(self, location: Location) -> None:
        if not self.location:
            self.location = location

    def __str__(self) -> str:
        if self.location is None:
            return self.message
        return '{} at {}'.format(self.message, format_location(self.location))


class TypeError(StaticAnalysisError, builtins.TypeError):
    pass


class KindMismatchError(TypeError):
    """Two concrete kinds are not related by subtyping in either direction.

    Raised by the unifier. This is recoverable: the caller decides whether
    to abandon one item or report a single failure."""

    def __init__(
        self, kind1: Kind, kind2: Kind, message: Optional[str] = None
    ) -> None:
        super().__init__(message or format_kind_mismatch_error(kind1, kind2))
        self.kind1 = kind1
        self.kind2 = kind2

    def __repr__(self) -> str:
        return f'KindMismatchError({self.kind1!r}, {self.kind2!r})'


class OccursCheckError(TypeError):
    """A variable would have to contain itself, as in 'A = 'A int."""

    def __init__(self, name: str, kind: Kind) -> None:
        super().__init__(format_occurs_error(name, kind))
        self.name = name
        self.kind = kind


class NameError(StaticAnalysisError, builtins.NameError):
    def __init__(self, name: str, location: Optional[Location] = None) -> None:
        super().__init__(f'name {name!r} not previously defined')
        self.name = name
        self.location = location


class LexicalError(StaticAnalysisError):
    def __init__(self, character: str, location: Location) -> None:
        super().__init__(f'unexpected character {character!r}')
        self.location = location


class SignatureParseError(StaticAnalysisError):
    pass


class MisplacedStackVariableError(StaticAnalysisError, builtins.ValueError):
    def __init__(self, variable: Kind) -> None:
        super().__init__(
            f'stack variable {variable} must be at the bottom of the stack'
        )
        self.variable = variable


class UnsupportedKindPairingError(builtins.NotImplementedError):
    """The resolver met two kinds it has no rule for.

    This means an invariant was broken upstream, so the inference pass cannot
    be trusted and must be abandoned."""

    def __init__(self, kind1: Kind, kind2: Kind) -> None:
        super().__init__(
            'Unsupported kinds {}:{} and {}:{}'.format(
                kind1,
                type(kind1).__qualname__,
                kind2,
                type(kind2).__qualname__,
            )
        )


def format_kind_mismatch_error(kind1: Kind, kind2: Kind) -> str:
    return f'{kind1} is not compatible with {kind2}'


def format_widening_warning(kind1: Kind, kind2: Kind) -> str:
    return (
        f'unifying over \'any\': {format_kind_mismatch_error(kind1, kind2)}'
    )


def format_arity_mismatch_error(shorter: Kind, longer: Kind) -> str:
    return f'{shorter} has fewer items than {longer} and no stack variable'


def format_occurs_error(name: str, kind: Kind) -> str:
    return (
        f'{name} cannot be bound to {kind} because it would form a recursive '
        'type'
    )


class UnhandledNodeTypeError(builtins.NotImplementedError):
    pass
