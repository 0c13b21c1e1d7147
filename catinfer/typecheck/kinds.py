"""The kind model: the nodes of stack-effect type trees.

Kinds are immutable values. Two kinds are equal when they have the same
variant and the same structure, so separately built vectors with the same
contents are interchangeable as constraints.
"""

from __future__ import annotations

import abc
from typing import (
    Dict,
    Iterable,
    Iterator,
    Mapping,
    Optional,
    Tuple,
    Union,
    overload,
)

from catinfer.typecheck.errors import MisplacedStackVariableError


class Kind(abc.ABC):
    def is_variable(self) -> bool:
        return False

    def is_composite(self) -> bool:
        return False

    def is_subtype_of(
        self, supertype: Kind, lattice: Optional[SubtypeLattice] = None
    ) -> bool:
        lattice = lattice or default_lattice
        if supertype == self:
            return True
        return isinstance(supertype, SimpleType) and lattice.is_top(
            supertype.name
        )

    def variables(self) -> Iterator[_Variable]:
        """Yield the variables of this kind in the order they are written."""
        return iter(())

    @abc.abstractmethod
    def apply_substitution(self, sub: Mapping[str, Kind]) -> Kind:
        pass

    @abc.abstractmethod
    def _as_tuple(self) -> Tuple[object, ...]:
        pass

    @abc.abstractmethod
    def __str__(self) -> str:
        pass

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Kind):
            return NotImplemented
        return type(self) is type(other) and self._as_tuple() == (
            other._as_tuple()
        )

    def __hash__(self) -> int:
        return hash((type(self).__qualname__, self._as_tuple()))


class SimpleType(Kind):
    """A concrete nominal type such as int or bool."""

    def __init__(self, name: str) -> None:
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    def is_subtype_of(
        self, supertype: Kind, lattice: Optional[SubtypeLattice] = None
    ) -> bool:
        lattice = lattice or default_lattice
        if isinstance(supertype, SimpleType):
            return lattice.is_subtype(self._name, supertype.name)
        return super().is_subtype_of(supertype, lattice)

    def apply_substitution(self, sub: Mapping[str, Kind]) -> Kind:
        return self

    def _as_tuple(self) -> Tuple[object, ...]:
        return (self._name,)

    def __str__(self) -> str:
        return self._name

    def __repr__(self) -> str:
        return '{}({!r})'.format(type(self).__qualname__, self._name)


class _Variable(Kind, abc.ABC):
    """A named polymorphic placeholder.

    The canonical string of a variable is its name, quote included, and it is
    the variable's identity in the constraint store."""

    def __init__(self, name: str) -> None:
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    def is_variable(self) -> bool:
        return True

    def variables(self) -> Iterator[_Variable]:
        yield self

    def apply_substitution(self, sub: Mapping[str, Kind]) -> Kind:
        return sub.get(self._name, self)

    def _as_tuple(self) -> Tuple[object, ...]:
        return (self._name,)

    def __str__(self) -> str:
        return self._name

    def __repr__(self) -> str:
        return '{}({!r})'.format(type(self).__qualname__, self._name)


class TypeVariable(_Variable):
    """Stands for the type of exactly one stack slot."""


class StackVariable(_Variable):
    """Stands for an arbitrary suffix of a stack."""


class Vector(Kind):
    """A stack of kinds, top of the stack first.

    Vectors are written bottom first, so str() reverses the order."""

    def __init__(self, kinds: Iterable[Kind] = ()) -> None:
        self._kinds = tuple(kinds)
        for kind in self._kinds[:-1]:
            if isinstance(kind, StackVariable):
                raise MisplacedStackVariableError(kind)

    @classmethod
    def from_bottom_first(cls, kinds: Iterable[Kind]) -> Vector:
        return cls(reversed(list(kinds)))

    def is_composite(self) -> bool:
        return True

    def is_empty(self) -> bool:
        return not self._kinds

    def is_open(self) -> bool:
        """Whether the bottom of the stack is a stack variable."""
        return bool(self._kinds) and isinstance(self._kinds[-1], StackVariable)

    @property
    def top(self) -> Kind:
        return self._kinds[0]

    @property
    def rest(self) -> Vector:
        return Vector(self._kinds[1:])

    @property
    def kinds(self) -> Tuple[Kind, ...]:
        return self._kinds

    def variables(self) -> Iterator[_Variable]:
        for kind in reversed(self._kinds):
            yield from kind.variables()

    def apply_substitution(self, sub: Mapping[str, Kind]) -> Vector:
        kinds = []
        for kind in self._kinds:
            new_kind = kind.apply_substitution(sub)
            # A stack variable stands for a whole suffix, so its replacement
            # is spliced in rather than nested.
            if isinstance(kind, StackVariable) and isinstance(
                new_kind, Vector
            ):
                kinds.extend(new_kind.kinds)
            else:
                kinds.append(new_kind)
        return Vector(kinds)

    def __len__(self) -> int:
        return len(self._kinds)

    def __iter__(self) -> Iterator[Kind]:
        return iter(self._kinds)

    @overload
    def __getitem__(self, key: int) -> Kind:
        ...

    @overload
    def __getitem__(self, key: slice) -> Vector:
        ...

    def __getitem__(self, key: Union[int, slice]) -> Union[Kind, Vector]:
        if isinstance(key, slice):
            return Vector(self._kinds[key])
        return self._kinds[key]

    def _as_tuple(self) -> Tuple[object, ...]:
        return self._kinds

    def __str__(self) -> str:
        return ' '.join(str(kind) for kind in reversed(self._kinds))

    def __repr__(self) -> str:
        return '{}({!r})'.format(type(self).__qualname__, list(self._kinds))


class FunctionType(Kind):
    """A stack effect: the stack it consumes and the stack it produces."""

    def __init__(
        self,
        consumption: Iterable[Kind],
        production: Iterable[Kind],
        has_side_effects: bool = False,
    ) -> None:
        if not isinstance(consumption, Vector):
            consumption = Vector(consumption)
        if not isinstance(production, Vector):
            production = Vector(production)
        self._consumption = consumption
        self._production = production
        self._has_side_effects = has_side_effects

    @property
    def consumption(self) -> Vector:
        return self._consumption

    @property
    def production(self) -> Vector:
        return self._production

    @property
    def has_side_effects(self) -> bool:
        return self._has_side_effects

    def is_composite(self) -> bool:
        return True

    def is_subtype_of(
        self, supertype: Kind, lattice: Optional[SubtypeLattice] = None
    ) -> bool:
        if supertype == function_type:
            return True
        return super().is_subtype_of(supertype, lattice)

    def variables(self) -> Iterator[_Variable]:
        yield from self._consumption.variables()
        yield from self._production.variables()

    def apply_substitution(self, sub: Mapping[str, Kind]) -> Kind:
        return FunctionType(
            self._consumption.apply_substitution(sub),
            self._production.apply_substitution(sub),
            self._has_side_effects,
        )

    def _as_tuple(self) -> Tuple[object, ...]:
        return (self._consumption, self._production, self._has_side_effects)

    def __str__(self) -> str:
        arrow = '~>' if self._has_side_effects else '->'
        return '({} {} {})'.format(self._consumption, arrow, self._production)

    def __repr__(self) -> str:
        return '{}({!r}, {!r}, has_side_effects={!r})'.format(
            type(self).__qualname__,
            self._consumption,
            self._production,
            self._has_side_effects,
        )


class SelfType(FunctionType):
    """The type of the function currently being inferred.

    Unification treats it as compatible with any function type and never
    looks inside it, which stops recursive definitions from descending
    forever."""

    def __init__(self) -> None:
        super().__init__(Vector(), Vector())

    def apply_substitution(self, sub: Mapping[str, Kind]) -> Kind:
        return self

    def _as_tuple(self) -> Tuple[object, ...]:
        return ()

    def __str__(self) -> str:
        return 'self'

    def __repr__(self) -> str:
        return 'SelfType()'


class SubtypeLattice:
    """The subtype order over nominal type names.

    Every name registered here points to its direct supertype. Names that are
    not registered are direct subtypes of the top."""

    def __init__(
        self,
        supertypes: Optional[Mapping[str, str]] = None,
        top_names: Iterable[str] = ('any', 'var'),
    ) -> None:
        self._supertypes: Dict[str, str] = dict(supertypes or {})
        self._top_names = frozenset(top_names)

    @property
    def top(self) -> SimpleType:
        return any_type

    def is_top(self, name: str) -> bool:
        return name in self._top_names

    def register(self, name: str, supertype: str) -> None:
        self._supertypes[name] = supertype

    def is_subtype(self, subtype: str, supertype: str) -> bool:
        if subtype == supertype or self.is_top(supertype):
            return True
        seen = {subtype}
        name = subtype
        while name in self._supertypes:
            name = self._supertypes[name]
            if name == supertype:
                return True
            if name in seen:
                break
            seen.add(name)
        return False


any_type = SimpleType('any')
bool_type = SimpleType('bool')
char_type = SimpleType('char')
float_type = SimpleType('float')
function_type = SimpleType('function')
int_type = SimpleType('int')
list_type = SimpleType('list')
string_type = SimpleType('string')
type_type = SimpleType('type')

default_lattice = SubtypeLattice({'istream': 'stream', 'ostream': 'stream'})
