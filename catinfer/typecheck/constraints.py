"""The constraint store.

Every variable name belongs to an equivalence class: the list of kinds the
variable must be equal to. Variables constrained to each other share one
class. Classes live in an arena and are merged union-find style, so once two
classes are merged every name that referred to either of them finds the same
canonical class.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Dict, Iterator, List, Tuple

from catinfer.typecheck.kinds import FunctionType, Kind, Vector

if TYPE_CHECKING:
    from catinfer.typecheck.unifiers import Unifier


class Constraints:
    def __init__(self, unifier: Unifier) -> None:
        # Admitting a composite kind unifies it against the other members of
        # its class, which needs the unifier that owns this store.
        self._unifier = unifier
        self._members: List[List[Kind]] = []
        self._parents: List[int] = []
        self._class_of: Dict[str, int] = {}

    def add(self, name: str, kind: Kind) -> None:
        """Constrain the variable called name to be equal to kind."""
        if str(kind) == name:
            return
        if isinstance(kind, Vector) and len(kind) == 1:
            # vectors with only one thing are really that thing
            self.add(name, kind.top)
            return
        index = self._ensure_class(name)
        if kind.is_variable():
            if str(kind) in self._class_of:
                self._merge(str(kind), index)
            else:
                self._class_of[str(kind)] = index
        self._admit(index, kind)

    def __contains__(self, name: object) -> bool:
        return name in self._class_of

    def __getitem__(self, name: str) -> List[Kind]:
        return self._members[self._find(self._class_of[name])]

    def items(self) -> Iterator[Tuple[str, List[Kind]]]:
        for name in list(self._class_of):
            yield name, self[name]

    def names(self) -> Iterator[str]:
        return iter(list(self._class_of))

    def class_id(self, name: str) -> int:
        """An identifier shared by all names in the same class."""
        return self._find(self._class_of[name])

    def classes(self) -> Iterator[List[Kind]]:
        for index, parent in enumerate(self._parents):
            if index == parent:
                yield self._members[index]

    def clear(self) -> None:
        self._members.clear()
        self._parents.clear()
        self._class_of.clear()

    def __str__(self) -> str:
        return '\n'.join(
            ' = '.join(str(kind) for kind in members)
            for members in self.classes()
        )

    def _ensure_class(self, name: str) -> int:
        if name not in self._class_of:
            self._class_of[name] = len(self._members)
            self._members.append([])
            self._parents.append(len(self._parents))
        return self._find(self._class_of[name])

    def _find(self, index: int) -> int:
        root = index
        while self._parents[root] != root:
            root = self._parents[root]
        while self._parents[index] != root:
            self._parents[index], index = root, self._parents[index]
        return root

    def _merge(self, name: str, destination: int) -> None:
        """Merge the class of name into the destination class."""
        if name not in self._class_of:
            return
        source = self._find(self._class_of[name])
        destination = self._find(destination)
        if source == destination:
            return
        # Retiring the source first repoints every name that referred to it.
        self._parents[source] = destination
        drained = self._members[source]
        # Each admission can unify and merge again, so the members are moved
        # one at a time instead of concatenated.
        while drained:
            self._admit(destination, drained.pop(0))

    def _admit(self, index: int, kind: Kind) -> None:
        members = self._members[self._find(index)]
        if kind in members:
            return
        if isinstance(kind, FunctionType):
            for other in [m for m in members if isinstance(m, FunctionType)]:
                self._unifier.add_function_constraint(kind, other)
        elif isinstance(kind, Vector):
            for other in [m for m in members if isinstance(m, Vector)]:
                self._unifier.add_vector_constraint(kind, other)
        # The unification above may have merged this class into another one.
        index = self._find(index)
        members = self._members[index]
        if kind in members:
            return
        members.append(kind)
        if kind.is_variable():
            self._class_of.setdefault(str(kind), index)
            self._merge(str(kind), index)
