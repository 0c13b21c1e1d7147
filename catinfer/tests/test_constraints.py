import unittest

from catinfer.tests.strategies import item_strategy
from catinfer.typecheck.constraints import Constraints
from catinfer.typecheck.kinds import (
    FunctionType,
    Kind,
    StackVariable,
    TypeVariable,
    Vector,
    bool_type,
    int_type,
    string_type,
)
from catinfer.typecheck.unifiers import Unifier
from hypothesis import given

a = TypeVariable("'a")
b = TypeVariable("'b")
c = TypeVariable("'c")
B = StackVariable("'B")
C = StackVariable("'C")


def new_store() -> Constraints:
    return Unifier().constraints


class TestAdd(unittest.TestCase):
    @given(item_strategy)
    def test_singleton_vectors_collapse(self, kind: Kind) -> None:
        constraints = new_store()
        constraints.add("'x", Vector([kind]))
        self.assertEqual(constraints["'x"], [kind])

    def test_no_self_constraint(self) -> None:
        constraints = new_store()
        constraints.add("'a", a)
        self.assertNotIn("'a", constraints)
        self.assertEqual(list(constraints.classes()), [])

    def test_singleton_of_self_is_still_self(self) -> None:
        constraints = new_store()
        constraints.add("'B", Vector([B]))
        self.assertNotIn("'B", constraints)

    def test_duplicates_are_suppressed(self) -> None:
        constraints = new_store()
        constraints.add("'a", int_type)
        constraints.add("'a", int_type)
        constraints.add("'a", Vector([int_type]))
        self.assertEqual(constraints["'a"], [int_type])

    def test_structurally_equal_vectors_are_duplicates(self) -> None:
        constraints = new_store()
        constraints.add("'B", Vector([int_type, bool_type]))
        constraints.add("'B", Vector([int_type, bool_type]))
        self.assertEqual(constraints["'B"], [Vector([int_type, bool_type])])


class TestClasses(unittest.TestCase):
    def test_variables_share_a_class_both_ways(self) -> None:
        constraints = new_store()
        constraints.add("'a", b)
        self.assertEqual(
            constraints.class_id("'a"), constraints.class_id("'b")
        )
        self.assertIs(constraints["'a"], constraints["'b"])
        self.assertEqual(constraints["'b"], [b])

    def test_merge_repoints_every_name(self) -> None:
        constraints = new_store()
        constraints.add("'a", int_type)
        constraints.add("'b", bool_type)
        constraints.add("'c", b)
        constraints.add("'a", b)
        ids = {constraints.class_id(name) for name in ["'a", "'b", "'c"]}
        self.assertEqual(len(ids), 1)
        self.assertEqual(constraints["'c"], [int_type, bool_type, b])
        self.assertEqual(len(list(constraints.classes())), 1)

    def test_chain_of_variables(self) -> None:
        constraints = new_store()
        constraints.add("'a", b)
        constraints.add("'b", c)
        constraints.add("'c", string_type)
        self.assertIn(string_type, constraints["'a"])
        self.assertEqual(set(constraints.names()), {"'a", "'b", "'c"})

    def test_clear(self) -> None:
        constraints = new_store()
        constraints.add("'a", b)
        constraints.clear()
        self.assertNotIn("'a", constraints)
        self.assertEqual(list(constraints.items()), [])

    def test_str_lists_one_class_per_line(self) -> None:
        constraints = new_store()
        constraints.add("'a", int_type)
        constraints.add("'b", bool_type)
        self.assertEqual(str(constraints), 'int\nbool')


class TestUnificationOnAdmission(unittest.TestCase):
    def test_function_members_are_unified(self) -> None:
        constraints = new_store()
        constraints.add("'f", FunctionType([a], [int_type]))
        constraints.add("'f", FunctionType([bool_type], [b]))
        self.assertEqual(constraints["'a"], [bool_type])
        self.assertEqual(constraints["'b"], [int_type])
        self.assertEqual(len(constraints["'f"]), 2)

    def test_vector_members_are_unified(self) -> None:
        constraints = new_store()
        constraints.add("'A", Vector([int_type, B]))
        constraints.add("'A", Vector([a, C]))
        self.assertEqual(constraints["'a"], [int_type])
        self.assertEqual(
            constraints.class_id("'B"), constraints.class_id("'C")
        )
