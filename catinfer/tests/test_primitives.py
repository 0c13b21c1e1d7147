import unittest

from catinfer.parse import parse_signature
from catinfer.primitives import environment, primitives, signatures


class TestPrimitives(unittest.TestCase):
    def test_environment_has_every_primitive(self) -> None:
        env = environment()
        self.assertEqual(set(env), set(primitives))
        self.assertEqual(env['dup'], parse_signature("('R 'a -> 'R 'a 'a)"))

    def test_console_words_have_side_effects(self) -> None:
        env = environment()
        for name in ['write', 'writeln', 'readln', 'read']:
            with self.subTest(name=name):
                self.assertTrue(env[name].has_side_effects)
        self.assertFalse(env['add_int'].has_side_effects)

    def test_every_primitive_is_described(self) -> None:
        for name, primitive in primitives.items():
            with self.subTest(name=name):
                self.assertTrue(primitive.description)

    def test_signatures(self) -> None:
        self.assertEqual(signatures()['pop'], "('R 'a -> 'R)")
