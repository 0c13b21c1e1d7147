import unittest

import catinfer.primitives
from catinfer.parse import parse_signature
from catinfer.reporting import dump_types, type_query
from catinfer.typecheck import TypeInferer
from catinfer.typecheck.env import Environment


class TestTypeQuery(unittest.TestCase):
    def setUp(self) -> None:
        self.env = catinfer.primitives.environment()

    def test_dup_then_eq(self) -> None:
        env = Environment(
            {
                'dup': parse_signature("('a -> 'a 'a)"),
                'eq': parse_signature("('a 'a -> bool)"),
            }
        )
        self.assertEqual(type_query('dup eq', env), "[dup eq] : ('a -> bool)")

    def test_quotations_are_shown(self) -> None:
        self.assertEqual(
            type_query('[1] eval', self.env), '[[1] eval] : ( -> int)'
        )

    def test_mismatch(self) -> None:
        self.assertEqual(
            type_query('1 "s" add_int', self.env),
            'type could not be inferred: string is not compatible with int '
            'at line 1, column 7',
        )

    def test_recursive_type(self) -> None:
        result = type_query('[dup] [pop] if', self.env)
        self.assertTrue(result.startswith('type could not be inferred: '))
        self.assertIn('recursive type', result)
        self.assertTrue(result.endswith('at line 1, column 13'))

    def test_emptied_stack(self) -> None:
        self.assertEqual(
            type_query('clear 1', self.env), "[clear 1] : ('A -> int)"
        )

    def test_unknown_word(self) -> None:
        self.assertEqual(
            type_query('frob', self.env),
            "type could not be inferred: name 'frob' not previously defined "
            'at line 1, column 1',
        )

    def test_syntax_error(self) -> None:
        result = type_query('[1 2', self.env)
        self.assertTrue(result.startswith('type could not be inferred: '))

    def test_inferer_numbering_restarts(self) -> None:
        inferer = TypeInferer(self.env)
        first = type_query('swap', inferer=inferer)
        self.assertEqual(type_query('swap', inferer=inferer), first)
        self.assertEqual(inferer.fresh_type_variable().name, "'t5")


class TestDumpTypes(unittest.TestCase):
    def test_lines(self) -> None:
        lines = list(
            dump_types(
                {
                    'dup': "('R 'a -> 'R 'a 'a)",
                    'mystery': 'untyped',
                    'broken': "('a 'b)",
                    'write': "('a ~> )",
                }
            )
        )
        self.assertEqual(len(lines), 3)
        self.assertEqual(
            lines[0], "dup\t('R 'a -> 'R 'a 'a)\t('R 'a -> 'R 'a 'a)"
        )
        self.assertTrue(lines[1].startswith("broken\t('a 'b)\terror:"))
        self.assertEqual(lines[2], "write\t('a ~> )\t('a ~> )")

    def test_bad_signature_is_logged(self) -> None:
        with self.assertLogs('catinfer.reporting', 'WARNING') as cm:
            list(dump_types({'bad': "('a 'R -> )"}))
        self.assertIn('bad signature for bad', cm.output[0])

    def test_every_primitive_has_a_valid_signature(self) -> None:
        signatures = catinfer.primitives.signatures()
        lines = list(dump_types(signatures))
        self.assertEqual(len(lines), len(signatures))
        for line in lines:
            with self.subTest(line=line):
                self.assertNotIn('\terror:', line)

    def test_labels_are_dropped_from_canonical_form(self) -> None:
        (line,) = dump_types(
            {'hash_set': '(hash_list key=var value=var -> hash_list)'}
        )
        self.assertEqual(
            line.split('\t')[2], '(hash_list var var -> hash_list)'
        )
