import logging
import unittest

from catinfer.logging import InferenceLogger


class _CountingStr:
    def __init__(self) -> None:
        self.calls = 0

    def __str__(self) -> str:
        self.calls += 1
        return 'counted'


class TestInferenceLogger(unittest.TestCase):
    def setUp(self) -> None:
        self.logger = InferenceLogger(logging.getLogger('catinfer.test'))

    def test_str_format_syntax(self) -> None:
        with self.assertLogs('catinfer.test', 'INFO') as cm:
            self.logger.info('{} then {second}', 'first', second=2)
        self.assertEqual(cm.output, ['INFO:catinfer.test:first then 2'])

    def test_formatting_is_delayed(self) -> None:
        counted = _CountingStr()
        with self.assertLogs('catinfer.test', 'WARNING'):
            self.logger.debug('{}', counted)
            self.logger.warning('emitted')
        self.assertEqual(counted.calls, 0)

    def test_exc_info(self) -> None:
        with self.assertLogs('catinfer.test', 'ERROR') as cm:
            try:
                raise ValueError('boom')
            except ValueError:
                self.logger.error('failed: {}', 'x', exc_info=True)
        self.assertIsNotNone(cm.records[0].exc_info)
        self.assertEqual(cm.records[0].getMessage(), 'failed: x')

    def test_is_enabled_for(self) -> None:
        self.logger.logger.setLevel(logging.WARNING)
        self.addCleanup(self.logger.logger.setLevel, logging.NOTSET)
        self.assertFalse(self.logger.is_enabled_for(logging.DEBUG))
        self.assertTrue(self.logger.is_enabled_for(logging.ERROR))
