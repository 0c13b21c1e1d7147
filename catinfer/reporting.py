"""The interactive type query and the batch type dump."""

from __future__ import annotations

import logging
from typing import Iterator, Mapping, Optional

from catinfer.logging import InferenceLogger
from catinfer.parse import parse_program, parse_signature
from catinfer.typecheck import TypeInferer
from catinfer.typecheck.env import Environment
from catinfer.typecheck.errors import StaticAnalysisError

_logger = InferenceLogger(logging.getLogger(__name__))

UNTYPED = 'untyped'


def type_query(
    program: str,
    env: Optional[Environment] = None,
    inferer: Optional[TypeInferer] = None,
) -> str:
    """Infer the type of a program and describe it in one line.

    The result looks like '[dup eq] : ('a -> bool)'. When the program has no
    type, the reason is reported instead of raised."""
    if inferer is None:
        inferer = TypeInferer(env)
    inferer.reset()
    try:
        words = parse_program(program)
        effect = inferer.normalize(inferer.infer(words))
    except StaticAnalysisError as e:
        _logger.debug('type query failed', exc_info=True)
        return 'type could not be inferred: {}'.format(e)
    text = ' '.join(map(str, words))
    return '[{}] : {}'.format(text, effect)


def dump_types(signatures: Mapping[str, str]) -> Iterator[str]:
    """Yield one tab-separated line per declared signature.

    Each line holds the name, the declared signature and either its
    canonical form or 'error:' followed by why it could not be read."""
    for name, signature in signatures.items():
        if signature == UNTYPED:
            continue
        try:
            canonical = str(parse_signature(signature))
        except StaticAnalysisError as e:
            _logger.warning('bad signature for {}: {}', name, e)
            yield '{}\t{}\terror:{}'.format(name, signature, e)
        else:
            yield '{}\t{}\t{}'.format(name, signature, canonical)
