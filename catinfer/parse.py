"""The parser for stack-effect signatures and programs.

On Extensibility:

The parser uses parsy, a parser combinator library, over the tokens produced
by catinfer.lex.

- The extension mechanism:
Assume there is an existing kind parser, like:

def kind_ext(parsers):
    parsers['kind'] |= extensionParser

parsers.extend_with(kind_ext)

The parsers object is a dictionary with a few methods:
extend_with(extension) -- mutates the dictionary by adding the extension
"""

from __future__ import annotations

import abc
import ast
from typing import (
    Any,
    Callable,
    Dict,
    Generator,
    Iterable,
    List,
    Optional,
    Sequence,
)

import parsy
from typing_extensions import Self

import catinfer.lex
from catinfer.lex import Token
from catinfer.location import Location, format_location
from catinfer.typecheck.errors import SignatureParseError, StaticAnalysisError
from catinfer.typecheck.kinds import (
    FunctionType,
    Kind,
    SelfType,
    SimpleType,
    StackVariable,
    TypeVariable,
    Vector,
)


class Node(abc.ABC):
    def __init__(self, location: Location, children: Iterable[Node] = ()):
        self.location = location
        self.children = list(children)


# Kinds


class KindNode(Node, abc.ABC):
    @abc.abstractmethod
    def to_kind(self) -> Kind:
        pass


class NamedKindNode(KindNode):
    def __init__(self, name: Token) -> None:
        super().__init__(name.start)
        self.name = name.value

    def to_kind(self) -> Kind:
        if self.name == 'self':
            return SelfType()
        return SimpleType(self.name)

    def __repr__(self) -> str:
        return '{}({!r}, {!r})'.format(
            type(self).__qualname__, self.location, self.name
        )


class VariableNode(KindNode):
    """A type variable ('a) or, when capitalized, a stack variable ('A)."""

    def __init__(self, variable: Token) -> None:
        super().__init__(variable.start)
        self.name = variable.value

    @property
    def is_stack_variable(self) -> bool:
        return self.name[1].isupper()

    def to_kind(self) -> Kind:
        if self.is_stack_variable:
            return StackVariable(self.name)
        return TypeVariable(self.name)

    def __repr__(self) -> str:
        return '{}({!r}, {!r})'.format(
            type(self).__qualname__, self.location, self.name
        )


class LabeledKindNode(Node):
    """An item of a kind sequence, optionally labeled as in body=('A -> 'A).

    Labels document a slot and take no part in inference."""

    def __init__(
        self, label: Optional[Token], kind: KindNode, location: Location
    ) -> None:
        super().__init__(location, [kind])
        self.label = None if label is None else label.value
        self.kind = kind


class KindSequenceNode(Node):
    def __init__(
        self, location: Location, items: Sequence[LabeledKindNode]
    ) -> None:
        super().__init__(location, items)
        self.items = tuple(items)

    def to_kind(self) -> Vector:
        # Sequences are written bottom first.
        try:
            return Vector.from_bottom_first(
                item.kind.to_kind() for item in self.items
            )
        except StaticAnalysisError as e:
            e.set_location_if_missing(self.location)
            raise


class FunctionKindNode(KindNode):
    def __init__(
        self,
        location: Location,
        consumption: KindSequenceNode,
        production: KindSequenceNode,
        has_side_effects: bool,
    ) -> None:
        super().__init__(location, [consumption, production])
        self.consumption = consumption
        self.production = production
        self.has_side_effects = has_side_effects

    def to_kind(self) -> FunctionType:
        return FunctionType(
            self.consumption.to_kind(),
            self.production.to_kind(),
            self.has_side_effects,
        )


# Words


class WordNode(Node, abc.ABC):
    pass


class NumberWordNode(WordNode):
    def __init__(self, number: Token) -> None:
        super().__init__(number.start)
        self.value = ast.literal_eval(number.value)
        self._text = number.value

    def __str__(self) -> str:
        return self._text


class StringWordNode(WordNode):
    def __init__(self, string: Token) -> None:
        super().__init__(string.start)
        self.value = ast.literal_eval(string.value)
        self._text = string.value

    def __str__(self) -> str:
        return self._text


class CharWordNode(WordNode):
    def __init__(self, char: Token) -> None:
        super().__init__(char.start)
        self.value = ast.literal_eval(char.value)
        self._text = char.value

    def __str__(self) -> str:
        return self._text


class NameWordNode(WordNode):
    def __init__(self, name: Token) -> None:
        super().__init__(name.start)
        self.value = name.value

    def __str__(self) -> str:
        return self.value


class QuoteWordNode(WordNode):
    def __init__(
        self, children: Sequence[WordNode], location: Location
    ) -> None:
        super().__init__(location, children)

    def __str__(self) -> str:
        return '[' + ' '.join(map(str, self.children)) + ']'


class ParserDict(Dict[str, parsy.Parser]):
    """A dictionary to hold named references to parsers.

    These references can be indirect, meaning you can add a new alternative to
    a parser, and the other parsers that use it will pick up that change.
    """

    def extend_with(self, extension: Callable[[Self], None]) -> None:
        extension(self)

    def parse(self, name: str, tokens: Sequence[Token]) -> Any:
        parser = self[name] << self.token('ENDMARKER')
        return parser.parse(list(tokens))

    def token(self, typ: str) -> parsy.Parser:
        description = '{} token'.format(typ)
        return parsy.test_item(lambda token: token.type == typ, description)

    def ref_parser(self, name: str) -> parsy.Parser:
        @parsy.generate
        def parser() -> Generator:
            return (yield self[name])

        return parser


@parsy.Parser
def _location_parser(stream: Sequence[Token], index: int) -> parsy.Result:
    # Every token stream ends with ENDMARKER, so there is always a token here.
    return parsy.Result.success(index, stream[index].start)


def signature_extension(parsers: ParserDict) -> None:
    # function type = '(', kind sequence, ('->' | '~>'), kind sequence, ')' ;
    @parsy.generate
    def function_type_parser() -> Generator[parsy.Parser, Any, KindNode]:
        location = (yield parsers.token('LPAR')).start
        consumption = yield parsers['kind-sequence']
        arrow = yield parsers.token('ARROW') | parsers.token('EFFECT_ARROW')
        production = yield parsers['kind-sequence']
        yield parsers.token('RPAR')
        return FunctionKindNode(
            location, consumption, production, arrow.type == 'EFFECT_ARROW'
        )

    parsers['function-type'] = function_type_parser

    parsers['kind'] = parsy.alt(
        parsers.ref_parser('function-type'),
        parsers.token('VARIABLE').map(VariableNode),
        parsers.token('NAME').map(NamedKindNode),
    )

    # labeled kind = [ NAME, '=' ], kind ;
    @parsy.generate
    def labeled_kind_parser() -> Generator[parsy.Parser, Any, Node]:
        label = yield (
            parsers.token('NAME') << parsers.token('EQUAL')
        ).optional()
        kind = yield parsers['kind']
        location = kind.location if label is None else label.start
        return LabeledKindNode(label, kind, location)

    @parsy.generate('kind sequence')
    def kind_sequence_parser() -> Generator[parsy.Parser, Any, Node]:
        location = yield _location_parser
        items = yield labeled_kind_parser.many()
        return KindSequenceNode(location, items)

    parsers['kind-sequence'] = kind_sequence_parser


def program_extension(parsers: ParserDict) -> None:
    # quote = '[', program, ']' ;
    @parsy.generate
    def quote_word_parser() -> Generator[parsy.Parser, Any, WordNode]:
        location = (yield parsers.token('LSQB')).start
        children = yield parsers.ref_parser('program')
        yield parsers.token('RSQB')
        return QuoteWordNode(children, location)

    parsers['word'] = parsy.alt(
        parsers.token('NUMBER').map(NumberWordNode),
        parsers.token('STRING').map(StringWordNode),
        parsers.token('CHAR').map(CharWordNode),
        parsers.token('NAME').map(NameWordNode),
        quote_word_parser,
    )

    parsers['program'] = parsers.ref_parser('word').many()


def build_parsers() -> ParserDict:
    parsers = ParserDict()
    parsers.extend_with(signature_extension)
    parsers.extend_with(program_extension)
    return parsers


_parsers = build_parsers()


def parse_signature(signature: str) -> FunctionType:
    """Parse a signature such as ('R 'a -> 'R 'a 'a) into a function type."""
    node = _parse('function-type', signature)
    return node.to_kind()


def parse_program(program: str) -> List[WordNode]:
    return _parse('program', program)


def _parse(name: str, source: str) -> Any:
    tokens = catinfer.lex.tokenize(source)
    try:
        return _parsers.parse(name, tokens)
    except parsy.ParseError as e:
        raise SignatureParseError(
            create_parsing_failure_message(source, tokens, e)
        ) from e


def create_parsing_failure_message(
    source: str, stream: Sequence[Token], failure: parsy.ParseError
) -> str:
    if failure.index < len(stream):
        location = stream[failure.index].start
    elif stream:
        location = stream[-1].start
    else:
        location = (1, 0)
    lines = source.splitlines() or ['']
    line = lines[min(location[0], len(lines)) - 1]
    expected = ' or '.join(sorted(failure.expected))
    return (
        f'Expected {expected} at {format_location(location)}:\n'
        f'{line.rstrip()}\n'
        f'{" " * location[1]}^'
    )
