"""Declared stack effects of the standard library primitives.

Only the signatures are provided; these words cannot be run."""

from __future__ import annotations

from typing import Mapping, NamedTuple

from catinfer.parse import parse_signature
from catinfer.typecheck.env import Environment


class Primitive(NamedTuple):
    signature: str
    description: str


primitives: Mapping[str, Primitive] = {
    # Conversions
    'str': Primitive(
        '(var -> string)', 'converts any value into a string representation'
    ),
    'to_byte': Primitive(
        '(int -> byte)',
        'converts an integer into a byte, throwing away sign and ignoring '
        'higher bits',
    ),
    'bin_str': Primitive(
        '(int -> string)',
        'converts a number into a binary string representation',
    ),
    'hex_str': Primitive(
        '(int -> string)',
        'converts a number into a hexadecimal string representation',
    ),
    # Stack shuffling
    'id': Primitive(
        "('a -> 'a)", 'does nothing, but requires one item on the stack'
    ),
    'eq': Primitive(
        '(var var -> bool)',
        'returns true if both items on stack are the same type, and have '
        'same value',
    ),
    'dup': Primitive(
        "('R 'a -> 'R 'a 'a)", 'duplicate the top item on the stack'
    ),
    'pop': Primitive("('R 'a -> 'R)", 'removes the top item from the stack'),
    'swap': Primitive(
        "('R 'a 'b -> 'R 'b 'a)", 'swap the top two items on the stack'
    ),
    'clear': Primitive("('A -> )", 'removes all items from the stack'),
    # Combinators
    'eval': Primitive("('A ('A -> 'B) -> 'B)", 'evaluates a function'),
    'dip': Primitive(
        "('A 'b ('A -> 'C) -> 'C 'b)",
        'evaluates function, temporarily removing second item',
    ),
    'compose': Primitive(
        "('R ('A -> 'B) ('B -> 'C) -> 'R ('A -> 'C))",
        'creates a function by composing (concatenating) two existing '
        'functions',
    ),
    'qv': Primitive(
        "('R 'a -> 'R ('S -> 'S 'a))",
        "short for 'quote value', creates a constant generating function "
        'from the top value on the stack',
    ),
    'dispatch1': Primitive(
        '(var list -> var)', 'dynamically dispatches a function'
    ),
    'dispatch2': Primitive(
        '(var var list -> var)', 'dynamically dispatches a function'
    ),
    'dispatch3': Primitive(
        '(var var var list -> var)', 'dynamically dispatches a function'
    ),
    'while': Primitive(
        "(input='A body=('A -> 'A) condition=('A -> 'A bool) -> 'A)",
        'executes a block of code repeatedly until the condition returns '
        'true',
    ),
    'if': Primitive(
        "('A bool ontrue=('A -> 'B) onfalse=('A -> 'B) -> 'B)",
        'executes one predicate or another whether the condition is true',
    ),
    'bin_rec': Primitive(
        "('a ('a -> 'a bool) ('a -> 'b) ('a -> 'C 'a 'a) ('C 'b 'b -> 'b) "
        "-> 'b)",
        'execute a binary recursion process',
    ),
    'throw': Primitive('(var -> )', 'throws an exception'),
    'try_catch': Primitive(
        "('A ('A -> 'B) ('A var -> 'B) -> 'B)",
        'evaluates a function, and catches any exceptions',
    ),
    # Booleans
    'true': Primitive(
        '( -> bool)', 'pushes the boolean value true on the stack'
    ),
    'false': Primitive(
        '( -> bool)', 'pushes the boolean value false on the stack'
    ),
    'and': Primitive(
        '(bool bool -> bool)',
        'returns true if both of the top two values on the stack are true',
    ),
    'or': Primitive(
        '(bool bool -> bool)',
        'returns true if either of the top two values on the stack are true',
    ),
    'not': Primitive(
        '(bool -> bool)', 'returns true if the top value on the stack is false'
    ),
    # Type tags
    'type_of': Primitive('(var -> type)', 'returns a type tag for an object'),
    'type': Primitive('( -> type)', 'pushes the type tag of types'),
    'int': Primitive('( -> type)', 'pushes the type tag of integers'),
    'string': Primitive('( -> type)', 'pushes the type tag of strings'),
    'double': Primitive('( -> type)', 'pushes the type tag of floats'),
    'byte': Primitive('( -> type)', 'pushes the type tag of bytes'),
    'bit': Primitive('( -> type)', 'pushes the type tag of bits'),
    'bool': Primitive('( -> type)', 'pushes the type tag of booleans'),
    'type_eq': Primitive(
        '(type type -> bool)',
        'returns true if either type is assignable to the other',
    ),
    # Integers
    'add_int': Primitive('(int int -> int)', 'adds two integers'),
    'mul_int': Primitive('(int int -> int)', 'multiplies two integers'),
    'div_int': Primitive('(int int -> int)', 'divides two integers'),
    'sub_int': Primitive('(int int -> int)', 'subtracts two integers'),
    'mod_int': Primitive('(int int -> int)', 'remainder of division'),
    'neg_int': Primitive('(int -> int)', 'negates an integer'),
    'compl_int': Primitive('(int -> int)', 'bitwise complement'),
    'shl_int': Primitive('(int int -> int)', 'shifts bits left'),
    'shr_int': Primitive('(int int -> int)', 'shifts bits right'),
    'gt_int': Primitive('(int int -> bool)', 'greater than'),
    'lt_int': Primitive('(int int -> bool)', 'less than'),
    'gteq_int': Primitive('(int int -> bool)', 'greater than or equal'),
    'lteq_int': Primitive('(int int -> bool)', 'less than or equal'),
    # Console
    'write': Primitive(
        "('a ~> )",
        'outputs the text representation of a value to the console',
    ),
    'writeln': Primitive(
        "('a ~> )",
        'outputs the text representation of a value to the console followed '
        'by a newline character',
    ),
    'readln': Primitive(
        '( ~> string)', 'inputs a string from the user (or console)'
    ),
    'read': Primitive(
        '( ~> char)', 'inputs a single character from the user (or console)'
    ),
    # Streams
    'byte_block': Primitive(
        '(int -> byte_block)', 'creates a mutable array of bytes'
    ),
    'file_reader': Primitive(
        '(string -> istream)', 'creates an input stream from a file name'
    ),
    'file_writer': Primitive(
        '(string -> ostream)', 'creates an output stream from a file name'
    ),
    'file_exists': Primitive(
        '(string -> string bool)',
        'returns a boolean value indicating whether a file or directory '
        'exists',
    ),
    'temp_file': Primitive('( -> string)', 'creates a unique temporary file'),
    'read_bytes': Primitive(
        '(istream int -> istream bytes)',
        'reads a number of bytes into an array from an input stream',
    ),
    'write_bytes': Primitive(
        '(ostream bytes -> ostream)',
        'writes a byte array to an output stream',
    ),
    'close_stream': Primitive('(stream -> )', 'closes a stream'),
    # Hash lists
    'hash_list': Primitive('( -> hash_list)', 'makes an empty hash list'),
    'hash_get': Primitive(
        '(hash_list var -> hash_list var)',
        'gets a value from a hash list using a key',
    ),
    'hash_set': Primitive(
        '(hash_list key=var value=var -> hash_list)',
        'associates a value with a key in a hash list',
    ),
    'hash_add': Primitive(
        '(hash_list key=var value=var -> hash_list)',
        'associates a value with a key in a hash list',
    ),
    'hash_contains': Primitive(
        '(hash_list key=var -> hash_list bool)',
        'returns true if hash list contains key',
    ),
    'hash_to_list': Primitive(
        '(hash_list -> list)', 'converts a hash_list to a list of pairs'
    ),
    # Lists
    'to_list': Primitive(
        "(( -> 'A) -> list)", 'creates a list from a function'
    ),
    'empty': Primitive(
        '(list -> list bool)', 'returns true if the list is empty'
    ),
    'count': Primitive(
        '(list -> list int)', 'returns the number of items in a list'
    ),
    'nth': Primitive(
        '(list int -> list var)', 'returns the nth item in a list'
    ),
    'gen': Primitive(
        "(init='a next=('a -> 'a) cond=('a -> bool) -> list)",
        'creates a lazily evaluated list',
    ),
    'nil': Primitive('( -> list)', 'creates an empty list'),
    'unit': Primitive("('a -> list)", 'creates a list of one item'),
    'pair': Primitive(
        "('second 'first -> list)", 'creates a list from two items'
    ),
    'cons': Primitive("(list 'a -> list)", 'prepends an item to a list'),
    'head': Primitive(
        '(list -> var)', 'replaces a list with the first item'
    ),
    'first': Primitive(
        '(list -> list var)', 'gets the first item from a list'
    ),
    'last': Primitive('(list -> list var)', 'gets the last item from a list'),
    'tail': Primitive('(list -> list)', 'removes first item from a list'),
    'rest': Primitive(
        '(list -> list list)', 'gets a copy of the list with one item'
    ),
    'uncons': Primitive(
        '(list -> list var)',
        'returns the top of the list, and the rest of a list',
    ),
    'map': Primitive(
        "(list ('a -> 'b) -> list)",
        'creates a new list by modifying an existing list',
    ),
    'filter': Primitive(
        "(list ('a -> bool) -> list)",
        'creates a new list containing elements that pass the condition',
    ),
    'gfold': Primitive(
        "('A list ('A var -> 'A) -> 'A)",
        'recursively applies a function to each element in a list',
    ),
    'cat': Primitive('(list list -> list)', 'concatenates two lists'),
    'take': Primitive(
        '(list int -> list)', 'creates a new list from the first n items'
    ),
}


def signatures() -> Mapping[str, str]:
    return {name: p.signature for name, p in primitives.items()}


def environment() -> Environment:
    """Parse every primitive signature into a typing environment."""
    return Environment(
        {
            name: parse_signature(primitive.signature)
            for name, primitive in primitives.items()
        }
    )
