from catinfer.typecheck.kinds import (
    FunctionType,
    Kind,
    SimpleType,
    StackVariable,
    TypeVariable,
    Vector,
)
from hypothesis.strategies import (
    SearchStrategy,
    booleans,
    builds,
    lists,
    recursive,
    sampled_from,
)

simple_type_strategy = builds(
    SimpleType, sampled_from(['int', 'bool', 'string', 'char', 'list'])
)

type_variable_strategy = builds(
    TypeVariable, sampled_from(["'a", "'b", "'c", "'t1", "'t2"])
)

stack_variable_strategy = builds(
    StackVariable, sampled_from(["'A", "'B", "'R", "'S1"])
)


def _vector_strategy(
    item_strategy: SearchStrategy[Kind], no_rest_var: bool = False
) -> SearchStrategy[Vector]:
    return builds(
        lambda items, rest: Vector([*items, *rest]),
        lists(item_strategy, max_size=4),
        lists(stack_variable_strategy, max_size=0 if no_rest_var else 1),
    )


def _function_type_strategy(
    item_strategy: SearchStrategy[Kind],
) -> SearchStrategy[FunctionType]:
    return builds(
        FunctionType,
        _vector_strategy(item_strategy),
        _vector_strategy(item_strategy),
        booleans(),
    )


item_strategy = recursive(
    simple_type_strategy | type_variable_strategy,
    _function_type_strategy,
    max_leaves=5,
)

vector_strategy = _vector_strategy(item_strategy)

closed_vector_strategy = _vector_strategy(item_strategy, no_rest_var=True)

function_type_strategy = _function_type_strategy(item_strategy)

concrete_vector_strategy = _vector_strategy(
    simple_type_strategy, no_rest_var=True
)
