"""Built-in functions preloaded into the default environment.

Every builtin takes a single argument. Builtins of more than one argument are curried: applying them to their first
argument returns another builtin waiting for the next one.
"""

from laminterp.lang.environment import Environment
from laminterp.lang.objects import ObjectType, bool_object, error_object, func_object, number_object


def _add(a):
    """number -> number -> number"""
    if a.type is not ObjectType.NUMBER:
        return error_object(f"add: not a number: '{a}'")

    def add_to(b):
        if b.type is not ObjectType.NUMBER:
            return error_object(f"add: not a number: '{b}'")
        return number_object(a.val + b.val)

    return func_object(add_to)


def _if(a):
    """bool -> object -> object -> object

    Both branches are evaluated before the builtin is reached; to delay a branch, pass a lambda and apply the result.
    """
    if a.type is not ObjectType.BOOL:
        return error_object(f"if: not a bool: '{a}'")

    def then(b):
        def otherwise(c):
            return b if a.val else c
        return func_object(otherwise)

    return func_object(then)


def _gt(a):
    """number -> number -> bool, true only if the first number is greater than the second"""
    if a.type is not ObjectType.NUMBER:
        return error_object(f"gt: not a number: '{a}'")

    def greater_than(b):
        if b.type is not ObjectType.NUMBER:
            return error_object(f"gt: not a number: '{b}'")
        return bool_object(a.val > b.val)

    return func_object(greater_than)


BUILTINS = {
    "add": func_object(_add),
    "if": func_object(_if),
    "gt": func_object(_gt),
}


def default_environment():
    """Root environment containing the builtins."""
    env = None
    for symbol, builtin in BUILTINS.items():
        env = Environment(symbol, builtin, env)
    return env


DEFAULT_ENVIRONMENT = default_environment()
