"""Tree-walking evaluator for the lam language.

Evaluation is a pure function of a syntax tree and an environment. Errors (unknown identifiers, type mismatches,
applying a non-function, parse errors embedded in the tree) are returned as error objects: the first error encountered
in evaluation order is returned and the remaining siblings are not evaluated.
"""

from laminterp.lang.error import GenericException
from laminterp.lang.grammar import NodeType, parse
from laminterp.lang.library import DEFAULT_ENVIRONMENT
from laminterp.lang.objects import Closure, Object, ObjectType, error_object


def apply(fn, arg):
    """Applies the function object fn to arg."""
    if fn.type is ObjectType.FUNC:
        return fn.val(arg)
    elif fn.type is ObjectType.LAM:
        closure = fn.val
        return evaluate(closure.node.body, closure.env.extend(closure.param, arg))
    return error_object(f"apply: invalid function: '{fn}'")


def evaluate(node, env=DEFAULT_ENVIRONMENT):
    """Evaluates node within env, which defaults to the environment holding the builtins.

    Evaluation recurses on the tree, so its depth is bounded by Python's recursion limit (see --recursion-limit).
    """
    if node.type is NodeType.APP:
        app = node.val

        fn = evaluate(app.fn, env)
        if fn.is_error:
            return fn

        arg = evaluate(app.arg, env)
        if arg.is_error:
            return arg

        return apply(fn, arg)

    elif node.type is NodeType.LAM:
        return Object(ObjectType.LAM, Closure(node.val, env))

    elif node.type is NodeType.NUMBER:
        return Object(ObjectType.NUMBER, node.val)

    elif node.type is NodeType.BOOL:
        return Object(ObjectType.BOOL, node.val)

    elif node.type is NodeType.IDENTIFIER:
        return env.lookup(node.val)

    elif node.type is NodeType.ERROR:
        return error_object(f"parse error: {node.val}")

    raise GenericException(f"invalid node: {node.type}", internal=True)


def eval_string(source, env=DEFAULT_ENVIRONMENT):
    """Parses and evaluates source."""
    return evaluate(parse(source), env)
