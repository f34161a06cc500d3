"""Runtime objects produced by evaluating a lam syntax tree."""

import sys
from dataclasses import dataclass
from enum import Enum

from laminterp.lang.error import GenericException

if hasattr(sys, "set_int_max_str_digits"):
    sys.set_int_max_str_digits(0)  # numbers render in full, whatever their length


class ObjectType(Enum):
    ERROR = "error"    # val is the error message
    BOOL = "bool"      # val is a bool
    NUMBER = "number"  # val is an int
    FUNC = "func"      # val is a builtin: a python callable taking and returning an Object
    LAM = "lam"        # val is a Closure


@dataclass(frozen=True)
class Closure:
    """Lambda function value: the lambda node paired with the environment active when it was evaluated."""
    node: object  # grammar.LamNode
    env: object   # environment.Environment

    @property
    def param(self):
        return self.node.param


@dataclass(frozen=True)
class Object:
    """Generic object within the interpreter. See ObjectType for the payload stored in val."""
    type: ObjectType
    val: object

    @property
    def is_error(self):
        return self.type is ObjectType.ERROR

    def __str__(self):
        if self.type is ObjectType.ERROR:
            return self.val
        elif self.type is ObjectType.BOOL:
            return "true" if self.val else "false"
        elif self.type is ObjectType.NUMBER:
            return str(self.val)
        elif self.type is ObjectType.FUNC:
            return f"<function {hex(id(self.val))}>"
        elif self.type is ObjectType.LAM:
            return f"<lam {self.val.param} {hex(id(self.val))}>"
        raise GenericException(f"invalid object type: {self.type}", internal=True)


def error_object(msg):
    return Object(ObjectType.ERROR, msg)


def number_object(num):
    return Object(ObjectType.NUMBER, num)


def bool_object(flag):
    return Object(ObjectType.BOOL, flag)


def func_object(fn):
    return Object(ObjectType.FUNC, fn)
