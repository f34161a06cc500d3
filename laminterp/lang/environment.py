"""Scope chain used to resolve identifiers during evaluation."""

from dataclasses import dataclass

from laminterp.lang.objects import error_object


@dataclass(frozen=True, eq=False)
class Environment:
    """A frame binding one symbol to one object, linked to its enclosing frame (None at the root).

    Environments are immutable: extend returns a new frame and leaves this one untouched, so a frame can be shared by
    every closure created in its scope and outlive the application that created it. Duplicate symbols are allowed, and
    the innermost binding takes precedence.
    """
    symbol: str
    val: object
    parent: "Environment" = None

    def extend(self, symbol, val):
        """New environment binding symbol to val on top of this one."""
        return Environment(symbol, val, self)

    def lookup(self, symbol):
        """Object bound to symbol, or an error object if symbol is not bound anywhere in the chain."""
        frame = self
        while frame is not None:
            if frame.symbol == symbol:
                return frame.val
            frame = frame.parent
        return error_object(f"unknown identifier: '{symbol}'")

    def __iter__(self):
        """Yields (symbol, object) bindings from innermost to outermost, shadowed ones included."""
        frame = self
        while frame is not None:
            yield frame.symbol, frame.val
            frame = frame.parent
