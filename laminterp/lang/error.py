"""Error handling for the lam language.

There are two kinds of errors here. Language errors (LangError and its subclasses) are never raised by the lexer,
parser or evaluator: they are stored inside error tokens, error nodes and error objects and travel through the program
as ordinary values. GenericExceptions are raised by the front end (session, shell, command line) once a language error
reaches the top level, and are reported by ErrorHandler. If another type of error makes it all the way to ErrorHandler,
it is assumed to be an internal issue.
"""

import sys

from termcolor import colored


class LangError(Exception):
    """Language-level error value. start/end locate the offending source text, if known."""

    def __init__(self, msg, start=None, end=None):
        super().__init__(msg)
        self.msg = msg
        self.start = start
        self.end = end

    def __str__(self):
        return self.msg

    def __eq__(self, other):
        return isinstance(other, LangError) and str(self) == str(other)

    def __hash__(self):
        return hash(str(self))


class ParseError(LangError):
    """Lexical or syntactic error: malformed token, illegal character, bad literal."""


class ExpectError(ParseError):
    """Mismatch between an expected syntactic category and the kind of token actually received."""

    def __init__(self, want, got, start=None, end=None):
        super().__init__(f"expecting {want}; got {got}", start, end)
        self.want = want
        self.got = got


class GenericException(Exception):
    """Error raised by the front end to be reported by ErrorHandler.

    expr is the source the error refers to and start/end the offending span inside it; they are only used for the
    diagnosis printed under the error message.
    """

    def __init__(self, msg, expr=None, start=0, end=None, diagnosis=True, internal=False):
        super().__init__(msg)
        self.msg = msg
        self.expr = expr if expr is not None else ""
        self.start = start
        self.end = end if end is not None else len(self.expr)
        self.diagnosis = diagnosis
        self.internal = internal

    @classmethod
    def from_lang_error(cls, prefix, error, expr):
        """Wraps a language error value found in expr."""
        start = error.start if error.start is not None else 0
        end = error.end if error.end is not None else start
        return cls(f"{prefix}: {error}", expr, start=start, end=end, diagnosis=error.start is not None)


class ErrorHandler:
    """Context manager that suppresses Python errors and reports lam errors/warnings instead."""
    ERROR = "red"
    WARNING = "magenta"

    def __init__(self, fatal=True, color=True):
        self.fatal = fatal
        self.color = color
        self.traceback = {}

    def register_file(self, path):
        """Registers path in traceback."""
        self.traceback[path] = None

    def register_source(self, path, source):
        """Registers the program being processed for path. Should be called prior to Session add/run."""
        self.traceback[path] = source

    def remove_source(self, path):
        """Removes the program from traceback given path. Should be called after successful Session add/run."""
        self.traceback[path] = None

    def colored(self, text, color=None, attrs=None):
        if not self.color:
            return text
        return colored(text, color, attrs=attrs)

    @staticmethod
    def position(expr, offset):
        """1-based (line, column) of offset in expr."""
        line = expr.count("\n", 0, offset) + 1
        col = offset - (expr.rfind("\n", 0, offset) + 1) + 1
        return line, col

    def diagnose(self, error, warning=False):
        """Returns the source line holding the offending part of error.expr, highlighted, with a caret line below."""
        color = ErrorHandler.WARNING if warning else ErrorHandler.ERROR

        line_start = error.expr.rfind("\n", 0, error.start) + 1
        line_end = error.expr.find("\n", error.start)
        if line_end == -1:
            line_end = len(error.expr)

        start = error.start - line_start
        end = max(min(error.end, line_end) - line_start, start)
        line = error.expr[line_start:line_end]

        diagnosis = "  " + line[:start]
        diagnosis += self.colored(line[start:end], color, attrs=["bold"])
        diagnosis += line[end:] + "\n"

        diagnosis += "  " + " " * start
        diagnosis += self.colored("^" + "~" * max(end - start - 1, 0), color, attrs=["bold"])

        return diagnosis

    def _location(self, error):
        """'path:line:col: ' for the most recently registered path, or '' if nothing is registered."""
        if not self.traceback:
            return ""

        path, source = next(reversed(list(self.traceback.items())))  # assumes dict is insertion-ordered
        if source and error.expr and error.diagnosis and not error.internal:
            line, col = ErrorHandler.position(error.expr, error.start)
            return self.colored(f"{path}:{line}:{col}: ", attrs=["bold"])
        return self.colored(f"{path}: ", attrs=["bold"])

    def warn(self, *args, **kwargs):
        """Generates and prints a warning message based on args (see GenericException)."""
        error = GenericException(*args, **kwargs)

        print(self._location(error) + self.colored("warning: ", ErrorHandler.WARNING, attrs=["bold"]) + error.msg)

        if not error.internal and error.expr and error.diagnosis:
            print(self.diagnose(error, warning=True))

    def throw(self, error, fatal=None):
        """Reports error, a GenericException, and exits with status 1 if fatal (defaults to self.fatal)."""
        error_msg = self._location(error)

        if error.internal:
            error_msg += self.colored("[internal] ", ErrorHandler.ERROR, attrs=["bold"])

        error_msg += self.colored("error: ", ErrorHandler.ERROR, attrs=["bold"]) + error.msg
        print(error_msg)

        if not error.internal and error.expr and error.diagnosis:
            print(self.diagnose(error))

        if self.fatal if fatal is None else fatal:
            sys.exit(1)

        for path in self.traceback:  # error was reported, forget the offending programs
            self.traceback[path] = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type is None or issubclass(exc_type, SystemExit):
            return False

        if issubclass(exc_type, KeyboardInterrupt):
            self.throw(GenericException("keyboard interrupt"))
        elif issubclass(exc_type, RecursionError):
            self.throw(GenericException("maximum recursion depth exceeded (see --recursion-limit)"))
        elif issubclass(exc_type, GenericException) and not exc_val.internal:
            self.throw(exc_val)
        elif issubclass(exc_type, GenericException):
            self.throw(exc_val, fatal=True)
        else:
            self.throw(GenericException(f"unknown error: '{exc_type.__name__}: {exc_val}'", internal=True), fatal=True)

        return True
