"""Session control for the lam language. Collects programs, either from a file (batch mode) or line by line from the
command line, then parses and evaluates them.
"""

import sys

from laminterp.lang.error import GenericException
from laminterp.lang.evaluation import evaluate
from laminterp.lang.grammar import NodeType, is_incomplete, parse


class Session:
    """Governs a lam session: parses each added program and evaluates (or formats) it when run."""
    SH_FILE = "<in>"        # command-line interpreter filename
    STDIN_FILE = "<stdin>"  # batch program read from standard input

    def __init__(self, error_handler, path, cmd_line, fmt=False):
        self.error_handler = error_handler
        self.error_handler.register_file(path)

        self.path = path          # used for error messages
        self.cmd_line = cmd_line  # whether or not in command-line mode
        self.fmt = fmt            # whether to format programs instead of evaluating them

        self.to_exec = []  # parsed programs waiting to be run, as (source, node)
        self.results = []  # rendered results, oldest first

        if self.cmd_line:
            self.error_handler.fatal = False

        if path == Session.STDIN_FILE:
            self.add(sys.stdin.read())

        elif path != Session.SH_FILE:
            try:
                with open(path, "r") as file:
                    self.add(file.read())
            except OSError:
                raise GenericException(f"'{path}' could not be opened", diagnosis=False)

        elif not cmd_line:
            raise GenericException(f"'{Session.SH_FILE}' is a reserved filename")

    @staticmethod
    def preprocess_line(program, line):
        """Appends line to the program collected so far. Returns the updated program and whether more input is needed
        to complete it (a line continuation). Blank lines are dropped.
        """
        line = line.strip()
        if line:
            program += line + "\n"
        return program, is_incomplete(parse(program))

    def add(self, program):
        """Parses program and queues it for run. Raises a GenericException if program cannot be parsed."""
        self.error_handler.register_source(self.path, program)  # in case error is raised

        node = parse(program)
        if node.type is NodeType.ERROR:
            raise GenericException.from_lang_error("parse error", node.val, program)
        self.to_exec.append((program, node))

        self.error_handler.remove_source(self.path)  # error was not raised

    def run(self):
        """Evaluates (or formats) the queued programs, storing rendered results. Raises a GenericException for the
        first program evaluating to an error object; programs after it stay queued.
        """
        while self.to_exec:
            program, node = self.to_exec.pop(0)

            if self.fmt:
                self.results.append(node.display())
                continue

            result = evaluate(node)
            if result.is_error:
                raise GenericException(f"runtime error: {result}", diagnosis=False)
            self.results.append(str(result))

    def pop(self):
        """Removes and returns the oldest result."""
        return self.results.pop(0)
