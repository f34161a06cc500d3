"""Uses the lam language implementation to interpret lam files or run in command-line mode. Also uses the error handling
context manager. Called from the laminterp console script.
"""

import argparse
import sys

from laminterp.lang.error import ErrorHandler
from laminterp.lang.session import Session
from laminterp.lang.shell import Shell


def get_parser():
    parser = argparse.ArgumentParser(prog="laminterp", description="Interpreter for the lam language.")
    parser.add_argument("file", nargs="?",
                        help="file to interpret and run ('-' for stdin; if empty, goes to command-line mode)")
    parser.add_argument("--format", action="store_true",
                        help="print a formatted version of the program instead of evaluating it")
    parser.add_argument("--recursion-limit", type=int, default=10000,
                        help="maximum depth of the python stack while parsing and evaluating (default: %(default)s)")
    parser.add_argument("--no-color", action="store_true", help="do not color error messages")
    return parser


def main(argv=None):
    """Runs lam interpreter. Called from laminterp console script."""
    with ErrorHandler() as error_handler:
        args = get_parser().parse_args(argv)

        error_handler.color = not args.no_color
        sys.setrecursionlimit(args.recursion_limit)

        path = args.file
        if path == "-" or (path is None and not sys.stdin.isatty()):
            path = Session.STDIN_FILE

        if path is not None:
            sess = Session(error_handler, path, cmd_line=False, fmt=args.format)
            sess.run()

            for result in sess.results:
                print(result)

        else:
            Shell(Session(error_handler, Session.SH_FILE, cmd_line=True, fmt=args.format)).cmdloop()


if __name__ == "__main__":
    main()
