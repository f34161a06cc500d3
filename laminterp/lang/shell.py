"""Handles interactive/command-line mode for the lam interpreter. Uses cmd as backend."""

import cmd

from laminterp.lang.session import Session


class Shell(cmd.Cmd):
    """lam interpreter shell."""
    intro = "lam interpreter :: Python backend\nType '?' or 'help' for more information."
    prompt = ">> "
    secondary_prompt = ".. "  # used for line continuations
    _tmp_prompt = ">> "       # also used for prompt swapping in line continuations

    def __init__(self, sess, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.sess = sess

        self._tmp_line = ""

    def _reset(self):
        self._tmp_line = ""
        self.prompt = self._tmp_prompt

    def onecmd(self, line):
        """While a program is being continued, every line is program text; only EOF is still a command."""
        if self._tmp_line and line.strip() != "EOF":
            return self.default(line)
        return super().onecmd(line)

    def default(self, line):
        """Executes arbitrary lam program, or collects it until it is complete."""
        with self.sess.error_handler:  # needed because cmd.Cmd automatically exits on Exception
            program, add_to_prev = Session.preprocess_line(self._tmp_line, line)

            if add_to_prev:
                self._tmp_line = program
                self.prompt = self.secondary_prompt
                return

            self._reset()
            self.sess.add(program)
            self.sess.run()

            while self.sess.results:
                print(self.sess.pop())

    def cmdloop(self, intro=None):
        """Ctrl-C discards a partially entered program, or exits if nothing has been entered."""
        while True:
            try:
                return super().cmdloop(intro)
            except KeyboardInterrupt:
                print()
                if not self._tmp_line:
                    return None
                self._reset()
                intro = ""

    def do_help(self, arg):
        """Prints a short introduction to the language."""
        print("Welcome to the lam interpreter!\n\n"
              "Programs are single expressions built from numbers, true/false, identifiers,\n"
              "'lam PARAM BODY' (a one-argument function) and 'app FN ARG' (an application).\n"
              "The builtins add, if and gt are curried: 'app app add 1 2' gives 3.\n\n"
              "Try 'app app lam x lam y x 1 2'. Unfinished programs, such as 'lam x', are\n"
              "continued on the next line.")

    def emptyline(self):
        """Do not repeat previous command on empty line."""
        return ""

    def do_EOF(self, arg):
        """Exits interpreter, or discards the unfinished program."""
        print()
        if self._tmp_line:
            self._reset()
            return False
        return self.do_exit(arg)

    def do_exit(self, arg):
        """Exits interpreter."""
        if arg:
            self.sess.error_handler.warn(f"exit takes no arguments, got '{arg}'")
            return False
        return True
