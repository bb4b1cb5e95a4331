"""Interactive mode for the sho interpreter. Uses cmd as backend."""

import cmd

from .Errors import ShoRuntimeError, ShoSyntaxError, format_diagnostic
from .Objects import NULL, ErrorSignal
from .Parser import parse
from .Tokenizer import tokenize


class Shell(cmd.Cmd):
    """sho interpreter shell. Bindings persist between lines."""
    intro = "sho interpreter\nType 'help' for more information, 'exit' to leave."
    prompt = ">> "
    secondary_prompt = ".. "  # used while braces are still open
    _tmp_prompt = ">> "

    def __init__(self, session, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.session = session
        self._tmp_line = ""

    def default(self, line):
        """Evaluates a line, or keeps collecting lines until the braces balance."""
        source = self._tmp_line + line + "\n"
        if open_braces(source) > 0:
            self._tmp_line = source
            self.prompt = self.secondary_prompt
            return

        self._tmp_line = ""
        self.prompt = self._tmp_prompt

        try:
            result = self.session.run(source)
        except ShoSyntaxError as e:
            for err in e.errors:
                self.stdout.write(format_diagnostic("parser error", err) + "\n")
            return
        except ShoRuntimeError as e:
            self.stdout.write(format_diagnostic("fatal", e.message) + "\n")
            return

        if isinstance(result, ErrorSignal):
            self.stdout.write(format_diagnostic("runtime error", result.message) + "\n")
        elif result is not NULL:
            self.stdout.write(result.inspect() + "\n")

    def do_ast(self, arg):
        """Prints the parsed form of an expression, e.g. 'ast 1 + 2 * 3'."""
        program, errors = parse(arg)
        for err in errors:
            self.stdout.write(format_diagnostic("parser error", err) + "\n")
        if not errors:
            self.stdout.write(str(program) + "\n")

    def do_help(self, arg):
        """Short intro rather than per command docs."""
        self.stdout.write("Type statements to run them, e.g. 'let x = 5;' then 'x * 2'.\n"
                          "Blocks may span several lines until their braces close.\n"
                          "'ast <code>' shows how an expression was parsed.\n"
                          "Built-ins: print, len, push.\n")

    def emptyline(self):
        """Do not repeat previous command on empty line."""
        return ""

    def do_EOF(self, arg):
        """Exits interpreter."""
        self.stdout.write("\n")
        return self.do_exit(arg)

    def do_exit(self, arg):
        """Exits interpreter."""
        return True


OPENERS = ("LBRACE", "LPAREN", "LBRACKET")
CLOSERS = ("RBRACE", "RPAREN", "RBRACKET")


def open_braces(source):
    """Counts unclosed brackets by token, so ones inside strings and comments do not count."""
    depth = 0
    for tok in tokenize(source):
        if tok.kind in OPENERS:
            depth += 1
        elif tok.kind in CLOSERS:
            depth -= 1
    return depth
