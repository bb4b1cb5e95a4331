"""Host side errors. Scripts never see these: inside the evaluator runtime
errors travel as ErrorSignal values, and these exceptions only exist so that
code embedding the interpreter gets something it can catch.
"""

from termcolor import colored


class ShoError(Exception):
    pass


class ShoSyntaxError(ShoError):
    def __init__(self, errors):
        self.errors = list(errors)
        super().__init__("\n".join(self.errors))


class ShoRuntimeError(ShoError):
    def __init__(self, message):
        self.message = message
        super().__init__(message)


ERROR = "red"


def format_diagnostic(kind, message):
    label = colored(f"{kind}: ", ERROR, attrs=["bold"])
    return label + message
