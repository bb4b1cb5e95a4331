"""Runs source text through the whole pipeline: tokenize, parse, evaluate."""

import logging
import sys
from contextlib import contextmanager

from .Config import DEFAULT_OPTIONS
from .Environment import Environment
from .Errors import ShoRuntimeError, ShoSyntaxError
from .Evaluator import Evaluator
from .Objects import ErrorSignal
from .Parser import parse

logger = logging.getLogger(__name__)


@contextmanager
def recursion_limit(limit):
    previous = sys.getrecursionlimit()
    sys.setrecursionlimit(max(previous, limit))
    try:
        yield
    finally:
        sys.setrecursionlimit(previous)


class Session:
    """Keeps one root environment alive across several runs, as the shell needs."""

    def __init__(self, options=None):
        self.options = options or DEFAULT_OPTIONS
        self.env = Environment()
        self.evaluator = Evaluator(self.options)

    def parse(self, text):
        program, errors = parse(text)
        if errors:
            logger.debug("%d syntax errors", len(errors))
            raise ShoSyntaxError(errors)
        return program

    def evaluate(self, program):
        try:
            with recursion_limit(self.options.recursion_limit):
                return self.evaluator.eval(program, self.env)
        except RecursionError:
            raise ShoRuntimeError("maximum recursion depth exceeded") from None

    def run(self, text, raise_errors=False):
        result = self.evaluate(self.parse(text))
        if raise_errors and isinstance(result, ErrorSignal):
            raise ShoRuntimeError(result.message)
        return result


def run_source(text, options=None, raise_errors=False):
    """Evaluates text in a fresh root environment and returns the resulting object.

    Syntax errors raise ShoSyntaxError. A runtime error comes back as an
    ErrorSignal, or raises ShoRuntimeError when raise_errors is set.
    """
    return Session(options).run(text, raise_errors=raise_errors)
