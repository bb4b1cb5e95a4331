from .Config import Options
from .Environment import Environment
from .Errors import ShoError, ShoRuntimeError, ShoSyntaxError
from .Evaluator import Evaluator, evaluate
from .Interpreter import Session, run_source
from .Parser import parse, parse_program
from .Tokenizer import Lexer, tokenize

__version__ = "0.1.0"
