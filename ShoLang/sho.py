import argparse
import logging
import sys

from .Config import Options
from .Errors import ShoRuntimeError, ShoSyntaxError, format_diagnostic
from .Interpreter import Session
from .Objects import NULL, ErrorSignal

logger = logging.getLogger(__name__)


def build_options(args):
    options = Options()
    changes = {}
    if args.inherit_methods:
        changes['method_resolution'] = 'chain'
    if args.lenient_assignment:
        changes['assignment'] = 'lenient'
    return options.model_copy(update=changes)


def run_file(path, options):
    try:
        with open(path, "r") as inputFile:
            data = inputFile.read()
    except OSError as e:
        print(format_diagnostic("error", f"cannot read '{path}': {e.strerror}"), file=sys.stderr)
        return 1

    session = Session(options)
    try:
        result = session.run(data)
    except ShoSyntaxError as e:
        print("\n=============|Syntax Errors|=============\n", file=sys.stderr)
        for err in e.errors:
            print(format_diagnostic("parser error", err), file=sys.stderr)
        return 1
    except ShoRuntimeError as e:
        print(format_diagnostic("fatal", e.message), file=sys.stderr)
        return 1

    if isinstance(result, ErrorSignal):
        print(format_diagnostic("runtime error", result.message), file=sys.stderr)
        return 1
    if result is not NULL:
        print(result.inspect())
    return 0


def main(argv=None):
    parser = argparse.ArgumentParser(prog="sho", description="Run a sho script, or start the interactive shell.")
    parser.add_argument("file", help="script to run (if empty, starts the interactive shell)", nargs="?")
    parser.add_argument("-v", "--verbose", action="store_true", help="log tokenizer, parser and evaluator activity")
    parser.add_argument("--inherit-methods", action="store_true",
                        help="resolve methods through the superclass chain")
    parser.add_argument("--lenient-assignment", action="store_true",
                        help="assigning to an undeclared name creates it instead of failing")
    args = parser.parse_args(argv)

    logging.basicConfig(stream=sys.stderr, level=logging.DEBUG if args.verbose else logging.INFO,
                        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')

    try:
        options = build_options(args)
    except ValueError as e:
        print(format_diagnostic("config error", str(e)), file=sys.stderr)
        return 2

    if args.file is not None:
        return run_file(args.file, options)

    from .Shell import Shell
    Shell(Session(options)).cmdloop()
    return 0


if __name__ == "__main__":
    sys.exit(main())
