"""Native functions visible to every script. Identifier lookup consults this
table before any environment, so scripts cannot shadow these names.
"""

from types import MappingProxyType

from .Objects import ARRAY_OBJ, NULL, Array, Builtin, ErrorSignal, Integer, String


def builtin_print(args):
    for arg in args:
        print(arg.inspect())
    return NULL


def builtin_len(args):
    if len(args) != 1:
        return ErrorSignal(f"wrong number of arguments. got={len(args)}, want=1")

    arg = args[0]
    if isinstance(arg, Array):
        return Integer(len(arg.elements))
    if isinstance(arg, String):
        return Integer(len(arg.value))
    return ErrorSignal(f"argument to `len` not supported, got {arg.type}")


def builtin_push(args):
    if len(args) != 2:
        return ErrorSignal(f"wrong number of arguments. got={len(args)}, want=2")

    if not isinstance(args[0], Array):
        return ErrorSignal(f"argument to `push` must be {ARRAY_OBJ}, got {args[0].type}")

    return Array(args[0].elements + [args[1]])


builtins = MappingProxyType({
    'print' : Builtin('print', builtin_print),
    'len'   : Builtin('len', builtin_len),
    'push'  : Builtin('push', builtin_push),
})
