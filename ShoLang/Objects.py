INTEGER_OBJ      = 'INTEGER'
STRING_OBJ       = 'STRING'
BOOLEAN_OBJ      = 'BOOLEAN'
NULL_OBJ         = 'NULL'
ARRAY_OBJ        = 'ARRAY'
HASH_OBJ         = 'HASH'
FUNCTION_OBJ     = 'FUNCTION'
BUILTIN_OBJ      = 'BUILTIN'
CLASS_OBJ        = 'CLASS'
INSTANCE_OBJ     = 'INSTANCE'
BOUND_METHOD_OBJ = 'BOUND_METHOD'
RETURN_VALUE_OBJ = 'RETURN_VALUE'
ERROR_OBJ        = 'ERROR'


class Object:
    type = None

    def inspect(self):
        raise NotImplementedError()

    def __str__(self):
        return self.inspect()

# -------- VALUES --------

class Integer(Object):
    type = INTEGER_OBJ

    def __init__(self, value):
        self.value = value

    def inspect(self):
        return str(self.value)

    def __repr__(self):
        return f"Integer({self.value})"

class String(Object):
    type = STRING_OBJ

    def __init__(self, value):
        self.value = value

    def inspect(self):
        return self.value

    def __repr__(self):
        return f"String({self.value!r})"

class Boolean(Object):
    type = BOOLEAN_OBJ

    def __init__(self, value):
        self.value = value

    def inspect(self):
        return 'true' if self.value else 'false'

    def __repr__(self):
        return f"Boolean({self.value})"

class Null(Object):
    type = NULL_OBJ

    def inspect(self):
        return 'null'

    def __repr__(self):
        return 'Null'

TRUE = Boolean(True)
FALSE = Boolean(False)
NULL = Null()


def native_bool(value):
    return TRUE if value else FALSE


class Array(Object):
    type = ARRAY_OBJ

    def __init__(self, elements):
        self.elements = elements

    def inspect(self):
        return '[' + ', '.join(e.inspect() for e in self.elements) + ']'

    def __repr__(self):
        return f"Array({self.elements!r})"

class HashPair:
    def __init__(self, key, value):
        self.key = key
        self.value = value

class Hash(Object):
    """Map keyed by the printed form of each key object.

    Two different keys that print the same, such as 5 and "5", land in the
    same slot.
    """
    type = HASH_OBJ

    def __init__(self, pairs=None):
        self.pairs = pairs if pairs is not None else {}

    def set(self, key, value):
        self.pairs[key.inspect()] = HashPair(key, value)

    def get(self, key):
        pair = self.pairs.get(key.inspect())
        return pair.value if pair is not None else None

    def inspect(self):
        return '{' + ', '.join(f"{p.key.inspect()}:{p.value.inspect()}" for p in self.pairs.values()) + '}'

# -------- CALLABLES --------

class Function(Object):
    type = FUNCTION_OBJ

    def __init__(self, params, body, env):
        self.params = params
        self.body = body
        self.env = env

    def inspect(self):
        return "func(" + ', '.join(self.params) + ") {\n" + str(self.body) + "\n}"

class Builtin(Object):
    type = BUILTIN_OBJ

    def __init__(self, name, fn):
        self.name = name
        self.fn = fn

    def inspect(self):
        return "builtin function"

class Class(Object):
    """A class holds only its own methods, the superclass keeps its own."""
    type = CLASS_OBJ

    def __init__(self, name, methods, superclass, env):
        self.name = name
        self.methods = methods
        self.superclass = superclass
        self.env = env

    def inspect(self):
        return f"class {self.name}"

class Instance(Object):
    type = INSTANCE_OBJ

    def __init__(self, cls):
        self.cls = cls
        self.properties = {}

    def inspect(self):
        return f"{self.cls.name} instance"

class BoundMethod(Object):
    """A method looked up through an instance's class, owner is the class it was found on."""
    type = BOUND_METHOD_OBJ

    def __init__(self, method, instance, owner=None):
        self.method = method
        self.instance = instance
        self.owner = owner if owner is not None else instance.cls

    def inspect(self):
        return "bound method"

# -------- CONTROL FLOW SIGNALS --------

class ReturnSignal(Object):
    type = RETURN_VALUE_OBJ

    def __init__(self, value):
        self.value = value

    def inspect(self):
        return self.value.inspect()

class ErrorSignal(Object):
    type = ERROR_OBJ

    def __init__(self, message):
        self.message = message

    def inspect(self):
        return f"ERROR: {self.message}"

    def __repr__(self):
        return f"ErrorSignal({self.message!r})"


def is_error(obj):
    return isinstance(obj, ErrorSignal)


def is_truthy(obj):
    return obj is not NULL and obj is not FALSE


def is_signal(obj):
    return isinstance(obj, (ReturnSignal, ErrorSignal))
