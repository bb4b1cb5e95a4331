import logging

from .AST import *
from .Builtins import builtins
from .Config import DEFAULT_OPTIONS
from .Environment import Environment
from .Objects import (
    FALSE, NULL, TRUE, Array, BoundMethod, Builtin, Class, ErrorSignal, Function, Hash,
    Instance, Integer, ReturnSignal, String, is_error, is_signal, is_truthy, native_bool,
)

logger = logging.getLogger(__name__)

INT64_MIN = -2 ** 63
INT64_MODULUS = 2 ** 64


def wrap_int64(value):
    return (value - INT64_MIN) % INT64_MODULUS + INT64_MIN


def unwrap_return(obj):
    if isinstance(obj, ReturnSignal):
        return obj.value
    return obj


class Evaluator:
    """Tree-walking evaluator.

    Runtime errors are ErrorSignal values, not Python exceptions. Every place
    that evaluates a child checks the result and hands an ErrorSignal straight
    back up, so the first error stops all further evaluation and becomes the
    result of the program. A ReturnSignal travels the same way until a call
    boundary unwraps it, so neither kind is ever bound to a name or stored in
    a collection.
    """

    def __init__(self, options=None):
        self.options = options or DEFAULT_OPTIONS

    def eval(self, node, env):
        # -------- STATEMENTS --------
        if isinstance(node, ProgramNode):
            return self.eval_program(node, env)

        if isinstance(node, BlockNode):
            return self.eval_block(node, env)

        if isinstance(node, ExpressionStatementNode):
            return self.eval(node.expr, env)

        if isinstance(node, ReturnStatementNode):
            if node.returnVar is None:
                return ReturnSignal(NULL)
            value = self.eval(node.returnVar, env)
            if is_signal(value):
                return value
            return ReturnSignal(value)

        if isinstance(node, LetStatementNode):
            value = self.eval(node.value, env)
            if is_signal(value):
                return value
            env.set(node.name, value)
            return NULL

        if isinstance(node, ClassNode):
            return self.eval_class(node, env)

        # -------- LITERALS --------
        if isinstance(node, IntegerNode):
            return Integer(node.value)

        if isinstance(node, StringNode):
            return String(node.value)

        if isinstance(node, BooleanNode):
            return native_bool(node.value)

        if isinstance(node, NullNode):
            return NULL

        if isinstance(node, ArrayNode):
            elements = self.eval_expressions(node.elements, env)
            if is_signal(elements):
                return elements
            return Array(elements)

        if isinstance(node, MapNode):
            return self.eval_map(node, env)

        if isinstance(node, FunctionNode):
            return Function(node.params, node.body, env)

        # -------- EXPRESSIONS --------
        if isinstance(node, IdentifierNode):
            return self.eval_identifier(node.name, env)

        if isinstance(node, ThisNode):
            this = env.get('this')
            if this is None:
                return ErrorSignal("'this' not found in current context")
            return this

        if isinstance(node, SuperNode):
            superclass = env.get('super')
            if superclass is None:
                return ErrorSignal("'super' not found in current context")
            return superclass

        if isinstance(node, PrefixOperation):
            right = self.eval(node.right, env)
            if is_signal(right):
                return right
            return self.eval_prefix(node.op, right)

        if isinstance(node, LogicalOperation):
            return self.eval_logical(node, env)

        if isinstance(node, BinaryOperation):
            left = self.eval(node.left, env)
            if is_signal(left):
                return left
            right = self.eval(node.right, env)
            if is_signal(right):
                return right
            return self.eval_infix(node.op, left, right)

        if isinstance(node, IfNode):
            return self.eval_if(node, env)

        if isinstance(node, IndexNode):
            target = self.eval(node.target, env)
            if is_signal(target):
                return target
            index = self.eval(node.index, env)
            if is_signal(index):
                return index
            return self.eval_index(target, index)

        if isinstance(node, PropertyNode):
            obj = self.eval(node.object_expr, env)
            if is_signal(obj):
                return obj
            return self.get_property(obj, node.property_name, env)

        if isinstance(node, AssignmentNode):
            return self.eval_assignment(node, env)

        if isinstance(node, NewNode):
            cls = self.eval(node.class_expr, env)
            if is_signal(cls):
                return cls
            args = self.eval_expressions(node.args, env)
            if is_signal(args):
                return args
            return self.eval_new(cls, args)

        if isinstance(node, FunctionCallNode):
            return self.eval_call(node, env)

        return ErrorSignal(f"unknown node type: {type(node).__name__}")

    # -------- BLOCKS --------

    def eval_program(self, program, env):
        result = NULL
        for child in program.children:
            result = self.eval(child, env)
            if isinstance(result, ReturnSignal):
                return result.value
            if isinstance(result, ErrorSignal):
                return result
        return result

    def eval_block(self, block, env):
        # signals pass through untouched, only a call boundary unwraps a return
        result = NULL
        for child in block.children:
            result = self.eval(child, env)
            if isinstance(result, (ReturnSignal, ErrorSignal)):
                return result
        return result

    def eval_expressions(self, nodes, env):
        result = []
        for node in nodes:
            value = self.eval(node, env)
            if is_signal(value):
                return value
            result.append(value)
        return result

    # -------- NAMES --------

    def eval_identifier(self, name, env):
        builtin = builtins.get(name)
        if builtin is not None:
            return builtin

        value = env.get(name)
        if value is None:
            return ErrorSignal(f"identifier not found: {name}")
        return value

    def eval_assignment(self, node, env):
        value = self.eval(node.value, env)
        if is_signal(value):
            return value

        target = node.target
        if isinstance(target, IdentifierNode):
            if env.assign(target.name, value):
                return value
            if self.options.strict_assignment:
                return ErrorSignal(f"identifier not found: {target.name}")
            env.set(target.name, value)
            return value

        if isinstance(target, PropertyNode):
            obj = self.eval(target.object_expr, env)
            if is_signal(obj):
                return obj
            if not isinstance(obj, Instance):
                return ErrorSignal(f"cannot assign to property of non-instance: {obj.type}")
            obj.properties[target.property_name] = value
            return value

        return ErrorSignal(f"invalid left-hand side of assignment: {target}")

    # -------- OPERATORS --------

    def eval_prefix(self, op, right):
        if op == '!':
            return native_bool(not is_truthy(right))
        if op == '-':
            if not isinstance(right, Integer):
                return ErrorSignal(f"unknown operator: -{right.type}")
            return Integer(wrap_int64(-right.value))
        return ErrorSignal(f"unknown operator: {op}{right.type}")

    def eval_infix(self, op, left, right):
        if isinstance(left, Integer) and isinstance(right, Integer):
            return self.eval_integer_infix(op, left, right)
        if isinstance(left, String) and isinstance(right, String):
            return self.eval_string_infix(op, left, right)
        if left.type != right.type:
            return ErrorSignal(f"type mismatch: {left.type} {op} {right.type}")
        if op == '==':
            return native_bool(left is right)
        if op == '!=':
            return native_bool(left is not right)
        return ErrorSignal(f"unknown operator: {left.type} {op} {right.type}")

    def eval_integer_infix(self, op, left, right):
        l, r = left.value, right.value
        if op == '+':
            return Integer(wrap_int64(l + r))
        if op == '-':
            return Integer(wrap_int64(l - r))
        if op == '*':
            return Integer(wrap_int64(l * r))
        if op == '/':
            if r == 0:
                return ErrorSignal("division by zero")
            quotient = abs(l) // abs(r)
            if (l < 0) != (r < 0):
                quotient = -quotient
            return Integer(wrap_int64(quotient))
        if op == '<':
            return native_bool(l < r)
        if op == '>':
            return native_bool(l > r)
        if op == '==':
            return native_bool(l == r)
        if op == '!=':
            return native_bool(l != r)
        return ErrorSignal(f"unknown operator: {left.type} {op} {right.type}")

    def eval_string_infix(self, op, left, right):
        if op == '+':
            return String(left.value + right.value)
        if op == '==':
            return native_bool(left.value == right.value)
        if op == '!=':
            return native_bool(left.value != right.value)
        return ErrorSignal(f"unknown operator: {left.type} {op} {right.type}")

    def eval_logical(self, node, env):
        left = self.eval(node.left, env)
        if is_signal(left):
            return left

        if node.op == '&&' and not is_truthy(left):
            return FALSE
        if node.op == '||' and is_truthy(left):
            return TRUE

        right = self.eval(node.right, env)
        if is_signal(right):
            return right
        return native_bool(is_truthy(right))

    def eval_if(self, node, env):
        condition = self.eval(node.condition, env)
        if is_signal(condition):
            return condition

        if is_truthy(condition):
            return self.eval(node.consequence, env)
        if node.alternative is not None:
            return self.eval(node.alternative, env)
        return NULL

    # -------- COLLECTIONS --------

    def eval_map(self, node, env):
        result = Hash()
        for key_node, value_node in node.pairs:
            key = self.eval(key_node, env)
            if is_signal(key):
                return key
            value = self.eval(value_node, env)
            if is_signal(value):
                return value
            result.set(key, value)
        return result

    def eval_index(self, target, index):
        if isinstance(target, Array) and isinstance(index, Integer):
            idx = index.value
            if idx < 0 or idx >= len(target.elements):
                return NULL
            return target.elements[idx]

        if isinstance(target, Hash):
            value = target.get(index)
            return value if value is not None else NULL

        return ErrorSignal(f"index operator not supported: {target.type}")

    # -------- CLASSES --------

    def eval_class(self, node, env):
        superclass = None
        if node.superclass is not None:
            superclass = self.eval_identifier(node.superclass, env)
            if is_signal(superclass):
                return superclass
            if not isinstance(superclass, Class):
                return ErrorSignal(f"superclass must be a class, got {superclass.type}")

        methods = {}
        for name, method in node.methods:
            methods[name] = Function(method.params, method.body, env)

        env.set(node.name, Class(node.name, methods, superclass, env))
        logger.debug("defined class %s with methods %s", node.name, sorted(methods))
        return NULL

    def find_method(self, cls, name):
        """Returns (method, owning class) or None.

        Only the class itself is searched unless the options ask for the
        superclass chain to be walked.
        """
        while cls is not None:
            if name in cls.methods:
                return cls.methods[name], cls
            if not self.options.walk_superclasses:
                return None
            cls = cls.superclass
        return None

    def eval_new(self, cls, args):
        if not isinstance(cls, Class):
            return ErrorSignal(f"not a class: {cls.type}")

        instance = Instance(cls)
        for name, method in cls.methods.items():
            instance.properties[name] = method

        found = self.find_method(cls, 'constructor')
        if found is not None:
            constructor, owner = found
            env = self.extend_function_env(constructor, args, receiver=instance)
            if owner.superclass is not None:
                env.set('super', owner.superclass)

            result = self.eval(constructor.body, env)
            if is_error(result):
                return result

        return instance

    def get_property(self, obj, name, env):
        if isinstance(obj, Instance):
            if name in obj.properties:
                return obj.properties[name]
            found = self.find_method(obj.cls, name)
            if found is not None:
                method, owner = found
                return BoundMethod(method, obj, owner)
            return ErrorSignal(f"property {name} not found")

        if isinstance(obj, Hash):
            pair = obj.pairs.get(name)
            return pair.value if pair is not None else NULL

        if isinstance(obj, Class) and self.options.walk_superclasses:
            found = self.find_method(obj, name)
            if found is None:
                return ErrorSignal(f"property {name} not found")
            method, owner = found
            this = env.get('this')
            if isinstance(this, Instance):
                return BoundMethod(method, this, owner)
            return method

        return ErrorSignal(f"property access not supported on {obj.type}")

    # -------- CALLS --------

    def eval_call(self, node, env):
        receiver = None
        callee = node.callee

        if isinstance(callee, PropertyNode):
            obj = self.eval(callee.object_expr, env)
            if is_signal(obj):
                return obj
            function = self.get_property(obj, callee.property_name, env)
            if isinstance(obj, Instance):
                receiver = obj
        else:
            function = self.eval(callee, env)
        if is_signal(function):
            return function

        args = self.eval_expressions(node.args, env)
        if is_signal(args):
            return args

        return self.apply_function(function, args, receiver)

    def apply_function(self, function, args, receiver=None):
        if isinstance(function, BoundMethod):
            return self.call_function(function.method, args, function.instance, function.owner)

        if isinstance(function, Function):
            owner = receiver.cls if receiver is not None else None
            return self.call_function(function, args, receiver, owner)

        if isinstance(function, Builtin):
            return function.fn(args)

        return ErrorSignal(f"not a function: {function.type}")

    def call_function(self, function, args, receiver=None, owner=None):
        env = self.extend_function_env(function, args, receiver)
        if self.options.walk_superclasses and owner is not None and owner.superclass is not None:
            env.set('super', owner.superclass)
        return unwrap_return(self.eval(function.body, env))

    def extend_function_env(self, function, args, receiver=None):
        """New scope for one call, enclosed by the function's closure.

        Arguments bind by position. Extras are dropped and missing ones leave
        the parameter unbound. With a receiver, 'this' is bound, and a leading
        parameter named 'self' takes the receiver instead of an argument.
        """
        env = Environment.enclosed(function.env)
        params = function.params

        if receiver is not None:
            env.set('this', receiver)
            if params and params[0] == 'self':
                env.set('self', receiver)
                params = params[1:]

        for param, arg in zip(params, args):
            env.set(param, arg)
        return env


def evaluate(node, env=None, options=None):
    env = env if env is not None else Environment()
    return Evaluator(options).eval(node, env)
