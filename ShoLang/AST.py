class ASTNode:
    pass

# -------- STATEMENTS --------

class ProgramNode(ASTNode):
    def __init__(self, children=None):
        self.children = children or []

    def __str__(self):
        return ''.join(str(child) for child in self.children)

class LetStatementNode(ASTNode):
    def __init__(self, name, value):
        self.name = name
        self.value = value

    def __str__(self):
        value = str(self.value) if self.value is not None else ''
        return f"let {self.name} = {value};"

class ReturnStatementNode(ASTNode):
    def __init__(self, returnVar=None):
        self.returnVar = returnVar

    def __str__(self):
        if self.returnVar is None:
            return "return;"
        return f"return {self.returnVar};"

class ExpressionStatementNode(ASTNode):
    def __init__(self, expr):
        self.expr = expr

    def __str__(self):
        return str(self.expr) if self.expr is not None else ''

class BlockNode(ASTNode):
    def __init__(self, children=None):
        self.children = children or []

    def __str__(self):
        return ''.join(str(child) for child in self.children)

class ClassNode(ASTNode):
    """Represents 'class Dog extends Animal { let speak = func() {...} }'

    methods is an ordered list of (name, FunctionNode) pairs, keyed by the
    name each literal was bound to with 'let' inside the class body.
    """
    def __init__(self, name, superclass, methods):
        self.name = name
        self.superclass = superclass
        self.methods = methods

    def __str__(self):
        out = f"class {self.name}"
        if self.superclass is not None:
            out += f" extends {self.superclass}"
        out += " { "
        out += ''.join(f"{name} = {method};" for name, method in self.methods)
        return out + " }"

# -------- EXPRESSIONS --------

class IdentifierNode(ASTNode):
    def __init__(self, name):
        self.name = name

    def __str__(self):
        return self.name

class IntegerNode(ASTNode):
    def __init__(self, value, literal=None):
        self.value = value
        self.literal = literal if literal is not None else str(value)

    def __str__(self):
        return self.literal

class StringNode(ASTNode):
    def __init__(self, value):
        self.value = value

    def __str__(self):
        return self.value

class BooleanNode(ASTNode):
    def __init__(self, value):
        self.value = value

    def __str__(self):
        return 'true' if self.value else 'false'

class NullNode(ASTNode):
    def __str__(self):
        return 'null'

class ThisNode(ASTNode):
    def __str__(self):
        return 'this'

class SuperNode(ASTNode):
    def __str__(self):
        return 'super'

class ArrayNode(ASTNode):
    def __init__(self, elements):
        self.elements = elements

    def __str__(self):
        return '[' + ', '.join(str(e) for e in self.elements) + ']'

class MapNode(ASTNode):
    """Represents '{"name": "Buddy", "age": 5}', pairs is a list of (key, value) nodes"""
    def __init__(self, pairs):
        self.pairs = pairs

    def __str__(self):
        return '{' + ', '.join(f"{k}:{v}" for k, v in self.pairs) + '}'

class IndexNode(ASTNode):
    def __init__(self, target, index):
        self.target = target
        self.index = index

    def __str__(self):
        return f"({self.target}[{self.index}])"

class PropertyNode(ASTNode):
    """Represents 'p.x'"""
    def __init__(self, object_expr, property_name):
        self.object_expr = object_expr
        self.property_name = property_name

    def __str__(self):
        return f"{self.object_expr}.{self.property_name}"

class AssignmentNode(ASTNode):
    def __init__(self, target, value):
        self.target = target
        self.value = value

    def __str__(self):
        return f"{self.target} = {self.value}"

class NewNode(ASTNode):
    """Represents 'new Point(2, 3)'"""
    def __init__(self, class_expr, args):
        self.class_expr = class_expr
        self.args = args

    def __str__(self):
        return f"new {self.class_expr}(" + ', '.join(str(a) for a in self.args) + ')'

class PrefixOperation(ASTNode):
    def __init__(self, op, right):
        self.op = op
        self.right = right

    def __str__(self):
        return f"({self.op}{self.right})"

class BinaryOperation(ASTNode):
    def __init__(self, left, op, right):
        self.left = left
        self.op = op
        self.right = right

    def __str__(self):
        return f"({self.left} {self.op} {self.right})"

class LogicalOperation(BinaryOperation):
    """'&&' and '||', the right side is only evaluated when it decides the result"""

class IfNode(ASTNode):
    def __init__(self, condition, consequence, alternative=None):
        self.condition = condition
        self.consequence = consequence
        self.alternative = alternative

    def __str__(self):
        out = f"if{self.condition} {self.consequence}"
        if self.alternative is not None:
            out += f"else {self.alternative}"
        return out

class FunctionNode(ASTNode):
    def __init__(self, params, body):
        self.params = params
        self.body = body

    def __str__(self):
        return "func(" + ', '.join(self.params) + f") {self.body}"

class FunctionCallNode(ASTNode):
    def __init__(self, callee, args):
        self.callee = callee
        self.args = args

    def __str__(self):
        return f"{self.callee}(" + ', '.join(str(a) for a in self.args) + ')'
