import logging

from .AST import *
from .Tokenizer import EOF, Lexer, Token, display

logger = logging.getLogger(__name__)

INT64_MAX = 2 ** 63 - 1

# binding strength, lowest to highest
LOWEST      = 1
ASSIGN      = 2
LOGICAL     = 3
EQUALS      = 4
LESSGREATER = 5
SUM         = 6
PRODUCT     = 7
PREFIX      = 8
CALL        = 9

precedences = {
    'ASSIGN'   : ASSIGN,
    'AND'      : LOGICAL,
    'OR'       : LOGICAL,
    'EQ'       : EQUALS,
    'NOT_EQ'   : EQUALS,
    'LT'       : LESSGREATER,
    'GT'       : LESSGREATER,
    'PLUS'     : SUM,
    'MINUS'    : SUM,
    'SLASH'    : PRODUCT,
    'ASTERISK' : PRODUCT,
    'LPAREN'   : CALL,
    'LBRACKET' : CALL,
    'DOT'      : CALL,
}


class Parser:
    """Recursive descent for statements, precedence climbing for expressions.

    Errors never abort the parse: each one is appended to self.errors and the
    parser moves on to the next token. Callers should only evaluate the
    program when errors is empty.
    """

    def __init__(self, lexer):
        self.lexer = lexer
        self.errors = []

        self.cur_token = None
        self.peek_token = None

        self.prefix_fns = {
            'IDENT'    : self.parse_identifier,
            'INT'      : self.parse_integer,
            'STRING'   : self.parse_string,
            'BANG'     : self.parse_prefix,
            'MINUS'    : self.parse_prefix,
            'TRUE'     : self.parse_boolean,
            'FALSE'    : self.parse_boolean,
            'NULL'     : self.parse_null,
            'THIS'     : self.parse_this,
            'SUPER'    : self.parse_super,
            'LPAREN'   : self.parse_grouped,
            'IF'       : self.parse_if,
            'FUNCTION' : self.parse_function_literal,
            'PRINT'    : self.parse_print,
            'LBRACKET' : self.parse_array,
            'LBRACE'   : self.parse_map,
            'NEW'      : self.parse_new,
        }
        self.infix_fns = {
            'PLUS'     : self.parse_infix,
            'MINUS'    : self.parse_infix,
            'SLASH'    : self.parse_infix,
            'ASTERISK' : self.parse_infix,
            'EQ'       : self.parse_infix,
            'NOT_EQ'   : self.parse_infix,
            'LT'       : self.parse_infix,
            'GT'       : self.parse_infix,
            'AND'      : self.parse_logical,
            'OR'       : self.parse_logical,
            'LPAREN'   : self.parse_call,
            'LBRACKET' : self.parse_index,
            'DOT'      : self.parse_property,
            'ASSIGN'   : self.parse_assignment,
        }

        self.next_token()
        self.next_token()

    # -------------- TOKEN HANDLING ------------------

    def next_token(self):
        self.cur_token = self.peek_token
        self.peek_token = self.lexer.next_token()

    def cur_is(self, kind):
        return self.cur_token.kind == kind

    def peek_is(self, kind):
        return self.peek_token.kind == kind

    def expect_peek(self, kind):
        if self.peek_is(kind):
            self.next_token()
            return True
        self.peek_error(kind)
        return False

    def peek_precedence(self):
        return precedences.get(self.peek_token.kind, LOWEST)

    def cur_precedence(self):
        return precedences.get(self.cur_token.kind, LOWEST)

    def error(self, msg):
        self.errors.append(msg)

    def peek_error(self, kind):
        self.error(f"expected next token to be {display(kind)}, got {display(self.peek_token.kind)} instead")

    def no_prefix_error(self, kind):
        self.error(f"no prefix parse function for {display(kind)} found")

    # -------------- STATEMENTS ------------------

    def parse_program(self):
        program = ProgramNode()
        while not self.cur_is(EOF):
            stmt = self.parse_statement()
            if stmt is not None:
                program.children.append(stmt)
            self.next_token()
        logger.debug("parsed %d statements with %d errors", len(program.children), len(self.errors))
        return program

    def parse_statement(self):
        kind = self.cur_token.kind
        if kind == 'LET':
            return self.parse_let()
        if kind == 'RETURN':
            return self.parse_return()
        if kind == 'CLASS':
            return self.parse_class()
        if kind == 'FUNCTION' and self.peek_is('IDENT'):
            return self.parse_function_statement()
        if kind == 'SEMICOLON':
            return None
        return self.parse_expression_statement()

    def skip_semicolon(self):
        if self.peek_is('SEMICOLON'):
            self.next_token()

    def parse_let(self):
        if not self.expect_peek('IDENT'):
            return None
        name = self.cur_token.literal

        if not self.expect_peek('ASSIGN'):
            return None
        self.next_token()

        value = self.parse_expression(LOWEST)
        self.skip_semicolon()
        return LetStatementNode(name, value)

    def parse_return(self):
        if self.peek_is('SEMICOLON') or self.peek_is('RBRACE'):
            self.skip_semicolon()
            return ReturnStatementNode(None)

        self.next_token()
        value = self.parse_expression(LOWEST)
        self.skip_semicolon()
        return ReturnStatementNode(value)

    def parse_function_statement(self):
        # 'func add(a, b) { ... }' is shorthand for 'let add = func(a, b) { ... }'
        self.next_token()
        name = self.cur_token.literal
        function = self.parse_function_literal()
        if function is None:
            return None
        self.skip_semicolon()
        return LetStatementNode(name, function)

    def parse_class(self):
        if not self.expect_peek('IDENT'):
            return None
        name = self.cur_token.literal

        superclass = None
        if self.peek_is('EXTENDS'):
            self.next_token()
            if not self.expect_peek('IDENT'):
                return None
            superclass = self.cur_token.literal

        if not self.expect_peek('LBRACE'):
            return None
        self.next_token()

        methods = []
        while not self.cur_is('RBRACE') and not self.cur_is(EOF):
            if self.cur_is('LET'):
                method = self.parse_method()
                if method is not None:
                    methods.append(method)
            elif not self.cur_is('SEMICOLON'):
                self.error(f"expected next token to be LET, got {display(self.cur_token.kind)} instead")
            self.next_token()

        if self.cur_is(EOF):
            self.error(f"expected next token to be }}, got {EOF} instead")
            return None

        return ClassNode(name, superclass, methods)

    def parse_method(self):
        if not self.expect_peek('IDENT'):
            return None
        name = self.cur_token.literal

        if not self.expect_peek('ASSIGN'):
            return None
        if not self.expect_peek('FUNCTION'):
            return None

        method = self.parse_function_literal()
        if method is None:
            return None
        self.skip_semicolon()
        return name, method

    def parse_expression_statement(self):
        expr = self.parse_expression(LOWEST)
        self.skip_semicolon()
        return ExpressionStatementNode(expr)

    def parse_block(self):
        block = BlockNode()
        self.next_token()

        while not self.cur_is('RBRACE') and not self.cur_is(EOF):
            stmt = self.parse_statement()
            if stmt is not None:
                block.children.append(stmt)
            self.next_token()

        if self.cur_is(EOF):
            self.error(f"expected next token to be }}, got {EOF} instead")
        return block

    # =============== EXPRESSION GRAMMAR ===============

    def parse_expression(self, precedence):
        prefix = self.prefix_fns.get(self.cur_token.kind)
        if prefix is None:
            self.no_prefix_error(self.cur_token.kind)
            return None
        left = prefix()

        while not self.peek_is('SEMICOLON') and precedence < self.peek_precedence():
            infix = self.infix_fns.get(self.peek_token.kind)
            if infix is None:
                return left
            self.next_token()
            left = infix(left)

        return left

    def parse_identifier(self):
        return IdentifierNode(self.cur_token.literal)

    def parse_integer(self):
        literal = self.cur_token.literal
        value = int(literal)
        if value > INT64_MAX:
            self.error(f'could not parse "{literal}" as integer')
            return None
        return IntegerNode(value, literal)

    def parse_string(self):
        return StringNode(self.cur_token.literal)

    def parse_boolean(self):
        return BooleanNode(self.cur_is('TRUE'))

    def parse_null(self):
        return NullNode()

    def parse_this(self):
        return ThisNode()

    def parse_super(self):
        return SuperNode()

    def parse_prefix(self):
        op = self.cur_token.literal
        self.next_token()
        return PrefixOperation(op, self.parse_expression(PREFIX))

    def parse_infix(self, left):
        op = self.cur_token.literal
        precedence = self.cur_precedence()
        self.next_token()
        return BinaryOperation(left, op, self.parse_expression(precedence))

    def parse_logical(self, left):
        op = self.cur_token.literal
        precedence = self.cur_precedence()
        self.next_token()
        return LogicalOperation(left, op, self.parse_expression(precedence))

    def parse_assignment(self, left):
        if not isinstance(left, (IdentifierNode, PropertyNode)):
            self.error(f"invalid assignment target: {left}")
        self.next_token()
        # parsing the value at LOWEST makes 'a = b = 1' group to the right
        return AssignmentNode(left, self.parse_expression(LOWEST))

    def parse_grouped(self):
        self.next_token()
        expr = self.parse_expression(LOWEST)
        if not self.expect_peek('RPAREN'):
            return None
        return expr

    def parse_if(self):
        if not self.expect_peek('LPAREN'):
            return None
        self.next_token()
        condition = self.parse_expression(LOWEST)

        if not self.expect_peek('RPAREN'):
            return None
        if not self.expect_peek('LBRACE'):
            return None
        consequence = self.parse_block()

        alternative = None
        if self.peek_is('ELSE'):
            self.next_token()
            if self.peek_is('IF'):
                self.next_token()
                nested = self.parse_if()
                alternative = BlockNode([ExpressionStatementNode(nested)])
            else:
                if not self.expect_peek('LBRACE'):
                    return None
                alternative = self.parse_block()

        return IfNode(condition, consequence, alternative)

    def parse_function_literal(self):
        if not self.expect_peek('LPAREN'):
            return None
        params = self.parse_parameters()
        if params is None:
            return None
        if not self.expect_peek('LBRACE'):
            return None
        return FunctionNode(params, self.parse_block())

    def parse_parameters(self):
        params = []
        if self.peek_is('RPAREN'):
            self.next_token()
            return params

        if not self.expect_peek('IDENT'):
            return None
        params.append(self.cur_token.literal)

        while self.peek_is('COMMA'):
            self.next_token()
            if not self.expect_peek('IDENT'):
                return None
            params.append(self.cur_token.literal)

        if not self.expect_peek('RPAREN'):
            return None
        return params

    def parse_print(self):
        callee = IdentifierNode(self.cur_token.literal)
        if not self.expect_peek('LPAREN'):
            return None
        return FunctionCallNode(callee, self.parse_expression_list('RPAREN'))

    def parse_call(self, callee):
        return FunctionCallNode(callee, self.parse_expression_list('RPAREN'))

    def parse_expression_list(self, end):
        args = []
        if self.peek_is(end):
            self.next_token()
            return args

        self.next_token()
        args.append(self.parse_expression(LOWEST))

        while self.peek_is('COMMA'):
            self.next_token()
            self.next_token()
            args.append(self.parse_expression(LOWEST))

        self.expect_peek(end)
        return args

    def parse_array(self):
        return ArrayNode(self.parse_expression_list('RBRACKET'))

    def parse_map(self):
        pairs = []
        while not self.peek_is('RBRACE') and not self.peek_is(EOF):
            self.next_token()
            key = self.parse_expression(LOWEST)

            if not self.expect_peek('COLON'):
                return None
            self.next_token()
            value = self.parse_expression(LOWEST)
            pairs.append((key, value))

            if not self.peek_is('RBRACE') and not self.expect_peek('COMMA'):
                return None

        if not self.expect_peek('RBRACE'):
            return None
        return MapNode(pairs)

    def parse_index(self, target):
        self.next_token()
        index = self.parse_expression(LOWEST)
        if not self.expect_peek('RBRACKET'):
            return None
        return IndexNode(target, index)

    def parse_property(self, object_expr):
        if not self.expect_peek('IDENT'):
            return None
        return PropertyNode(object_expr, self.cur_token.literal)

    def parse_new(self):
        if not self.expect_peek('IDENT'):
            return None
        class_expr = IdentifierNode(self.cur_token.literal)
        if not self.expect_peek('LPAREN'):
            return None
        return NewNode(class_expr, self.parse_expression_list('RPAREN'))

    # =============== END EXPRESSION GRAMMAR ===============


def parse_program(tokens):
    """Parses an already tokenized program, returning (ProgramNode, errors)."""
    parser = Parser(_TokenStream(tokens))
    program = parser.parse_program()
    return program, parser.errors


def parse(text):
    parser = Parser(Lexer(text))
    program = parser.parse_program()
    return program, parser.errors


class _TokenStream:
    """Replays a token list through the next_token interface"""

    def __init__(self, tokens):
        self.tokens = list(tokens)
        if not self.tokens or self.tokens[-1].kind != EOF:
            end = self.tokens[-1].position + len(self.tokens[-1].literal) if self.tokens else 0
            self.tokens.append(Token(EOF, '', end))
        self.index = 0

    def next_token(self):
        if self.index < len(self.tokens):
            tok = self.tokens[self.index]
            self.index += 1
            return tok
        return self.tokens[-1]
