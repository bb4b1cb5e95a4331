import logging

import ply.lex as lex

logger = logging.getLogger(__name__)

reserved = {
   'func'    : 'FUNCTION',
   'let'     : 'LET',
   'true'    : 'TRUE',
   'false'   : 'FALSE',
   'if'      : 'IF',
   'else'    : 'ELSE',
   'return'  : 'RETURN',
   'print'   : 'PRINT',
   'null'    : 'NULL',
   'class'   : 'CLASS',
   'new'     : 'NEW',
   'this'    : 'THIS',
   'extends' : 'EXTENDS',
   'super'   : 'SUPER',
}

tokens = [
   'ILLEGAL',
   'IDENT',
   'INT',
   'STRING',
   'ASSIGN',
   'EQ',
   'NOT_EQ',
   'PLUS',
   'MINUS',
   'BANG',
   'ASTERISK',
   'SLASH',
   'LT',
   'GT',
   'AND',
   'OR',
   'COMMA',
   'SEMICOLON',
   'COLON',
   'DOT',
   'LPAREN',
   'RPAREN',
   'LBRACE',
   'RBRACE',
   'LBRACKET',
   'RBRACKET',
] + list(reserved.values())

# EOF never comes out of ply, the Lexer wrapper synthesizes it
EOF = 'EOF'

# how each kind is spelled in parser diagnostics
display_names = {
   'ASSIGN'    : '=',
   'EQ'        : '==',
   'NOT_EQ'    : '!=',
   'PLUS'      : '+',
   'MINUS'     : '-',
   'BANG'      : '!',
   'ASTERISK'  : '*',
   'SLASH'     : '/',
   'LT'        : '<',
   'GT'        : '>',
   'AND'       : '&&',
   'OR'        : '||',
   'COMMA'     : ',',
   'SEMICOLON' : ';',
   'COLON'     : ':',
   'DOT'       : '.',
   'LPAREN'    : '(',
   'RPAREN'    : ')',
   'LBRACE'    : '{',
   'RBRACE'    : '}',
   'LBRACKET'  : '[',
   'RBRACKET'  : ']',
}


def display(kind):
    return display_names.get(kind, kind)


t_ASSIGN    = r'='
t_EQ        = r'=='
t_NOT_EQ    = r'!='
t_PLUS      = r'\+'
t_MINUS     = r'-'
t_BANG      = r'!'
t_ASTERISK  = r'\*'
t_SLASH     = r'/'
t_LT        = r'<'
t_GT        = r'>'
t_AND       = r'&&'
t_OR        = r'\|\|'
t_COMMA     = r','
t_SEMICOLON = r';'
t_COLON     = r':'
t_DOT       = r'\.'
t_LPAREN    = r'\('
t_RPAREN    = r'\)'
t_LBRACE    = r'{'
t_RBRACE    = r'}'
t_LBRACKET  = r'\['
t_RBRACKET  = r'\]'

t_ignore = ' \t\r\n'


def t_line_comment(t):
    r'//[^\n]*'


def t_block_comment(t):
    r'/\*[\s\S]*?(?:\*/|\Z)'
    # unterminated block comments simply run to the end of input


def t_STRING(t):
    r'"[^"]*"?'
    body = t.value[1:]
    if body.endswith('"'):
        body = body[:-1]
    t.value = body
    return t


def t_IDENT(t):
    r'[A-Za-z_]+'
    t.type = reserved.get(t.value, 'IDENT')
    return t


def t_INT(t):
    r'[0-9]+'
    return t


def t_error(t):
    t.type = 'ILLEGAL'
    t.value = t.value[0]
    t.lexer.skip(1)
    return t


class Token:
    def __init__(self, kind, literal, position):
        self.kind = kind
        self.literal = literal
        self.position = position

    def __eq__(self, other):
        if not isinstance(other, Token):
            return NotImplemented
        return (self.kind, self.literal, self.position) == (other.kind, other.literal, other.position)

    def __repr__(self):
        return f"Token({self.kind}, {self.literal!r}, {self.position})"


_master = lex.lex()


class Lexer:
    """Pulls tokens out of a source string one at a time.

    Every Lexer gets its own clone of the module level ply lexer, so several
    can be live at once. Once the input is exhausted next_token keeps
    returning EOF.
    """

    def __init__(self, text):
        self.text = text
        self._lexer = _master.clone()
        self._lexer.input(text)

    def next_token(self):
        tok = self._lexer.token()
        if tok is None:
            return Token(EOF, '', len(self.text))
        return Token(tok.type, tok.value, tok.lexpos)

    def __iter__(self):
        while True:
            tok = self.next_token()
            yield tok
            if tok.kind == EOF:
                return


def tokenize(text):
    result = list(Lexer(text))
    logger.debug("tokenized %d characters into %d tokens", len(text), len(result))
    return result
