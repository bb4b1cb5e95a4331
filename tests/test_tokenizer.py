import unittest

from ShoLang.Tokenizer import EOF, Lexer, Token, display, tokenize


def kinds(text):
    return [tok.kind for tok in tokenize(text)]


class TokenizerTestCase(unittest.TestCase):

    def test_let_statement(self):
        tokens = tokenize("let five = 5;")
        self.assertEqual(["LET", "IDENT", "ASSIGN", "INT", "SEMICOLON", EOF], [t.kind for t in tokens])
        self.assertEqual(["let", "five", "=", "5", ";", ""], [t.literal for t in tokens])

    def test_operators(self):
        self.assertEqual(
            ["EQ", "NOT_EQ", "BANG", "ASSIGN", "AND", "OR", "PLUS", "MINUS", "ASTERISK", "SLASH", "LT", "GT", EOF],
            kinds("== != ! = && || + - * / < >"))

    def test_punctuation(self):
        self.assertEqual(
            ["LPAREN", "RPAREN", "LBRACE", "RBRACE", "LBRACKET", "RBRACKET", "COMMA", "SEMICOLON", "COLON", "DOT", EOF],
            kinds("(){}[],;:."))

    def test_keywords(self):
        source = "func let true false if else return print null class new this extends super"
        self.assertEqual(
            ["FUNCTION", "LET", "TRUE", "FALSE", "IF", "ELSE", "RETURN", "PRINT", "NULL",
             "CLASS", "NEW", "THIS", "EXTENDS", "SUPER", EOF],
            kinds(source))

    def test_keywords_are_case_sensitive(self):
        self.assertEqual(["IDENT", "IDENT", EOF], kinds("Let TRUE"))

    def test_digits_end_an_identifier(self):
        tokens = tokenize("abc123")
        self.assertEqual(["IDENT", "INT", EOF], [t.kind for t in tokens])
        self.assertEqual("abc", tokens[0].literal)
        self.assertEqual("123", tokens[1].literal)

    def test_underscore_identifier(self):
        tokens = tokenize("_private_name")
        self.assertEqual("IDENT", tokens[0].kind)
        self.assertEqual("_private_name", tokens[0].literal)

    def test_string(self):
        tokens = tokenize('"hello world"')
        self.assertEqual("STRING", tokens[0].kind)
        self.assertEqual("hello world", tokens[0].literal)

    def test_string_has_no_escapes(self):
        tokens = tokenize(r'"a\n"')
        self.assertEqual(r"a\n", tokens[0].literal)

    def test_unterminated_string_runs_to_end(self):
        tokens = tokenize('"abc')
        self.assertEqual(["STRING", EOF], [t.kind for t in tokens])
        self.assertEqual("abc", tokens[0].literal)

    def test_comments_are_skipped(self):
        source = "1 // line comment\n/* block\ncomment */ 2"
        tokens = tokenize(source)
        self.assertEqual(["INT", "INT", EOF], [t.kind for t in tokens])

    def test_unterminated_block_comment_is_tolerated(self):
        self.assertEqual(["INT", EOF], kinds("1 /* never closed"))

    def test_illegal_character(self):
        tokens = tokenize("1 @ 2")
        self.assertEqual(["INT", "ILLEGAL", "INT", EOF], [t.kind for t in tokens])
        self.assertEqual("@", tokens[1].literal)

    def test_positions(self):
        tokens = tokenize("let x\n  = 10")
        self.assertEqual(4, tokens[1].position)
        self.assertEqual(8, tokens[2].position)
        self.assertEqual(12, tokens[-1].position)

    def test_next_token_keeps_returning_eof(self):
        lexer = Lexer("x")
        self.assertEqual("IDENT", lexer.next_token().kind)
        self.assertEqual(EOF, lexer.next_token().kind)
        self.assertEqual(EOF, lexer.next_token().kind)

    def test_independent_lexers(self):
        first = Lexer("a b")
        second = Lexer("1 2")
        self.assertEqual("a", first.next_token().literal)
        self.assertEqual("1", second.next_token().literal)
        self.assertEqual("b", first.next_token().literal)
        self.assertEqual("2", second.next_token().literal)

    def test_token_equality(self):
        self.assertEqual(Token("INT", "5", 0), tokenize("5")[0])

    def test_display(self):
        self.assertEqual("=", display("ASSIGN"))
        self.assertEqual("IDENT", display("IDENT"))
        self.assertEqual("EOF", display(EOF))


if __name__ == '__main__':
    unittest.main()
