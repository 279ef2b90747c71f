import unittest
from Lexer import tokenize, token_types, Token, BLANK, TAB, BREAK

class TestLexer(unittest.TestCase):
    def test_comments_are_dropped(self):
        tokens = tokenize("aa \n  comment \t\n\t")
        self.assertEqual(token_types(tokens), [
            BLANK, BREAK, BLANK, BLANK, BLANK, TAB, BREAK, TAB,
        ])

    def test_positions(self):
        tokens = tokenize("x \ty\n\t")
        expected = [
            Token(BLANK, 1, 2),
            Token(TAB, 1, 3),
            Token(BREAK, 1, 5),
            Token(TAB, 2, 1),
        ]
        self.assertEqual(tokens, expected)

    def test_carriage_return_is_a_comment(self):
        self.assertEqual(token_types(tokenize(" \r\n")), [BLANK, BREAK])

    def test_empty_source(self):
        self.assertEqual(tokenize(""), [])
        self.assertEqual(tokenize("only words"), [Token(BLANK, 1, 5)])

if __name__ == '__main__':
    unittest.main()
