import unittest
from Error import DecodeError
from Lexer import tokenize, Token, BLANK, TAB, BREAK
from Parser import Parser, decode
from Instructions import *

def ws(code: str) -> str:
    """Spells whitespace source with S (space), T (tab) and N (line feed)."""
    return code.replace('S', ' ').replace('T', '\t').replace('N', '\n')

def encode_number(n: int) -> str:
    sign = 'S' if n >= 0 else 'T'
    digits = bin(abs(n))[2:].replace('0', 'S').replace('1', 'T')
    return sign + digits + 'N'

def parse(code: str):
    return decode(tokenize(ws(code)))

class TestParser(unittest.TestCase):
    def test_simple_stack_manipulation(self):
        tokens = [Token(t) for t in (BLANK, BLANK, TAB, TAB, TAB, BLANK, BLANK, TAB, BLANK, BREAK)]
        self.assertEqual(Parser(tokens).parse(), [Push(-50)])

    def test_multiple_stack_manipulation(self):
        self.assertEqual(parse("SSTTTSSTSN" + "SNT"), [Push(-50), Swap()])

    def test_every_instruction(self):
        cases = [
            ("SSSTN", Push(1)),
            ("SNS", Duplicate()),
            ("STSSTSN", Copy(2)),
            ("SNT", Swap()),
            ("SNN", Discard()),
            ("STNSTTN", Slide(3)),
            ("TSSS", Add()),
            ("TSST", Subtract()),
            ("TSSN", Multiply()),
            ("TSTS", Divide()),
            ("TSTT", Modulo()),
            ("TTS", HeapStore()),
            ("TTT", HeapRetrieve()),
            ("NSSSTN", MarkLocation(" \t")),
            ("NSTTN", Call("\t")),
            ("NSNSN", Jump(" ")),
            ("NTSTTN", JumpIfZero("\t\t")),
            ("NTTSN", JumpIfNegative(" ")),
            ("NTN", EndSubroutine()),
            ("NNN", EndProgram()),
            ("TNSS", OutputChar()),
            ("TNST", OutputNumber()),
            ("TNTS", ReadChar()),
            ("TNTT", ReadNumber()),
        ]
        for code, expected in cases:
            with self.subTest(code=code):
                self.assertEqual(parse(code), [expected])

    def test_number_literals(self):
        for n in (0, 1, -1, 5, -50, 1024, 2**31 - 1, -(2**31 - 1), -2**31):
            with self.subTest(n=n):
                self.assertEqual(parse("SS" + encode_number(n)), [Push(n)])

    def test_number_without_digits_is_zero(self):
        self.assertEqual(parse("SSSN"), [Push(0)])
        self.assertEqual(parse("SSTN"), [Push(0)])

    def test_number_out_of_range(self):
        with self.assertRaises(DecodeError):
            parse("SS" + encode_number(2**31))
        with self.assertRaises(DecodeError):
            parse("SS" + "T" + "T" + "S" * 31 + "T" + "N")

    def test_labels_keep_blanks_and_tabs(self):
        for label in ("", " ", "\t", " \t\t ", "\t" * 20):
            code = "NSS" + label.replace(' ', 'S').replace('\t', 'T') + "N"
            with self.subTest(label=label):
                self.assertEqual(parse(code), [MarkLocation(label)])

    def test_comments_between_tokens(self):
        source = "push x neg\t1\t0 1\t;\nend\n\n\n"
        self.assertEqual(decode(tokenize(source)), [Push(-5), EndProgram()])

    def test_lineno_is_recorded(self):
        program = decode(tokenize(ws("SSSTN") + ws("NNN")))
        self.assertEqual([instr.lineno for instr in program], [1, 2])

    def test_invalid_instructions(self):
        cases = {
            "STT": "invalid stack manipulation instruction",
            "TSN": "invalid arithmetic instruction",
            "TSTN": "invalid arithmetic instruction",
            "TTN": "invalid heap instruction",
            "NNS": "invalid flow control instruction",
            "NNT": "invalid flow control instruction",
            "TNN": "invalid i/o instruction",
            "TNSN": "invalid i/o instruction",
            "TNTN": "invalid i/o instruction",
        }
        for code, message in cases.items():
            with self.subTest(code=code):
                with self.assertRaises(DecodeError) as ctx:
                    parse(code)
                self.assertEqual(ctx.exception.message, message)
                self.assertEqual(ctx.exception.position, len(code) - 1)

    def test_invalid_sign(self):
        with self.assertRaises(DecodeError) as ctx:
            parse("SSN")
        self.assertIn("invalid sign specifier", ctx.exception.message)

    def test_premature_end(self):
        for code in ("T", "SS", "SSS", "SSTST", "NS", "NSSST", "TN", "STS"):
            with self.subTest(code=code):
                with self.assertRaises(DecodeError) as ctx:
                    parse(code)
                self.assertIn("unexpected end of input", ctx.exception.message)

    def test_cursor_tracks_consumed_tokens(self):
        tokens = tokenize(ws("SSSTN" + "SNT"))
        parser = Parser(tokens)
        self.assertEqual(parser.parse(), [Push(1), Swap()])
        self.assertEqual(parser.pos, len(tokens))
        self.assertTrue(parser.at_end())

        parser = Parser(tokenize(ws("SST")))
        with self.assertRaises(DecodeError) as ctx:
            parser.parse()
        self.assertEqual(ctx.exception.position, 3)
        self.assertEqual((ctx.exception.lineno, ctx.exception.colno), (1, 3))

    def test_decoding_stops_at_first_error(self):
        with self.assertRaises(DecodeError) as ctx:
            parse("SSSTN" + "TTN" + "NNS")
        self.assertEqual(ctx.exception.message, "invalid heap instruction")
        self.assertEqual(ctx.exception.lineno, 2)

    def test_empty_input(self):
        self.assertEqual(decode([]), [])

if __name__ == '__main__':
    unittest.main()
