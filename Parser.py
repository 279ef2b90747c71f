# Parser.py
from typing import List

from Error import DecodeError
from Lexer import Token, BLANK, TAB, BREAK
from Instructions import *

INT32_MIN = -2**31
INT32_MAX = 2**31 - 1

class Parser:
    """
    Decodes a token stream into instructions.

    Each instruction starts with a prefix selecting its family:
        BLANK       stack manipulation
        TAB BLANK   arithmetic
        TAB TAB     heap access
        TAB BREAK   input/output
        BREAK       flow control
    Tokens are consumed greedily, one instruction at a time, with no backtracking.
    """
    def __init__(self, tokens: List[Token]):
        self.tokens: List[Token] = tokens
        self.pos: int = 0

    def at_end(self) -> bool:
        return self.pos >= len(self.tokens)

    def advance(self, what: str) -> Token:
        """Consumes one token. `what` names the construct being decoded, for the error message."""
        if self.at_end():
            last = self.tokens[-1] if self.tokens else None
            raise DecodeError(
                f"unexpected end of input while decoding {what}",
                self.pos,
                last.lineno if last else None,
                last.column if last else None,
            )
        token = self.tokens[self.pos]
        self.pos += 1
        return token

    def error(self, message: str, token: Token) -> DecodeError:
        return DecodeError(message, self.pos - 1, token.lineno, token.column)

    # --- Main Parsing Method ---
    def parse(self) -> List[Instruction]:
        instructions: List[Instruction] = []

        while not self.at_end():
            first = self.advance("an instruction")
            lineno = first.lineno

            if first.type == BLANK:
                instr = self.parse_stack_manipulation(lineno)
            elif first.type == BREAK:
                instr = self.parse_flow_control(lineno)
            else:
                second = self.advance("an instruction prefix")
                if second.type == BLANK:
                    instr = self.parse_arithmetic(lineno)
                elif second.type == TAB:
                    instr = self.parse_heap_access(lineno)
                else:
                    instr = self.parse_input_output(lineno)

            instructions.append(instr)

        return instructions

    # --- Instruction families ---
    def parse_stack_manipulation(self, lineno: int) -> Instruction:
        family = "stack manipulation instruction"
        token = self.advance(family)
        if token.type == BLANK:
            return Push(self.parse_number(), lineno=lineno)
        if token.type == TAB:
            token = self.advance(family)
            if token.type == BLANK:
                return Copy(self.parse_number(), lineno=lineno)
            if token.type == BREAK:
                return Slide(self.parse_number(), lineno=lineno)
            raise self.error(f"invalid {family}", token)

        token = self.advance(family)
        if token.type == BLANK:
            return Duplicate(lineno=lineno)
        if token.type == TAB:
            return Swap(lineno=lineno)
        return Discard(lineno=lineno)

    def parse_arithmetic(self, lineno: int) -> Instruction:
        family = "arithmetic instruction"
        token = self.advance(family)
        if token.type == BLANK:
            token = self.advance(family)
            if token.type == BLANK:
                return Add(lineno=lineno)
            if token.type == TAB:
                return Subtract(lineno=lineno)
            return Multiply(lineno=lineno)
        if token.type == TAB:
            token = self.advance(family)
            if token.type == BLANK:
                return Divide(lineno=lineno)
            if token.type == TAB:
                return Modulo(lineno=lineno)
        raise self.error(f"invalid {family}", token)

    def parse_heap_access(self, lineno: int) -> Instruction:
        family = "heap instruction"
        token = self.advance(family)
        if token.type == BLANK:
            return HeapStore(lineno=lineno)
        if token.type == TAB:
            return HeapRetrieve(lineno=lineno)
        raise self.error(f"invalid {family}", token)

    def parse_flow_control(self, lineno: int) -> Instruction:
        family = "flow control instruction"
        token = self.advance(family)
        if token.type == BLANK:
            token = self.advance(family)
            if token.type == BLANK:
                return MarkLocation(self.parse_label(), lineno=lineno)
            if token.type == TAB:
                return Call(self.parse_label(), lineno=lineno)
            return Jump(self.parse_label(), lineno=lineno)
        if token.type == TAB:
            token = self.advance(family)
            if token.type == BLANK:
                return JumpIfZero(self.parse_label(), lineno=lineno)
            if token.type == TAB:
                return JumpIfNegative(self.parse_label(), lineno=lineno)
            return EndSubroutine(lineno=lineno)

        token = self.advance(family)
        if token.type == BREAK:
            return EndProgram(lineno=lineno)
        raise self.error(f"invalid {family}", token)

    def parse_input_output(self, lineno: int) -> Instruction:
        family = "i/o instruction"
        token = self.advance(family)
        if token.type == BLANK:
            token = self.advance(family)
            if token.type == BLANK:
                return OutputChar(lineno=lineno)
            if token.type == TAB:
                return OutputNumber(lineno=lineno)
        elif token.type == TAB:
            token = self.advance(family)
            if token.type == BLANK:
                return ReadChar(lineno=lineno)
            if token.type == TAB:
                return ReadNumber(lineno=lineno)
        raise self.error(f"invalid {family}", token)

    # --- Literals ---
    def parse_number(self) -> int:
        """Sign token, then binary digits (BLANK=0, TAB=1) up to a BREAK."""
        sign_token = self.advance("number literal")
        if sign_token.type == BLANK:
            sign = 1
        elif sign_token.type == TAB:
            sign = -1
        else:
            raise self.error(f"invalid sign specifier {sign_token.type}", sign_token)

        magnitude = 0
        while True:
            token = self.advance("number literal")
            if token.type == BREAK:
                break
            magnitude = (magnitude << 1) + (1 if token.type == TAB else 0)

        value = magnitude * sign
        if not INT32_MIN <= value <= INT32_MAX:
            raise self.error(f"number literal {value} does not fit in 32 bits", sign_token)
        return value

    def parse_label(self) -> str:
        """Blanks and tabs up to a BREAK, kept as literal ' ' and '\\t' characters."""
        chars: List[str] = []
        while True:
            token = self.advance("label")
            if token.type == BREAK:
                break
            chars.append(' ' if token.type == BLANK else '\t')
        return ''.join(chars)


def decode(tokens: List[Token]) -> List[Instruction]:
    return Parser(tokens).parse()
