# StackMachine.py (Executes decoded instructions)

import re
import sys
from typing import List, Optional, TextIO

from Error import ErrorHandler, ProgramError, UnimplementedInstructionError
from Instructions import Instruction
from LabelTable import LabelTable

INT32_MIN = -2**31
INT32_MAX = 2**31 - 1
DEFAULT_HEAP_SIZE = 1024

# Accepted by ReadNumber: optional sign then decimal digits, nothing else.
NUMBER_LINE = re.compile(r'[+-]?[0-9]+')


def _trunc_div(left: int, right: int) -> int:
    """Integer division rounding toward zero."""
    quotient = abs(left) // abs(right)
    return quotient if (left < 0) == (right < 0) else -quotient


class StackMachine:
    def __init__(self, heap_size: int = DEFAULT_HEAP_SIZE, stdin: Optional[TextIO] = None,
                 stdout: Optional[TextIO] = None, trace: Optional[TextIO] = None):
        if heap_size < 0:
            raise ValueError(f"heap size must be non-negative, got {heap_size}")
        self.stack: List[int] = []
        self.heap: List[int] = [0] * heap_size
        self.labels: LabelTable = LabelTable()

        self.stdin: TextIO = stdin if stdin is not None else sys.stdin
        self.stdout: TextIO = stdout if stdout is not None else sys.stdout
        self.trace: Optional[TextIO] = trace # Step-by-step trace stream, off when None

        self.program: List[Instruction] = []
        self.pc: int = 0
        self.running: bool = False

    def execute(self, instructions: List[Instruction]) -> None:
        """
        Runs `instructions` from index 0 until EndProgram.
        Raises ProgramError on any failure; stack and heap are left as they
        were at the point of failure.
        """
        self.program = list(instructions)
        self.labels = LabelTable.from_instructions(self.program)
        self.pc = 0
        self.running = True

        if self.trace is not None:
            self.labels.print_table(self.trace)

        while self.running:
            if not 0 <= self.pc < len(self.program):
                self.running = False
                raise ProgramError("no more instructions", self.pc)
            instr = self.program[self.pc]

            if self.trace is not None:
                print(f"VMExec: PC={self.pc:03d} | Op: {instr!r} | Stack: {self.stack}", file=self.trace)

            method = getattr(self, f"op_{instr.name}", self.op_UNKNOWN)
            try:
                method(instr)
            except ProgramError as e:
                self.running = False
                if e.pc is None:
                    e.pc = self.pc
                if e.lineno is None:
                    e.lineno = instr.lineno
                raise

            if self.running:
                self.pc += 1

    def run(self, instructions: List[Instruction], error_handler: ErrorHandler) -> bool:
        """Like execute(), but records a failure in `error_handler` and returns False."""
        try:
            self.execute(instructions)
        except ProgramError as e:
            error_handler.add_exception(e)
            return False
        return True

    def dump_state(self, out: Optional[TextIO] = None) -> None:
        out = out if out is not None else sys.stderr
        print(f"stack: {self.stack}", file=out)
        print(f"heap: {self.heap}", file=out)

    def op_UNKNOWN(self, instr: Instruction):
        raise ProgramError(f"Unknown instruction: {instr.name}")

    # --- Helpers ---
    def _pop_stack(self, op_name: str) -> int:
        if not self.stack:
            raise ProgramError(f"{op_name}: empty stack during pop")
        return self.stack.pop()

    def _peek_stack(self, op_name: str) -> int:
        if not self.stack:
            raise ProgramError(f"{op_name}: empty stack during peek")
        return self.stack[-1]

    def _push_checked(self, value: int, op_name: str) -> None:
        if not INT32_MIN <= value <= INT32_MAX:
            raise ProgramError(f"{op_name}: arithmetic overflow, result {value} does not fit in 32 bits")
        self.stack.append(value)

    def _heap_address(self, address: int, op_name: str) -> int:
        if not 0 <= address < len(self.heap):
            raise ProgramError(f"{op_name}: heap overflow, address {address} outside heap of {len(self.heap)} cells")
        return address

    def _jump(self, label: str) -> None:
        self.pc = self.labels.lookup(label)

    # --- Stack Manipulation ---
    def op_Push(self, instr): self.stack.append(instr.value)
    def op_Duplicate(self, instr): self.stack.append(self._peek_stack("Duplicate"))

    def op_Copy(self, instr):
        raise UnimplementedInstructionError(f"not implemented: copy {instr.value}")

    def op_Swap(self, instr):
        if len(self.stack) < 2:
            raise ProgramError(f"Swap: index out of range, need 2 values, stack has {len(self.stack)}")
        self.stack[-1], self.stack[-2] = self.stack[-2], self.stack[-1]

    def op_Discard(self, instr): self._pop_stack("Discard")

    def op_Slide(self, instr):
        raise UnimplementedInstructionError(f"not implemented: slide {instr.value}")

    # --- Arithmetic ---
    # The top of the stack is the left operand: left = pop(); right = pop().
    def op_Add(self, instr):
        left = self._pop_stack("Add"); right = self._pop_stack("Add")
        self._push_checked(left + right, "Add")

    def op_Subtract(self, instr):
        left = self._pop_stack("Subtract"); right = self._pop_stack("Subtract")
        self._push_checked(left - right, "Subtract")

    def op_Multiply(self, instr):
        left = self._pop_stack("Multiply"); right = self._pop_stack("Multiply")
        self._push_checked(left * right, "Multiply")

    def op_Divide(self, instr):
        left = self._pop_stack("Divide"); right = self._pop_stack("Divide")
        if right == 0:
            raise ProgramError(f"Divide: trying to divide {left} by zero")
        self._push_checked(_trunc_div(left, right), "Divide")

    def op_Modulo(self, instr):
        left = self._pop_stack("Modulo"); right = self._pop_stack("Modulo")
        if right == 0:
            raise ProgramError(f"Modulo: trying to take {left} modulo zero")
        self._push_checked(left - right * _trunc_div(left, right), "Modulo")

    # --- Heap Access ---
    def op_HeapStore(self, instr):
        value = self._pop_stack("HeapStore")
        address = self._heap_address(self._pop_stack("HeapStore"), "HeapStore")
        self.heap[address] = value

    def op_HeapRetrieve(self, instr):
        address = self._heap_address(self._pop_stack("HeapRetrieve"), "HeapRetrieve")
        self.stack.append(self.heap[address])

    # --- Flow Control ---
    def op_MarkLocation(self, instr): pass # Already recorded in the label table.

    def op_Call(self, instr):
        # EndSubroutine restores this index and the loop's increment moves past the Call.
        return_address = self.pc
        self._jump(instr.label)
        self.stack.append(return_address)

    def op_Jump(self, instr): self._jump(instr.label)

    def op_JumpIfZero(self, instr):
        if self._peek_stack("JumpIfZero") == 0:
            self._jump(instr.label)

    def op_JumpIfNegative(self, instr):
        if self._peek_stack("JumpIfNegative") < 0:
            self._jump(instr.label)

    def op_EndSubroutine(self, instr):
        address = self._pop_stack("EndSubroutine")
        if address < 0:
            raise ProgramError(f"EndSubroutine: invalid return address {address}")
        self.pc = address

    def op_EndProgram(self, instr): self.running = False

    # --- Input/Output ---
    def op_OutputChar(self, instr):
        code = self._pop_stack("OutputChar")
        # Surrogates are not characters on their own.
        if not 0 <= code <= sys.maxunicode or 0xD800 <= code <= 0xDFFF:
            raise ProgramError(f"OutputChar: invalid character code {code}")
        self.stdout.write(chr(code))
        self.stdout.flush()

    def op_OutputNumber(self, instr):
        self.stdout.write(str(self._pop_stack("OutputNumber")))
        self.stdout.flush()

    def op_ReadChar(self, instr):
        try:
            char = self.stdin.read(1)
        except (OSError, UnicodeDecodeError) as e:
            raise ProgramError(f"ReadChar: reading a character failed: {e}")
        if not char:
            raise ProgramError("ReadChar: end of input while reading a character")
        self.stack.append(ord(char))

    def op_ReadNumber(self, instr):
        try:
            line = self.stdin.readline()
        except (OSError, UnicodeDecodeError) as e:
            raise ProgramError(f"ReadNumber: reading line failed: {e}")
        text = line.strip()
        if not NUMBER_LINE.fullmatch(text):
            raise ProgramError(f"ReadNumber: parsing line to number failed: {text!r}")
        value = int(text)
        if not INT32_MIN <= value <= INT32_MAX:
            raise ProgramError(f"ReadNumber: {value} does not fit in 32 bits")
        self.stack.append(value)
