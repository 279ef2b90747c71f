# Instructions.py
from typing import Any, Dict, Optional

def printable_label(label: str) -> str:
    """Renders a label's blanks and tabs as 'S' and 'T' so it can be printed."""
    return label.replace(' ', 'S').replace('\t', 'T')

class Instruction:
    """Base class for all decoded instructions."""
    def __init__(self, lineno: Optional[int] = None):
        # Source line of the instruction's first token, for diagnostics only.
        self.lineno: Optional[int] = lineno

    @property
    def name(self) -> str:
        return self.__class__.__name__

    def operands(self) -> tuple:
        return ()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Instruction):
            return NotImplemented
        return type(self) is type(other) and self.operands() == other.operands()

    def __hash__(self) -> int:
        return hash((self.name, self.operands()))

    def __repr__(self) -> str:
        return self.name

    def to_dict(self) -> Dict[str, Any]:
        return {"_type": self.name, "lineno": self.lineno}

class NumberInstruction(Instruction):
    """An instruction carrying a signed 32-bit operand."""
    def __init__(self, value: int, lineno: Optional[int] = None):
        super().__init__(lineno)
        self.value: int = value

    def operands(self) -> tuple:
        return (self.value,)

    def __repr__(self) -> str:
        return f"{self.name}({self.value})"

    def to_dict(self) -> Dict[str, Any]:
        node_dict = super().to_dict()
        node_dict["value"] = self.value
        return node_dict

class LabelInstruction(Instruction):
    """An instruction carrying a label made of blanks and tabs."""
    def __init__(self, label: str, lineno: Optional[int] = None):
        super().__init__(lineno)
        self.label: str = label

    def operands(self) -> tuple:
        return (self.label,)

    def __repr__(self) -> str:
        return f"{self.name}('{printable_label(self.label)}')"

    def to_dict(self) -> Dict[str, Any]:
        node_dict = super().to_dict()
        node_dict["label"] = printable_label(self.label)
        return node_dict

# ---------------------------------------------------------------------
# Stack manipulation
# ---------------------------------------------------------------------

class Push(NumberInstruction): pass
class Duplicate(Instruction): pass

class Copy(NumberInstruction):
    """Copy the n-th item of the stack to the top. Not executable yet."""
    pass

class Swap(Instruction): pass
class Discard(Instruction): pass

class Slide(NumberInstruction):
    """Drop n items below the top, keeping the top. Not executable yet."""
    pass

# ---------------------------------------------------------------------
# Arithmetic
# ---------------------------------------------------------------------

class Add(Instruction): pass
class Subtract(Instruction): pass
class Multiply(Instruction): pass
class Divide(Instruction): pass
class Modulo(Instruction): pass

# ---------------------------------------------------------------------
# Heap access
# ---------------------------------------------------------------------

class HeapStore(Instruction): pass
class HeapRetrieve(Instruction): pass

# ---------------------------------------------------------------------
# Flow control
# ---------------------------------------------------------------------

class MarkLocation(LabelInstruction): pass
class Call(LabelInstruction): pass
class Jump(LabelInstruction): pass
class JumpIfZero(LabelInstruction): pass
class JumpIfNegative(LabelInstruction): pass
class EndSubroutine(Instruction): pass
class EndProgram(Instruction): pass

# ---------------------------------------------------------------------
# Input/Output
# ---------------------------------------------------------------------

class OutputChar(Instruction): pass
class OutputNumber(Instruction): pass
class ReadChar(Instruction): pass
class ReadNumber(Instruction): pass
