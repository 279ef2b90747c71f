# LabelTable.py
import sys
from typing import Dict, Iterable, List, Optional

from Error import ProgramError
from Instructions import Instruction, MarkLocation, printable_label

class LabelEntry:
    """A label and the index of the MarkLocation that declares it."""
    def __init__(self, label: str, index: int, lineno: Optional[int] = None):
        self.label: str = label
        self.index: int = index
        self.lineno: Optional[int] = lineno

    def __str__(self) -> str:
        return f"LabelEntry(label='{printable_label(self.label)}', index={self.index})"

    def __repr__(self) -> str:
        return self.__str__()

class LabelTable:
    """
    Maps label strings to instruction indices.
    Filled once before execution; a label declared twice points at its
    last declaration and the older entries are kept in `redeclared`.
    """
    def __init__(self):
        self.entries: Dict[str, LabelEntry] = {}
        self.redeclared: List[LabelEntry] = []

    @classmethod
    def from_instructions(cls, instructions: Iterable[Instruction]) -> 'LabelTable':
        table = cls()
        for index, instr in enumerate(instructions):
            if isinstance(instr, MarkLocation):
                table.add_label(LabelEntry(instr.label, index, instr.lineno))
        return table

    def add_label(self, entry: LabelEntry) -> None:
        previous = self.entries.get(entry.label)
        if previous is not None:
            self.redeclared.append(previous)
        self.entries[entry.label] = entry

    def lookup(self, label: str) -> int:
        """Returns the instruction index for `label`, raising ProgramError if unknown."""
        entry = self.entries.get(label)
        if entry is None:
            raise ProgramError(f"label not found: '{printable_label(label)}'")
        return entry.index

    def __contains__(self, label: str) -> bool:
        return label in self.entries

    def __len__(self) -> int:
        return len(self.entries)

    def print_table(self, out=None) -> None:
        """Prints the table in a formatted way."""
        out = out if out is not None else sys.stdout
        header = f"| {'Label':<24} | {'Index':<8} | {'Decl. Line':<10} |"
        print("Label Table", file=out)
        print(header, file=out)
        print(f"|{'-'*26}|{'-'*10}|{'-'*12}|", file=out)

        if not self.entries:
            print(f"| {'(empty)':<48} |", file=out)
        else:
            for entry in sorted(self.entries.values(), key=lambda e: e.index):
                decl_line = str(entry.lineno) if entry.lineno is not None else "N/A"
                print(f"| {printable_label(entry.label):<24} | {entry.index:<8} | {decl_line:<10} |", file=out)
        print('-' * len(header), file=out)
