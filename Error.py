# Error.py

import sys
from typing import List, Optional, Any

class ErrorType:
    DECODE  = 'DECODE'
    PROGRAM = 'PROGRAM'
    GENERAL = 'GENERAL' # Default or unspecified error type

    @classmethod
    def normalize(cls, t: Any) -> str:
        t_str = str(t).upper() if not isinstance(t, str) else t.upper()
        if t_str in {cls.DECODE, cls.PROGRAM, cls.GENERAL}:
            return t_str
        return cls.GENERAL

class ErrorEntry:
    def __init__(self, message: str, lineno: Optional[int], colno: Optional[int], error_type: str):
        self.message: str = message
        self.lineno: Optional[int] = lineno
        self.colno: Optional[int] = colno
        self.type: str = ErrorType.normalize(error_type)

    def __str__(self) -> str:
        loc_parts = []
        if self.lineno is not None:
            loc_parts.append(f"Line {self.lineno}")
        if self.colno is not None:
            loc_parts.append(f"Col {self.colno}")

        loc_str = ", ".join(loc_parts)
        return f"{self.type}: {self.message} [{loc_str}]" if loc_str else f"{self.type}: {self.message}"

    def to_dict(self) -> dict:
        """Converts the error entry to a dictionary for serialization."""
        return {
            "type": self.type,
            "message": self.message,
            "lineno": self.lineno,
            "colno": self.colno,
        }

class WhitespaceError(Exception):
    """Base exception for the decoder and the machine."""
    def __init__(self, message: str, lineno: Optional[int] = None, colno: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.lineno = lineno
        self.colno = colno

class DecodeError(WhitespaceError):
    """Malformed instruction or literal in the token stream."""
    def __init__(self, message: str, position: Optional[int] = None,
                 lineno: Optional[int] = None, colno: Optional[int] = None):
        super().__init__(message, lineno, colno)
        self.position = position # Token index where decoding stopped

class ProgramError(WhitespaceError):
    """Failure while executing a decoded program."""
    def __init__(self, message: str, pc: Optional[int] = None, lineno: Optional[int] = None):
        super().__init__(message, lineno)
        self.pc = pc

class UnimplementedInstructionError(ProgramError):
    """Raised for instructions that decode but cannot run yet (copy, slide)."""
    pass

class ErrorHandler:
    def __init__(self):
        self._errors: List[ErrorEntry] = []

    def add_error(self, message: str, lineno: Optional[int] = None, colno: Optional[int] = None, error_type: str = ErrorType.GENERAL):
        """Registers an error from any phase."""
        entry = ErrorEntry(message, lineno, colno, error_type)
        self._errors.append(entry)

    def add_decode_error(self, message: str, lineno: Optional[int] = None, colno: Optional[int] = None):
        self.add_error(message, lineno, colno, ErrorType.DECODE)

    def add_program_error(self, message: str, lineno: Optional[int] = None, colno: Optional[int] = None):
        self.add_error(message, lineno, colno, ErrorType.PROGRAM)

    def add_exception(self, exc: WhitespaceError):
        """Records a raised phase error with the matching error type."""
        if isinstance(exc, DecodeError):
            self.add_decode_error(exc.message, exc.lineno, exc.colno)
        elif isinstance(exc, ProgramError):
            message = exc.message if exc.pc is None else f"{exc.message} (at instruction {exc.pc})"
            self.add_program_error(message, exc.lineno, exc.colno)
        else:
            self.add_error(exc.message, exc.lineno, exc.colno)

    def get_formatted_errors(self) -> str:
        """Returns a formatted string of all errors, sorted."""
        if not self._errors:
            return "No errors found."

        # Sort errors by line number, then column number (if available)
        sorted_errors = sorted(
            self._errors,
            key=lambda e: (e.lineno if e.lineno is not None else float('inf'),
                           e.colno if e.colno is not None else float('inf'))
        )

        return "\n".join(str(error) for error in sorted_errors)

    def get_entries(self) -> List[ErrorEntry]:
        """Returns the list of collected error entries."""
        return self._errors

    def has_errors(self) -> bool:
        return bool(self._errors)

    def report_errors(self, out=None):
        """Prints all registered errors, sorted by location, to the specified output stream."""
        if not self.has_errors():
            return
        out = out if out is not None else sys.stderr

        print("\n--- Errors ---", file=out)
        print(self.get_formatted_errors(), file=out)
        print(f"Total errors: {len(self._errors)}", file=out)

    def clear_errors(self):
        self._errors = []

    def get_error_count(self) -> int:
        return len(self._errors)
