# Instructions_to_JSON.py
import json
import sys
from typing import Any, List

from Instructions import Instruction

class Colors:
    HEADER = '\033[95m'
    ENDC = '\033[0m'
    BOLD = '\033[1m'
    UNDERLINE = '\033[4m'

def program_to_json(instructions: List[Instruction]) -> List[Any]:
    """Converts a decoded program to a JSON serializable list, keeping the instruction index."""
    return [dict(index=index, **instr.to_dict()) for index, instr in enumerate(instructions)]

def pretty_print_json(json_data: Any, indent: int = 2, out=None) -> None:
    """Print JSON data with a header, for terminals."""
    out = out if out is not None else sys.stdout
    json_str = json.dumps(json_data, indent=indent, ensure_ascii=False, sort_keys=False)

    print(f"\n{Colors.HEADER}{Colors.BOLD}Decoded Program (JSON):{Colors.ENDC}", file=out)
    print(f"{Colors.UNDERLINE}{'=' * 60}{Colors.ENDC}", file=out)
    print(json_str, file=out)
    print(f"{Colors.UNDERLINE}{'=' * 60}{Colors.ENDC}\n", file=out)

def save_program_to_json(program_data: Any, filename: str = "program_output.json") -> None:
    """Writes the serializable program to `filename`. Raises OSError if the file can't be written."""
    with open(filename, 'w', encoding='utf-8') as f:
        json.dump(program_data, f, indent=2, ensure_ascii=False, sort_keys=False)
