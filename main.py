# main.py
import os
import sys
from typing import List, Optional, TextIO

from Error import ErrorHandler, DecodeError, ProgramError
from Lexer import tokenize
from Parser import Parser
from StackMachine import StackMachine, DEFAULT_HEAP_SIZE
from Instructions_to_JSON import program_to_json, pretty_print_json, save_program_to_json

# --dump-json - prints the decoded program to stderr instead of a file.
USAGE = "Usage: python main.py <file.ws> [heap_size] [--trace] [--dump-json <out.json|->]"


def run_source(source: str, heap_size: int = DEFAULT_HEAP_SIZE,
               stdin: Optional[TextIO] = None, stdout: Optional[TextIO] = None,
               stderr: Optional[TextIO] = None, trace: bool = False,
               error_handler: Optional[ErrorHandler] = None,
               dump_json: Optional[str] = None) -> int:
    """Tokenizes, decodes and runs `source`. Returns 0 on success, 1 on any error."""
    stderr = stderr if stderr is not None else sys.stderr
    error_handler = error_handler if error_handler is not None else ErrorHandler()

    tokens = tokenize(source)
    try:
        instructions = Parser(tokens).parse()
    except DecodeError as e:
        error_handler.add_exception(e)
        error_handler.report_errors(stderr)
        return 1

    if dump_json == '-':
        pretty_print_json(program_to_json(instructions), out=stderr)
    elif dump_json:
        try:
            save_program_to_json(program_to_json(instructions), dump_json)
        except OSError as e:
            print(f"Error writing '{dump_json}': {e}", file=stderr)
            return 1

    vm = StackMachine(heap_size, stdin=stdin, stdout=stdout, trace=stderr if trace else None)
    try:
        vm.execute(instructions)
    except ProgramError as e:
        error_handler.add_exception(e)
        print(f"error was: {e.message}", file=stderr)
        vm.dump_state(stderr)
        return 1
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = list(sys.argv[1:] if argv is None else argv)

    trace = False
    dump_json = None
    positional = []
    while args:
        arg = args.pop(0)
        if arg == '--trace':
            trace = True
        elif arg == '--dump-json':
            if not args:
                print(USAGE, file=sys.stderr)
                return 1
            dump_json = args.pop(0)
        else:
            positional.append(arg)

    if not 1 <= len(positional) <= 2:
        print(USAGE, file=sys.stderr)
        return 1

    source_file_path = positional[0]
    heap_size = DEFAULT_HEAP_SIZE
    if len(positional) == 2:
        try:
            heap_size = int(positional[1])
        except ValueError:
            heap_size = -1
        if heap_size < 0:
            print(f"Error: heap size must be a non-negative integer, got '{positional[1]}'", file=sys.stderr)
            return 1

    if not os.path.exists(source_file_path):
        print(f"Error: Source file not found: '{source_file_path}'", file=sys.stderr)
        return 1

    try:
        with open(source_file_path, 'r', encoding='utf-8') as f:
            content = f.read()
    except (OSError, UnicodeDecodeError) as e:
        print(f"Error reading file '{source_file_path}': {e}", file=sys.stderr)
        return 1

    return run_source(content, heap_size, trace=trace, dump_json=dump_json)


if __name__ == '__main__':
    sys.exit(main())
