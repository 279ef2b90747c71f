# Lexer.py

from typing import Iterable, List

# Only these three characters carry meaning; everything else is a comment.
TOKENS = {
    ' ': 'BLANK',
    '\t': 'TAB',
    '\n': 'BREAK',
}

BLANK = 'BLANK'
TAB = 'TAB'
BREAK = 'BREAK'

class Token:
    """Represents a token in the source code."""
    def __init__(self, type: str, lineno: int = 0, column: int = 0):
        self.type = type
        self.lineno = lineno
        self.column = column

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Token):
            return NotImplemented
        return (self.type, self.lineno, self.column) == (other.type, other.lineno, other.column)

    def __repr__(self) -> str:
        return f"Token(type='{self.type}', lineno={self.lineno}, column={self.column})"

def tokenize(text: str) -> List[Token]:
    """Tokenize the input text into a list of tokens."""
    tokens: List[Token] = []
    lineno = 1
    column = 1

    for char in text:
        kind = TOKENS.get(char)
        if kind is not None:
            tokens.append(Token(kind, lineno, column))
        if char == '\n':
            lineno += 1
            column = 1
        else:
            column += 1

    return tokens

def token_types(tokens: Iterable[Token]) -> List[str]:
    return [token.type for token in tokens]


def main():
    """Main function for direct execution of the lexer."""
    import sys
    import os

    if len(sys.argv) != 2:
        print("Usage: python Lexer.py <file.ws>")
        sys.exit(1)

    file_path = sys.argv[1]
    if not os.path.exists(file_path):
        print(f"Error: File not found: {file_path}")
        sys.exit(1)

    try:
        with open(file_path, 'r', encoding='utf-8') as file:
            content = file.read()
    except (OSError, UnicodeDecodeError) as e:
        print(f"Error reading file: {str(e)}")
        sys.exit(1)

    print("\nTokens:")
    for token in tokenize(content):
        print(token)

if __name__ == "__main__":
    main()
