"""
Lexer for dynamic tag expressions

Converts a stored attribute value into a flat list of symbols.

Supported syntax:
- Wrapper markers: @tags() ... @endtags()
- References: @post(title)
- Modifier chains: @post(title).truncate(50).append(" ...")
- Group methods: @site().query_var("page")
- Literal text anywhere outside a reference

A value is only lexed when it starts with @tags() and contains @endtags();
any other value is a single literal text run.

The lexer never raises. Fragments it cannot complete (a reference without
its closing parenthesis, an unterminated string) are left for the parser,
which turns them back into literal text.
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional
import re

from dyntags.tags.wrapper import CLOSE_MARKER, OPEN_MARKER, is_active


class SymbolType(Enum):
    """Symbol types produced by the lexer."""
    TEXT = 'TEXT'
    OPEN_WRAPPER = 'OPEN_WRAPPER'     # @tags()
    CLOSE_WRAPPER = 'CLOSE_WRAPPER'   # @endtags()
    AT = 'AT'                         # @ starting a reference
    IDENTIFIER = 'IDENTIFIER'         # group or modifier name
    FIELD = 'FIELD'                   # field key inside @group(...)
    LPAREN = 'LPAREN'                 # (
    RPAREN = 'RPAREN'                 # )
    DOT = 'DOT'                       # . before a modifier
    COMMA = 'COMMA'                   # ,
    STRING = 'STRING'                 # "quoted argument"
    ARG = 'ARG'                       # bare argument: 50, true, EUR
    EOF = 'EOF'


@dataclass
class Symbol:
    """A symbol produced by the lexer. position/end are offsets into the source."""
    type: SymbolType
    value: str
    position: int
    end: int
    line: int = 1
    column: int = 1

    def __repr__(self):
        return f"Symbol({self.type.name}, {self.value!r}, pos={self.position})"


IDENTIFIER_PATTERN = r'[^\W\d]\w*'

_IDENTIFIER = re.compile(IDENTIFIER_PATTERN)
_REFERENCE_START = re.compile(r'@(' + IDENTIFIER_PATTERN + r')\(')
_MODIFIER_START = re.compile(r'\.(' + IDENTIFIER_PATTERN + r')\(')
_FIELD = re.compile(r'[\w.:\-]*')
_WHITESPACE = ' \t\r\n'
_QUOTES = '"\''


class Lexer:
    """
    Lexer for dynamic tag syntax.

    Operates in two modes:
    - Outside the wrapper: everything is TEXT until @tags()
    - Inside the wrapper: TEXT runs interleaved with references,
      up to the first @endtags()

    With expression=True the whole input is treated as wrapper content
    (used for the unwrapped text a builder session edits).
    """

    def __init__(self, text: str, expression: bool = False):
        self.text = text or ''
        self.expression = expression
        self.pos = 0
        self.line = 1
        self.column = 1
        self.limit = len(self.text)
        self.symbols: List[Symbol] = []

    def tokenize(self) -> List[Symbol]:
        """
        Tokenize the entire input text.

        Returns:
            List of symbols, always terminated by an EOF symbol
        """
        self.symbols = []
        self.pos = 0
        self.line = 1
        self.column = 1
        self.limit = len(self.text)

        if self.expression:
            self._tokenize_expression()
        else:
            self._tokenize_value()

        self.symbols.append(Symbol(SymbolType.EOF, '', self.pos, self.pos, self.line, self.column))
        return self.symbols

    def _tokenize_value(self):
        """
        Only a value that starts with @tags() and contains @endtags() has a
        region. Anything else, and the text after the first close marker, is
        emitted as literal text and never lexed.
        """
        if not is_active(self.text):
            self._read_text_until(len(self.text))
            return

        close_at = self.text.find(CLOSE_MARKER, len(OPEN_MARKER))

        self._emit_fixed(SymbolType.OPEN_WRAPPER, OPEN_MARKER)

        self.limit = close_at
        self._tokenize_expression()
        self.limit = len(self.text)

        self._emit_fixed(SymbolType.CLOSE_WRAPPER, CLOSE_MARKER)
        self._read_text_until(len(self.text))

    def _tokenize_expression(self):
        """Tokenize wrapper content up to self.limit."""
        while self.pos < self.limit:
            if self._match(_REFERENCE_START):
                self._read_reference()
            else:
                self._read_expression_text()

    def _read_expression_text(self):
        """Collect literal text until the next reference or the region end."""
        start = self.pos
        start_line, start_col = self.line, self.column
        chars = []

        while self.pos < self.limit:
            if self.pos > start and self._match(_REFERENCE_START):
                break
            chars.append(self._advance())

        self.symbols.append(Symbol(SymbolType.TEXT, ''.join(chars), start, self.pos, start_line, start_col))

    def _read_reference(self):
        """
        Read @group(field) followed by any number of .modifier(args).

        Stops early, without error, when the input runs out.
        """
        self._emit_fixed(SymbolType.AT, '@')
        self._read_identifier()
        self._emit_fixed(SymbolType.LPAREN, '(')

        field_match = _FIELD.match(self.text, self.pos, self.limit)
        self._emit_run(SymbolType.FIELD, field_match.end() - self.pos)

        if self._current() != ')':
            return
        self._emit_fixed(SymbolType.RPAREN, ')')

        while self._match(_MODIFIER_START):
            self._emit_fixed(SymbolType.DOT, '.')
            self._read_identifier()
            self._emit_fixed(SymbolType.LPAREN, '(')
            if not self._read_arguments():
                return

    def _read_arguments(self) -> bool:
        """
        Read an argument list after its opening parenthesis.

        Returns:
            True if the closing parenthesis was found
        """
        while self.pos < self.limit:
            self._skip_whitespace()
            char = self._current()

            if not char:
                return False
            if char == ')':
                self._emit_fixed(SymbolType.RPAREN, ')')
                return True
            if char == ',':
                self._emit_fixed(SymbolType.COMMA, ',')
            elif char in _QUOTES:
                if not self._read_string(char):
                    return False
            else:
                self._read_bare_argument()

        return False

    def _read_string(self, quote_char: str) -> bool:
        """Read a quoted argument. A backslash escapes the next character."""
        start = self.pos
        start_line, start_col = self.line, self.column

        self._advance()  # Opening quote
        chars = []

        while self.pos < self.limit:
            char = self._current()

            if char == quote_char:
                self._advance()  # Closing quote
                self.symbols.append(Symbol(
                    SymbolType.STRING,
                    ''.join(chars),
                    start,
                    self.pos,
                    start_line,
                    start_col
                ))
                return True

            if char == '\\' and self.pos + 1 < self.limit:
                self._advance()
                chars.append(self._advance())
            else:
                chars.append(self._advance())

        return False

    def _read_bare_argument(self):
        """Read an unquoted argument up to the next comma or closing parenthesis."""
        start = self.pos
        start_line, start_col = self.line, self.column
        chars = []

        while self.pos < self.limit and self._current() not in ',)':
            chars.append(self._advance())

        value = ''.join(chars).rstrip(_WHITESPACE)
        self.symbols.append(Symbol(SymbolType.ARG, value, start, start + len(value), start_line, start_col))

    def _read_identifier(self):
        match = _IDENTIFIER.match(self.text, self.pos, self.limit)
        self._emit_run(SymbolType.IDENTIFIER, match.end() - self.pos)

    # Helper methods

    def _match(self, pattern) -> Optional[re.Match]:
        return pattern.match(self.text, self.pos, self.limit)

    def _read_text_until(self, end: int):
        if end > self.pos:
            self._emit_run(SymbolType.TEXT, end - self.pos)

    def _emit_fixed(self, symbol_type: SymbolType, value: str):
        self._emit_run(symbol_type, len(value))

    def _emit_run(self, symbol_type: SymbolType, length: int):
        """Consume length characters and emit them as one symbol."""
        start = self.pos
        start_line, start_col = self.line, self.column
        chars = [self._advance() for _ in range(length)]
        self.symbols.append(Symbol(symbol_type, ''.join(chars), start, self.pos, start_line, start_col))

    def _current(self) -> str:
        """Get current character, '' at the region end."""
        if self.pos >= self.limit:
            return ''
        return self.text[self.pos]

    def _advance(self) -> str:
        """Advance position and return current character."""
        if self.pos >= len(self.text):
            return ''

        char = self.text[self.pos]
        self.pos += 1

        if char == '\n':
            self.line += 1
            self.column = 1
        else:
            self.column += 1

        return char

    def _skip_whitespace(self):
        while self.pos < self.limit and self.text[self.pos] in _WHITESPACE:
            self._advance()


def tokenize(raw: str) -> List[Symbol]:
    """Tokenize a stored attribute value."""
    return Lexer(raw).tokenize()


def tokenize_expression(expression: str) -> List[Symbol]:
    """Tokenize unwrapped expression content."""
    return Lexer(expression, expression=True).tokenize()
