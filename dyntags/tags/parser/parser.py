"""
Parser for dynamic tag expressions

Converts symbols from the lexer into a DocumentNode.

Supports:
- Literal text: "Hello "
- References: @post(title)
- Modifier chains: @post(title).truncate(50).append("...")
- Group methods: @site().query_var("page")

Unknown groups, fields and modifiers are kept as written; deciding whether
they are allowed is the validator's job. Malformed references never abort
the parse: they are turned back into literal text so unrelated content in
the same value is preserved.
"""

from typing import Any, List, Optional
import logging
import re

from dyntags.tags.catalog import ArgType, CatalogRegistry, Modifier, create_default_catalog
from dyntags.tags.parser.lexer import Symbol, SymbolType, tokenize, tokenize_expression
from dyntags.tags.parser.ast import (
    AppliedModifierNode,
    DocumentNode,
    TextNode,
    TokenNode,
)
from dyntags.tags.wrapper import is_active

logger = logging.getLogger(__name__)

_INTEGER = re.compile(r'^[+-]?\d+$')
_FLOAT = re.compile(r'^[+-]?(\d+\.\d*|\.\d+|\d+)([eE][+-]?\d+)?$')
_BOOLEANS = {'true': True, 'false': False, '1': True, '0': False}

# Symbols a malformed reference can be skipped to
_RESUME_TYPES = (
    SymbolType.TEXT,
    SymbolType.AT,
    SymbolType.OPEN_WRAPPER,
    SymbolType.CLOSE_WRAPPER,
    SymbolType.EOF,
)


class ParseError(Exception):
    """Error while parsing a single reference. Never leaves the parser."""
    def __init__(self, message: str, symbol: Symbol = None):
        self.symbol = symbol
        if symbol:
            super().__init__(f"{message} at position {symbol.position}")
        else:
            super().__init__(message)


def convert_argument(raw: str, arg_type: ArgType) -> Any:
    """
    Convert raw argument text according to its declared type.

    Values that do not fit the declared type are returned unchanged.
    """
    if arg_type == ArgType.NUMBER:
        text = raw.strip()
        if _INTEGER.match(text):
            return int(text)
        if _FLOAT.match(text):
            return float(text)
        return raw

    if arg_type == ArgType.BOOLEAN:
        return _BOOLEANS.get(raw.strip().lower(), raw)

    return raw


class TagParser:
    """
    Parser for dynamic tag syntax.

    Converts tokenized input into a DocumentNode. The catalog is only used
    to convert modifier arguments to their declared types.
    """

    def __init__(self, catalog: Optional[CatalogRegistry] = None):
        self.catalog = catalog if catalog is not None else create_default_catalog()
        self.symbols: List[Symbol] = []
        self.source = ''
        self.pos = 0
        self._degraded_count = 0

    def parse(self, text: str, context: Optional[str] = None) -> DocumentNode:
        """
        Parse a stored attribute value into a DocumentNode.

        Args:
            text: Raw value, wrapped (@tags()...@endtags()) or literal
            context: Accepted for symmetry with the validator; context never
                changes the shape of the parsed document

        Returns:
            DocumentNode containing the parsed structure
        """
        text = text or ''
        if not is_active(text):
            # Literals are never lexed, even when they contain markers
            self._degraded_count = 0
            return DocumentNode(children=[TextNode(content=text)] if text else [])
        return self.parse_symbols(tokenize(text), text)

    def parse_expression(self, expression: str, context: Optional[str] = None) -> DocumentNode:
        """Parse unwrapped expression content (what a builder session edits)."""
        expression = expression or ''
        return self.parse_symbols(tokenize_expression(expression), expression)

    def parse_symbols(self, symbols: List[Symbol], source: str) -> DocumentNode:
        """
        Build a document from a symbol stream.

        Args:
            symbols: Output of the lexer for source
            source: The text the symbols were produced from
        """
        self.symbols = symbols
        self.source = source
        self.pos = 0
        self._degraded_count = 0

        children = []
        trailing = ''

        while not self._is_at_end():
            symbol = self._current()

            if symbol.type == SymbolType.CLOSE_WRAPPER:
                trailing = self.source[symbol.end:]
                break

            if symbol.type == SymbolType.AT:
                start = self.pos
                try:
                    children.append(self._parse_token())
                except ParseError as e:
                    self.pos = start
                    self._degrade(children, e)
                continue

            self._advance()

            if symbol.type == SymbolType.TEXT:
                self._append_text(children, symbol.value, symbol.position)
            elif symbol.type != SymbolType.OPEN_WRAPPER:
                self._append_text(children, self.source[symbol.position:symbol.end], symbol.position)

        return DocumentNode(children=children, trailing=trailing)

    def extract_tokens(self, text: str) -> List[TokenNode]:
        """Extract all tokens from a stored value, in document order."""
        return self.parse(text).tokens()

    def get_degraded_count(self) -> int:
        """Number of malformed references turned into text during the last parse."""
        return self._degraded_count

    def _parse_token(self) -> TokenNode:
        """Parse @group(field) and its modifier chain."""
        start = self._expect(SymbolType.AT)
        group = self._expect(SymbolType.IDENTIFIER).value
        self._expect(SymbolType.LPAREN)
        field_key = self._expect(SymbolType.FIELD).value
        self._expect(SymbolType.RPAREN)

        token = TokenNode(group=group, field=field_key, position=start.position)

        while self._check(SymbolType.DOT):
            token.modifiers.append(self._parse_modifier(token))

        return token

    def _parse_modifier(self, token: TokenNode) -> AppliedModifierNode:
        """Parse .key(args) and convert its arguments."""
        dot = self._expect(SymbolType.DOT)
        key = self._expect(SymbolType.IDENTIFIER).value
        self._expect(SymbolType.LPAREN)

        raw_args = []
        if not self._check(SymbolType.RPAREN):
            raw_args.append(self._parse_argument())
            while self._check(SymbolType.COMMA):
                self._advance()
                raw_args.append(self._parse_argument())
        self._expect(SymbolType.RPAREN)

        modifier = self._lookup_modifier(token, key)
        if modifier is None:
            args = raw_args
        else:
            args = []
            for index, raw in enumerate(raw_args):
                declared = modifier.get_arg(index)
                args.append(convert_argument(raw, declared.type) if declared else raw)

        return AppliedModifierNode(key=key, args=args, position=dot.position)

    def _parse_argument(self) -> str:
        symbol = self._current()
        if symbol.type in (SymbolType.STRING, SymbolType.ARG):
            self._advance()
            return symbol.value
        raise ParseError(f"Expected argument, got {symbol.type.name}", symbol)

    def _lookup_modifier(self, token: TokenNode, key: str) -> Optional[Modifier]:
        # @site().query_var("x"): the first modifier of an empty field is a group method
        if not token.field and not token.modifiers:
            method = self.catalog.get_method(token.group, key)
            if method is not None:
                return method
        return self.catalog.get_modifier(key)

    def _degrade(self, children: List, error: ParseError):
        """Turn the malformed reference at the current position into literal text."""
        start = self._advance()
        while self._current().type not in _RESUME_TYPES:
            self._advance()

        fragment = self.source[start.position:self._current().position]
        self._degraded_count += 1
        logger.debug(f"Malformed reference kept as text ({error}): {fragment!r}")
        self._append_text(children, fragment, start.position)

    @staticmethod
    def _append_text(children: List, content: str, position: int):
        if not content:
            return
        if children and isinstance(children[-1], TextNode):
            children[-1].content += content
        else:
            children.append(TextNode(content=content, position=position))

    # Helper methods

    def _current(self) -> Symbol:
        """Get current symbol."""
        if self.pos >= len(self.symbols):
            return Symbol(SymbolType.EOF, '', len(self.source), len(self.source))
        return self.symbols[self.pos]

    def _advance(self) -> Symbol:
        """Advance and return previous symbol."""
        symbol = self._current()
        if not self._is_at_end():
            self.pos += 1
        return symbol

    def _check(self, symbol_type: SymbolType) -> bool:
        """Check if current symbol is of given type."""
        return self._current().type == symbol_type

    def _expect(self, symbol_type: SymbolType) -> Symbol:
        """Expect current symbol to be of given type, advance, and return it."""
        symbol = self._current()
        if symbol.type != symbol_type:
            raise ParseError(f"Expected {symbol_type.name}, got {symbol.type.name}", symbol)
        return self._advance()

    def _is_at_end(self) -> bool:
        """Check if we've reached end of symbols."""
        return self._current().type == SymbolType.EOF


def parse(text: str, catalog: Optional[CatalogRegistry] = None, context: Optional[str] = None) -> DocumentNode:
    """Parse a stored attribute value."""
    return TagParser(catalog).parse(text, context)
