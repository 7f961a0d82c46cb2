"""
Tag Parser Module

Provides lexing and parsing of dynamic tag syntax into a DocumentNode.
"""

from dyntags.tags.parser.lexer import Lexer, Symbol, SymbolType, tokenize, tokenize_expression
from dyntags.tags.parser.ast import (
    AppliedModifierNode,
    DocumentNode,
    TagNode,
    TextNode,
    TokenNode,
)
from dyntags.tags.parser.parser import ParseError, TagParser, convert_argument, parse

__all__ = [
    'Lexer',
    'Symbol',
    'SymbolType',
    'tokenize',
    'tokenize_expression',
    'TagParser',
    'ParseError',
    'convert_argument',
    'parse',
    'TagNode',
    'TextNode',
    'TokenNode',
    'AppliedModifierNode',
    'DocumentNode',
]
