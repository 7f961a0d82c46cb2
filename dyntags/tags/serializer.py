"""
Tag Serializer

Renders a DocumentNode back to its canonical stored form:

    @tags()Hi @user(first_name).truncate(20).append("!")@endtags()

Documents without tokens serialize to their literal text, without markers,
so clearing every token from a value turns it back into a plain literal.
"""

from typing import Any, Optional

from dyntags.tags.catalog import CatalogRegistry
from dyntags.tags.parser.ast import AppliedModifierNode, DocumentNode, TextNode, TokenNode
from dyntags.tags.wrapper import CLOSE_MARKER, OPEN_MARKER


def format_argument(value: Any) -> str:
    """
    Render one modifier argument.

    Booleans become true/false, numbers are written bare, everything else
    is double-quoted with backslashes and quotes escaped.
    """
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, (int, float)):
        return repr(value)
    text = '' if value is None else str(value)
    escaped = text.replace('\\', '\\\\').replace('"', '\\"')
    return f'"{escaped}"'


def serialize_modifier(modifier: AppliedModifierNode) -> str:
    args = ','.join(format_argument(arg) for arg in modifier.args)
    return f".{modifier.key}({args})"


def serialize_token(token: TokenNode) -> str:
    """Canonical form of one token: @group(field).mod(args)..."""
    chain = ''.join(serialize_modifier(m) for m in token.modifiers)
    return f"@{token.group}({token.field}){chain}"


def serialize_expression(document: DocumentNode) -> str:
    """Serialize a document without the wrapper markers."""
    parts = []
    for child in document.children:
        if isinstance(child, TokenNode):
            parts.append(serialize_token(child))
        elif isinstance(child, TextNode):
            parts.append(child.content)
    return ''.join(parts)


def serialize(document: DocumentNode) -> str:
    """
    Serialize a document to the string stored on the control.

    Wrapped with @tags()...@endtags() only when it holds at least one token.
    Trailing text only exists after a close marker, so a document carrying
    it keeps its markers and the text is written after @endtags().
    """
    expression = serialize_expression(document)
    if not document.has_tokens() and not document.trailing:
        return expression
    return f"{OPEN_MARKER}{expression}{CLOSE_MARKER}{document.trailing}"


def _humanize(key: str) -> str:
    return key.lstrip(':').replace('_', ' ').replace('.', ' / ').capitalize()


def token_breadcrumb(token: TokenNode, catalog: Optional[CatalogRegistry] = None) -> str:
    """
    Human readable label for a token: "Post / Title".

    Falls back to the humanized keys for anything the catalog does not know.
    """
    group = catalog.get_group(token.group) if catalog else None
    group_label = group.label if group and group.label else _humanize(token.group)

    if token.field:
        field = group.get_field(token.field) if group else None
        item_label = field.label if field and field.label else _humanize(token.field)
    elif token.modifiers:
        method = group.get_method(token.modifiers[0].key) if group else None
        item_label = method.label if method and method.label else _humanize(token.modifiers[0].key)
    else:
        return group_label

    return f"{group_label} / {item_label}"
