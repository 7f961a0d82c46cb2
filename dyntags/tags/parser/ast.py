"""
Abstract Syntax Tree (AST) nodes for dynamic tag expressions.

A parsed value is a DocumentNode: an ordered sequence of literal text runs
and tokens.

    "Hi @user(first_name).capitalize()!"

    DocumentNode(children=[
        TextNode(content='Hi '),
        TokenNode(group='user', field='first_name',
                  modifiers=[AppliedModifierNode(key='capitalize')]),
        TextNode(content='!'),
    ])

Positions are informational only and are ignored by equality, so two
documents compare equal when they have the same structure.
"""

import dataclasses
from dataclasses import dataclass, field
from typing import Any, Dict, List, Union


@dataclass
class TagNode:
    """Base class for all AST nodes."""
    position: int = field(default=0, compare=False)


@dataclass
class TextNode(TagNode):
    """
    Literal text content (not a reference).

    Example: "Hello, " in "Hello, @user(first_name)"
    """
    content: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {'type': 'text', 'content': self.content, 'position': self.position}


@dataclass
class AppliedModifierNode(TagNode):
    """
    A modifier bound to concrete argument values.

    Example: truncate(50) in @post(title).truncate(50)

    Arguments are str, int, float or bool depending on the declared
    argument type of the modifier.
    """
    key: str = ""
    args: List[Any] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {'key': self.key, 'args': list(self.args), 'position': self.position}


@dataclass
class TokenNode(TagNode):
    """
    One reference to contextual data with its modifier chain.

    Example: @post(title).truncate(50).append("...")

    Attributes:
        group: Data group key ('post')
        field: Field key ('title'), empty for group methods like @site().query_var("q")
        modifiers: Applied modifiers, in chain order
    """
    group: str = ""
    field: str = ""
    # "field" is shadowed by the attribute above
    modifiers: List[AppliedModifierNode] = dataclasses.field(default_factory=list)

    @property
    def modifier_keys(self) -> List[str]:
        return [m.key for m in self.modifiers]

    def to_dict(self) -> Dict[str, Any]:
        return {
            'type': 'token',
            'group': self.group,
            'field': self.field,
            'modifiers': [m.to_dict() for m in self.modifiers],
            'position': self.position,
        }


@dataclass
class DocumentNode(TagNode):
    """
    Root node containing all parsed content.

    A document is a sequence of text and token nodes. Text found after the
    close marker of a stored value is kept verbatim in trailing; it is
    never part of the expression.
    """
    children: List[Union[TextNode, TokenNode]] = field(default_factory=list)
    trailing: str = ""

    def tokens(self) -> List[TokenNode]:
        """All tokens, in document order."""
        return [child for child in self.children if isinstance(child, TokenNode)]

    def has_tokens(self) -> bool:
        return any(isinstance(child, TokenNode) for child in self.children)

    def is_empty(self) -> bool:
        """True when there is nothing to render: no tokens and no text."""
        if self.trailing:
            return False
        return all(isinstance(child, TextNode) and not child.content for child in self.children)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'children': [child.to_dict() for child in self.children],
            'trailing': self.trailing,
        }

