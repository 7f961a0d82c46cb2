"""
Builder Session

The editing protocol behind a dynamic tag builder. A session holds one
draft document for the duration of one editing interaction:

    session = open_session(control_value, 'post', catalog)
    session.set_text('@post(title).')
    session.suggest_at(13)      # modifiers accepting text
    new_value = session.commit()

State machine:

    closed -> open -> committed
                   -> cancelled

Committed and cancelled are terminal. Editing again means opening a new
session seeded from the committed (or previous) value. Sessions never
touch storage; the host decides what to do with the committed string.
"""

from copy import deepcopy
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional
import logging
import re

from dyntags.tags.catalog import CatalogRegistry
from dyntags.tags.exceptions import SessionStateError, TokenIndexError
from dyntags.tags.parser import AppliedModifierNode, DocumentNode, TagParser, TextNode, TokenNode
from dyntags.tags.serializer import serialize, serialize_expression
from dyntags.tags.validator import Diagnostic, TagValidator, running_type
from dyntags.tags.wrapper import unwrap

logger = logging.getLogger(__name__)

# Cursor patterns, matched against the text before the cursor
_FIELD_QUERY = re.compile(r'@([^\W\d]\w*)\(([\w.:\-]*)$')
_MODIFIER_QUERY = re.compile(r'\.(\w*)$')
_GROUP_QUERY = re.compile(r'@(\w*)$')


class SessionState(str, Enum):
    CLOSED = 'closed'
    OPEN = 'open'
    COMMITTED = 'committed'
    CANCELLED = 'cancelled'


@dataclass
class Suggestions:
    """Autocomplete answer for a cursor position."""
    kind: Optional[str] = None                                  # 'groups', 'fields', 'modifiers' or None
    items: List[Dict[str, Any]] = field(default_factory=list)
    query: str = ""                                             # Partial name typed so far
    replace_from: int = 0                                       # Offset where the partial name starts

    def to_dict(self) -> Dict[str, Any]:
        return {
            'kind': self.kind,
            'items': self.items,
            'query': self.query,
            'replace_from': self.replace_from,
        }


def _filter_items(items: Iterable, query: str) -> List[Dict[str, Any]]:
    """Keep items whose key or label contains the query; prefix matches first."""
    query = query.lower()
    prefixed, contained = [], []
    for item in items:
        key, label = item.key.lower(), (item.label or '').lower()
        if key.startswith(query) or label.startswith(query):
            prefixed.append(item.to_dict())
        elif query in key or query in label:
            contained.append(item.to_dict())
    return prefixed + contained


class BuilderSession:
    """
    Stateful editor for one dynamic value.

    The draft is kept both as the text being typed (unwrapped) and as its
    parsed document; structural edits rewrite the text canonically.
    """

    def __init__(self, catalog: CatalogRegistry, context: str, label: Optional[str] = None):
        self.catalog = catalog
        self.context = context
        self.label = label
        self.state = SessionState.CLOSED
        self._parser = TagParser(catalog)
        self._validator = TagValidator(catalog)
        self._initial = ''
        self._text = ''
        self._trailing = ''
        self._document: Optional[DocumentNode] = None

    def open(self, initial: Optional[str] = None) -> 'BuilderSession':
        """
        Start editing.

        Args:
            initial: Current control value, wrapped or literal
        """
        if self.state != SessionState.CLOSED:
            raise SessionStateError('open', self.state.value)

        self._initial = initial or ''
        # Text after the close marker is carried through untouched
        self._trailing = self._parser.parse(self._initial, self.context).trailing
        self.state = SessionState.OPEN
        self._set_draft(unwrap(self._initial))
        logger.debug(f"Builder session opened: label={self.label}, context={self.context}")
        return self

    # Draft access

    @property
    def text(self) -> str:
        """The unwrapped draft text."""
        self._require_open('read')
        return self._text

    @property
    def trailing(self) -> str:
        """Literal text stored after the close marker, kept on commit."""
        self._require_open('read')
        return self._trailing

    def set_text(self, text: str):
        """Replace the draft with newly typed text."""
        self._require_open('edit')
        self._set_draft(text or '')

    def current_document(self) -> DocumentNode:
        """A copy of the draft document."""
        self._require_open('read')
        return deepcopy(self._document)

    def tokens(self) -> List[TokenNode]:
        self._require_open('read')
        return deepcopy(self._document.tokens())

    def diagnostics(self) -> List[Diagnostic]:
        """Validation problems of the draft in the session's context."""
        self._require_open('validate')
        return self._validator.validate(self._document, self.context)

    # Autocomplete

    def suggest_at(self, cursor: int) -> Suggestions:
        """
        What can be typed at a cursor offset in the draft text.

        - after "@pos"                 -> groups available in the context
        - after "@post(ti"             -> fields of the group
        - after "@post(title).tr"      -> modifiers accepting the running type
        - after "@site()."             -> methods of the group
        """
        self._require_open('suggest')
        cursor = max(0, min(cursor, len(self._text)))
        before = self._text[:cursor]

        match = _FIELD_QUERY.search(before)
        if match:
            group = self.catalog.get_group(match.group(1))
            fields = group.fields if group else ()
            return Suggestions('fields', _filter_items(fields, match.group(2)), match.group(2), match.start(2))

        match = _MODIFIER_QUERY.search(before)
        if match:
            suggestions = self._suggest_modifiers(before[:match.start()], match.group(1), match.start(1))
            if suggestions is not None:
                return suggestions

        match = _GROUP_QUERY.search(before)
        if match:
            groups = self.catalog.groups_for(self.context)
            return Suggestions('groups', _filter_items(groups, match.group(1)), match.group(1), match.start(1))

        return Suggestions(replace_from=cursor)

    def _suggest_modifiers(self, chain: str, query: str, replace_from: int) -> Optional[Suggestions]:
        document = self._parser.parse_expression(chain, self.context)
        if not document.children or not isinstance(document.children[-1], TokenNode):
            return None

        token = document.children[-1]
        if not token.field and not token.modifiers:
            candidates = self.catalog.methods_for(token.group)
        else:
            candidates = self.catalog.modifiers_for(running_type(token, self.catalog))

        return Suggestions('modifiers', _filter_items(candidates, query), query, replace_from)

    # Structural edits

    def replace_token(self, index: int, token: TokenNode):
        """Replace the token at a token index (not a character offset)."""
        self._require_open('edit')
        children = list(self._document.children)
        children[self._child_index(index)] = deepcopy(token)
        self._set_document(children)

    def insert_token(self, token: TokenNode, index: Optional[int] = None):
        """Insert a token before the token at index, or append it when index is None."""
        self._require_open('edit')
        children = list(self._document.children)
        count = len(self._document.tokens())

        if index is None or index == count:
            children.append(deepcopy(token))
        else:
            children.insert(self._child_index(index), deepcopy(token))
        self._set_document(children)

    def remove_token(self, index: int):
        self._require_open('edit')
        children = list(self._document.children)
        del children[self._child_index(index)]
        self._set_document(children)

    def update_modifiers(self, index: int, modifiers: List[AppliedModifierNode]):
        """Replace the modifier chain of the token at index."""
        self._require_open('edit')
        child_index = self._child_index(index)
        children = list(self._document.children)
        children[child_index] = replace(children[child_index], modifiers=deepcopy(list(modifiers)))
        self._set_document(children)

    # Terminal transitions

    def commit(self) -> str:
        """
        Finish editing and return the value to store on the control.

        Diagnostics do not block committing. A draft without tokens commits
        to its plain text, and an empty draft to ''. Text that followed the
        close marker of the initial value is written back after it.
        """
        self._require_open('commit')
        value = serialize(self._document)
        self.state = SessionState.COMMITTED
        logger.debug(f"Builder session committed: label={self.label}, tokens={len(self._document.tokens())}")
        return value

    def cancel(self):
        """Discard the draft. The host keeps its previous value."""
        self._require_open('cancel')
        self._document = None
        self._text = ''
        self._trailing = ''
        self.state = SessionState.CANCELLED
        logger.debug(f"Builder session cancelled: label={self.label}")

    # Helper methods

    def _require_open(self, operation: str):
        if self.state != SessionState.OPEN:
            raise SessionStateError(operation, self.state.value)

    def _set_draft(self, text: str):
        self._text = text
        self._document = self._parser.parse_expression(text, self.context)
        self._document.trailing = self._trailing

    def _set_document(self, children: List):
        merged: List = []
        for child in children:
            if isinstance(child, TextNode) and merged and isinstance(merged[-1], TextNode):
                merged[-1] = TextNode(content=merged[-1].content + child.content, position=merged[-1].position)
            else:
                merged.append(child)
        self._document = DocumentNode(children=merged, trailing=self._trailing)
        self._text = serialize_expression(self._document)

    def _child_index(self, token_index: int) -> int:
        """Map a token index to its index among the document's children."""
        positions = [i for i, child in enumerate(self._document.children) if isinstance(child, TokenNode)]
        if not 0 <= token_index < len(positions):
            raise TokenIndexError(token_index, len(positions))
        return positions[token_index]


def open_session(
    initial: Optional[str],
    context: str,
    catalog: CatalogRegistry,
    label: Optional[str] = None
) -> BuilderSession:
    """Create and open a builder session in one step."""
    return BuilderSession(catalog, context, label).open(initial)
