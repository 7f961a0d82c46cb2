"""
Dynamic Tag Expression Engine

A control value is either a literal or a dynamic expression:

    @tags()Hi @user(first_name).capitalize(), welcome to @site(title)@endtags()

This package provides:
- A catalog of data groups, fields and modifiers per context
- Lexing and forgiving parsing of stored values
- Validation with type threading through modifier chains
- Canonical serialization
- A builder session with autocomplete and explicit commit/cancel

Usage:
    from dyntags.tags import create_default_catalog, open_session

    catalog = create_default_catalog()
    session = open_session(value, 'post', catalog)
    session.set_text('@post(title).truncate(50)')
    value = session.commit()

Values are never resolved here; rendering is the host's job.
"""

from dyntags.tags.catalog import CatalogRegistry, create_default_catalog
from dyntags.tags.exceptions import CatalogError, SessionStateError, TagEngineError, TokenIndexError
from dyntags.tags.parser import DocumentNode, TagParser, TokenNode, parse
from dyntags.tags.policies import SideChannelPolicy, WholeValuePolicy, disable_tags, open_builder
from dyntags.tags.serializer import serialize, serialize_expression, serialize_token, token_breadcrumb
from dyntags.tags.session import BuilderSession, SessionState, Suggestions, open_session
from dyntags.tags.validator import Diagnostic, DiagnosticKind, TagValidator, validate
from dyntags.tags.wrapper import is_active, side_channel_key, unwrap, wrap

__all__ = [
    'BuilderSession',
    'CatalogError',
    'CatalogRegistry',
    'Diagnostic',
    'DiagnosticKind',
    'DocumentNode',
    'SessionState',
    'SessionStateError',
    'SideChannelPolicy',
    'Suggestions',
    'TagEngineError',
    'TagParser',
    'TagValidator',
    'TokenIndexError',
    'TokenNode',
    'WholeValuePolicy',
    'create_default_catalog',
    'disable_tags',
    'is_active',
    'open_builder',
    'open_session',
    'parse',
    'serialize',
    'serialize_expression',
    'serialize_token',
    'side_channel_key',
    'token_breadcrumb',
    'unwrap',
    'validate',
    'wrap',
]
