"""
Dynamic Data Catalog

Describes the data groups, fields and modifiers a tag expression can use:
@post(title).truncate(50)
"""

from dyntags.tags.catalog.base import (
    ALL_TYPES,
    ArgType,
    CatalogRegistry,
    DataGroup,
    Field,
    Modifier,
    ModifierArg,
    ReturnType,
    coerce_return_type,
)
from dyntags.tags.catalog.groups import (
    ALL_CONTEXTS,
    DEFAULT_GROUPS,
    POST_CONTEXT,
    SITE_CONTEXT,
    TERM_CONTEXT,
    USER_CONTEXT,
)
from dyntags.tags.catalog.modifiers import DEFAULT_MODIFIERS


def create_default_catalog() -> CatalogRegistry:
    """Create a registry with the default groups and modifiers."""
    return CatalogRegistry(DEFAULT_GROUPS, DEFAULT_MODIFIERS)


__all__ = [
    'ALL_CONTEXTS',
    'ALL_TYPES',
    'ArgType',
    'CatalogRegistry',
    'DataGroup',
    'Field',
    'Modifier',
    'ModifierArg',
    'ReturnType',
    'coerce_return_type',
    'create_default_catalog',
    'POST_CONTEXT',
    'SITE_CONTEXT',
    'TERM_CONTEXT',
    'USER_CONTEXT',
]
