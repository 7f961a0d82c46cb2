"""
Base classes for the dynamic data catalog.

The catalog describes everything a tag expression may reference:

- Data groups (post, author, user, site, term) and the contexts they apply to
- Fields of each group, with their return type
- Modifiers that can be chained after a value: @post(title).truncate(50)
- Group methods, modifiers scoped to a single group: @post().meta("key")

A CatalogRegistry is built once by the host and never mutated afterwards,
so it can be shared between builder sessions without locking.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, Union
from types import MappingProxyType

from dyntags.tags.exceptions import CatalogError


class ReturnType(Enum):
    """Types a field or modifier can produce"""
    TEXT = 'text'
    NUMBER = 'number'
    DATE = 'date'
    BOOLEAN = 'boolean'
    IMAGE = 'image'
    LIST = 'list'


class ArgType(Enum):
    """Types of modifier arguments"""
    TEXT = 'text'
    NUMBER = 'number'
    BOOLEAN = 'boolean'
    ENUM = 'enum'


ALL_TYPES: Tuple[ReturnType, ...] = tuple(ReturnType)


def coerce_return_type(value: Union[ReturnType, str, None]) -> Optional[ReturnType]:
    """Map a string ('text', 'number', ...) to a ReturnType, None if unknown."""
    if value is None or isinstance(value, ReturnType):
        return value
    try:
        return ReturnType(str(value).lower())
    except ValueError:
        return None


@dataclass(frozen=True)
class ModifierArg:
    """
    A declared parameter of a modifier.

    Example: the 'length' argument of truncate(50)
    """
    key: str
    label: str = ""
    type: ArgType = ArgType.TEXT
    required: bool = False
    default: Any = None
    choices: Tuple[str, ...] = ()
    description: str = ""

    def __post_init__(self):
        if self.type == ArgType.ENUM and not self.choices:
            raise CatalogError("Enum argument declared without choices", self.key)

    @property
    def has_default(self) -> bool:
        return self.default is not None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'key': self.key,
            'label': self.label,
            'type': self.type.value,
            'required': self.required,
            'default': self.default,
            'choices': list(self.choices),
            'description': self.description,
        }


@dataclass(frozen=True)
class Modifier:
    """
    A named transformation over a value of one of the accepted types.

    output_type None means the value keeps the type it had on input
    (fallback, append and similar pass-through modifiers).
    """
    key: str
    label: str = ""
    accepted_types: Tuple[ReturnType, ...] = ALL_TYPES
    output_type: Optional[ReturnType] = ReturnType.TEXT
    args: Tuple[ModifierArg, ...] = ()
    category: str = 'other'
    description: str = ""

    def __post_init__(self):
        seen = set()
        for arg in self.args:
            if arg.key in seen:
                raise CatalogError(f"Duplicate argument '{arg.key}'", self.key)
            seen.add(arg.key)

    def accepts(self, return_type: Optional[ReturnType]) -> bool:
        return return_type in self.accepted_types

    def result_type(self, input_type: Optional[ReturnType]) -> Optional[ReturnType]:
        """Type flowing out of this modifier given the type flowing in."""
        if self.output_type is None:
            return input_type
        return self.output_type

    def get_arg(self, index: int) -> Optional[ModifierArg]:
        if 0 <= index < len(self.args):
            return self.args[index]
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'key': self.key,
            'label': self.label,
            'accepted_types': [t.value for t in self.accepted_types],
            'output_type': self.output_type.value if self.output_type else None,
            'args': [arg.to_dict() for arg in self.args],
            'category': self.category,
            'description': self.description,
        }


@dataclass(frozen=True)
class Field:
    """A leaf attribute of a data group: @post(title)"""
    key: str
    label: str = ""
    return_type: ReturnType = ReturnType.TEXT
    description: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            'key': self.key,
            'label': self.label,
            'type': self.return_type.value,
            'description': self.description,
        }


@dataclass(frozen=True)
class DataGroup:
    """
    A namespace of fields bound to one kind of contextual subject.

    Attributes:
        contexts: Context names in which the group may be referenced
        aliases: Alternative field keys, e.g. ':url' -> 'permalink'
        methods: Modifiers invoked on the group itself: @site().query_var("q")
    """
    key: str
    label: str = ""
    icon: str = ""
    contexts: Tuple[str, ...] = ()
    fields: Tuple[Field, ...] = ()
    methods: Tuple[Modifier, ...] = ()
    aliases: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self):
        for kind, items in (('field', self.fields), ('method', self.methods)):
            seen = set()
            for item in items:
                if item.key in seen:
                    raise CatalogError(f"Duplicate {kind} '{item.key}'", self.key)
                seen.add(item.key)
        for alias, target in self.aliases.items():
            if target not in {f.key for f in self.fields}:
                raise CatalogError(f"Alias '{alias}' points to unknown field '{target}'", self.key)
        object.__setattr__(self, 'aliases', MappingProxyType(dict(self.aliases)))

    def get_field(self, key: str) -> Optional[Field]:
        key = self.aliases.get(key, key)
        for item in self.fields:
            if item.key == key:
                return item
        return None

    def get_method(self, key: str) -> Optional[Modifier]:
        for method in self.methods:
            if method.key == key:
                return method
        return None

    def applies_to(self, context: str) -> bool:
        return context in self.contexts

    def to_dict(self, include_fields: bool = False) -> Dict[str, Any]:
        data = {
            'key': self.key,
            'label': self.label,
            'icon': self.icon,
            'contexts': list(self.contexts),
        }
        if include_fields:
            data['fields'] = [f.to_dict() for f in self.fields]
            data['methods'] = [m.to_dict() for m in self.methods]
            data['aliases'] = dict(self.aliases)
        return data


class CatalogRegistry:
    """
    Registry of data groups and modifiers available to the tag engine.

    Lookups never raise: unknown groups, contexts or types produce empty
    results so hosts can render a "nothing available" state.
    """

    def __init__(self, groups: Iterable[DataGroup] = (), modifiers: Iterable[Modifier] = ()):
        self._groups: Dict[str, DataGroup] = {}
        self._modifiers: Dict[str, Modifier] = {}

        for group in groups:
            if group.key in self._groups:
                raise CatalogError("Duplicate data group", group.key)
            self._groups[group.key] = group

        for modifier in modifiers:
            if modifier.key in self._modifiers:
                raise CatalogError("Duplicate modifier", modifier.key)
            self._modifiers[modifier.key] = modifier

    def extend(
        self,
        groups: Iterable[DataGroup] = (),
        modifiers: Iterable[Modifier] = ()
    ) -> 'CatalogRegistry':
        """Return a new registry with extra groups and modifiers added."""
        return CatalogRegistry(
            list(self._groups.values()) + list(groups),
            list(self._modifiers.values()) + list(modifiers),
        )

    # Groups and fields

    def groups_for(self, context: str) -> List[DataGroup]:
        """Data groups that may be referenced in the given context."""
        return [g for g in self._groups.values() if g.applies_to(context)]

    def list_groups(self) -> List[DataGroup]:
        return list(self._groups.values())

    def get_group(self, key: str) -> Optional[DataGroup]:
        return self._groups.get(key)

    def has_group(self, key: str) -> bool:
        return key in self._groups

    def is_applicable(self, group_key: str, context: str) -> bool:
        group = self._groups.get(group_key)
        return group is not None and group.applies_to(context)

    def fields_for(self, group_key: str) -> List[Field]:
        group = self._groups.get(group_key)
        if not group:
            return []
        return list(group.fields)

    def get_field(self, group_key: str, field_key: str) -> Optional[Field]:
        group = self._groups.get(group_key)
        if not group:
            return None
        return group.get_field(field_key)

    def methods_for(self, group_key: str) -> List[Modifier]:
        group = self._groups.get(group_key)
        if not group:
            return []
        return list(group.methods)

    def get_method(self, group_key: str, key: str) -> Optional[Modifier]:
        group = self._groups.get(group_key)
        if not group:
            return None
        return group.get_method(key)

    def contexts(self) -> List[str]:
        """Every context name any group applies to, in first-seen order."""
        seen: List[str] = []
        for group in self._groups.values():
            for context in group.contexts:
                if context not in seen:
                    seen.append(context)
        return seen

    # Modifiers

    def modifiers_for(self, return_type: Union[ReturnType, str, None]) -> List[Modifier]:
        """Modifiers that can be chained after a value of the given type."""
        return_type = coerce_return_type(return_type)
        if return_type is None:
            return []
        return [m for m in self._modifiers.values() if m.accepts(return_type)]

    def list_modifiers(self) -> List[Modifier]:
        return list(self._modifiers.values())

    def get_modifier(self, key: str) -> Optional[Modifier]:
        return self._modifiers.get(key)

    def has_modifier(self, key: str) -> bool:
        return key in self._modifiers

    # Autocomplete listing

    def flat_tags(self, context: str) -> List[Dict[str, Any]]:
        """
        Flatten every field and method applicable in a context.

        Returns entries like:
            {'group': 'post', 'key': 'title', 'label': 'Title',
             'full_path': '@post(title)', 'breadcrumb': 'Post / Title',
             'type': 'text'}
        """
        tags = []
        for group in self.groups_for(context):
            for item in group.fields:
                tags.append({
                    'group': group.key,
                    'key': item.key,
                    'label': item.label,
                    'full_path': f"@{group.key}({item.key})",
                    'breadcrumb': f"{group.label} / {item.label}",
                    'type': item.return_type.value,
                })
            for method in group.methods:
                tags.append({
                    'group': group.key,
                    'key': method.key,
                    'label': method.label,
                    'full_path': f"@{group.key}().{method.key}()",
                    'breadcrumb': f"{group.label} / {method.label}",
                    'type': 'method',
                })
        return tags

    def __repr__(self):
        return f"<CatalogRegistry groups={len(self._groups)} modifiers={len(self._modifiers)}>"
