"""
Storage policies for dynamic values.

A host control stores a dynamic value in one of two ways:

- Whole value: the attribute itself holds "@tags()...@endtags()" in place of
  its literal value (text, link, icon, image controls).
- Side channel: strictly typed attributes (numbers, ranges) keep their
  literal value, and a sibling "<attribute>DynamicTag" attribute holds the
  override. A non-empty override wins over the literal; clearing it brings
  the literal back.

Policies never mutate the host's attributes. write() and clear() return the
attribute updates to apply, in the shape of a partial attributes dict.
"""

from typing import Any, Dict, Mapping, Optional

from dyntags.tags.catalog import CatalogRegistry
from dyntags.tags.session import BuilderSession, open_session
from dyntags.tags.wrapper import is_active, side_channel_key, unwrap


def disable_tags() -> str:
    """Value a control is reset to when dynamic tags are turned off."""
    return ''


def open_builder(
    label: Optional[str],
    current_value: Optional[str],
    context: str,
    catalog: CatalogRegistry
) -> BuilderSession:
    """Open a builder session on a control's current value."""
    return open_session(current_value, context, catalog, label=label)


class StoragePolicy:
    """Common behaviour of the two storage conventions."""

    def __init__(self, attribute: str):
        self.attribute = attribute

    @property
    def key(self) -> str:
        """Attribute the dynamic value is stored under."""
        return self.attribute

    def read(self, attributes: Mapping[str, Any]) -> Any:
        return attributes.get(self.key)

    def is_dynamic(self, attributes: Mapping[str, Any]) -> bool:
        raise NotImplementedError

    def expression(self, attributes: Mapping[str, Any]) -> str:
        """Unwrapped expression of the stored dynamic value, '' when there is none."""
        if not self.is_dynamic(attributes):
            return ''
        return unwrap(self.read(attributes))

    def write(self, committed: str) -> Dict[str, Any]:
        return {self.key: committed}

    def clear(self) -> Dict[str, Any]:
        return {self.key: disable_tags()}

    def effective(self, attributes: Mapping[str, Any]) -> Any:
        """The value resolution starts from."""
        raise NotImplementedError

    def open_builder(
        self,
        attributes: Mapping[str, Any],
        context: str,
        catalog: CatalogRegistry,
        label: Optional[str] = None
    ) -> BuilderSession:
        """Open a builder seeded from the stored value; literal text is kept as the draft."""
        value = self.read(attributes)
        if not isinstance(value, str):
            value = ''
        return open_builder(label or self.attribute, value, context, catalog)

    def __repr__(self):
        return f"<{self.__class__.__name__} attribute={self.attribute!r}>"


class WholeValuePolicy(StoragePolicy):
    """The attribute holds either a literal or a wrapped expression."""

    def is_dynamic(self, attributes: Mapping[str, Any]) -> bool:
        return is_active(self.read(attributes))

    def effective(self, attributes: Mapping[str, Any]) -> Any:
        return self.read(attributes)


class SideChannelPolicy(StoragePolicy):
    """The expression lives in <attribute>DynamicTag next to the literal."""

    @property
    def key(self) -> str:
        return side_channel_key(self.attribute)

    def is_dynamic(self, attributes: Mapping[str, Any]) -> bool:
        value = self.read(attributes)
        return isinstance(value, str) and value != ''

    def literal(self, attributes: Mapping[str, Any]) -> Any:
        return attributes.get(self.attribute)

    def effective(self, attributes: Mapping[str, Any]) -> Any:
        if self.is_dynamic(attributes):
            return self.read(attributes)
        return self.literal(attributes)
