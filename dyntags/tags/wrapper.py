"""
Wrapper markers for dynamic values.

A stored attribute is in dynamic mode when it starts with @tags() and
contains @endtags():

    "@tags()@post(title)@endtags()"   -> dynamic
    "Hello world"                      -> literal, never lexed
"""

from typing import Any

OPEN_MARKER = '@tags()'
CLOSE_MARKER = '@endtags()'

SIDE_CHANNEL_SUFFIX = 'DynamicTag'


def is_active(value: Any) -> bool:
    """Check if a stored value holds a dynamic expression."""
    return isinstance(value, str) and value.startswith(OPEN_MARKER) and CLOSE_MARKER in value


def unwrap(value: Any) -> str:
    """
    Extract the expression between the markers.

    Non-dynamic values are returned unchanged (None becomes '').
    """
    if value is None:
        return ''
    if not is_active(value):
        return value
    end = value.find(CLOSE_MARKER, len(OPEN_MARKER))
    return value[len(OPEN_MARKER):end]


def wrap(expression: str) -> str:
    """
    Wrap an expression with the markers.

    Empty input stays empty so that clearing a builder clears the control,
    and already wrapped values are returned as they are. A half-wrapped
    value only gets its close marker. Open markers inside the expression
    are removed, so the result holds exactly one.

    An empty region does not survive a round trip:
    wrap(unwrap('@tags()@endtags()')) is '', the same as clearing.
    """
    if not expression:
        return ''
    if is_active(expression):
        return expression
    if expression.startswith(OPEN_MARKER):
        expression = expression[len(OPEN_MARKER):]
    while OPEN_MARKER in expression:
        expression = expression.replace(OPEN_MARKER, '')
    if not expression:
        return ''
    return f"{OPEN_MARKER}{expression}{CLOSE_MARKER}"


def side_channel_key(attribute: str) -> str:
    """Name of the sibling attribute carrying a dynamic override: width -> widthDynamicTag"""
    return f"{attribute}{SIDE_CHANNEL_SUFFIX}"
