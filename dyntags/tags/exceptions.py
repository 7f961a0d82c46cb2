"""
Exceptions for the dynamic tag engine.

User-supplied input never raises: malformed fragments degrade to literal
text and catalog problems become diagnostics. These classes only signal
programmer misuse of the engine API.
"""


class TagEngineError(Exception):
    """Base class for dynamic tag engine errors"""

    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)


class CatalogError(TagEngineError):
    """Inconsistent catalog definition (duplicate keys, bad argument spec)"""

    def __init__(self, message: str, key: str = None):
        self.key = key
        super().__init__(message)

    def __str__(self):
        if self.key:
            return f"[{self.key}] {self.message}"
        return self.message


class SessionStateError(TagEngineError):
    """Operation not allowed in the builder session's current state"""

    def __init__(self, operation: str, state: str):
        self.operation = operation
        self.state = state
        super().__init__(f"Cannot {operation} a session in state '{state}'")


class TokenIndexError(TagEngineError, IndexError):
    """Token index outside the draft document's token list"""

    def __init__(self, index: int, count: int):
        self.index = index
        self.count = count
        super().__init__(f"Token index {index} out of range (document has {count} tokens)")
