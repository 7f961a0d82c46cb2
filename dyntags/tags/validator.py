"""
Tag Validator

Walks the tokens of a parsed document and reports problems against the
catalog and the current context:

- group or field that does not exist
- group that cannot be used in the current context
- modifier that does not exist
- modifier applied to a value of a type it does not accept
- required argument left empty, or an argument of the wrong kind

Type threading: the running type starts as the field's return type and is
replaced by each modifier's output type in turn. A type mismatch does not
stop the walk, so every problem in a chain is reported at once.

Validation is advisory. It never raises and never blocks serialization.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional

from dyntags.tags.catalog import ArgType, CatalogRegistry, Modifier, ModifierArg, ReturnType
from dyntags.tags.parser.ast import AppliedModifierNode, DocumentNode, TokenNode


class DiagnosticKind(Enum):
    UNKNOWN_GROUP = 'UnknownGroup'
    UNKNOWN_FIELD = 'UnknownField'
    GROUP_NOT_APPLICABLE = 'GroupNotApplicableInContext'
    UNKNOWN_MODIFIER = 'UnknownModifier'
    TYPE_MISMATCH = 'ModifierTypeMismatch'
    MISSING_ARGUMENT = 'MissingRequiredArgument'
    INVALID_ARGUMENT = 'InvalidArgumentValue'


@dataclass
class Diagnostic:
    """A single validation problem."""
    kind: DiagnosticKind
    message: str
    token_index: int                       # Index among the document's tokens
    modifier_index: Optional[int] = None   # None when the problem is the reference itself
    position: int = 0

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            'kind': self.kind.value,
            'message': self.message,
            'token_index': self.token_index,
            'modifier_index': self.modifier_index,
            'position': self.position,
        }


def _is_missing(value: Any) -> bool:
    return value is None or value == ''


def _is_valid_value(arg: ModifierArg, value: Any) -> bool:
    if arg.type == ArgType.NUMBER:
        return isinstance(value, (int, float)) and not isinstance(value, bool)
    if arg.type == ArgType.BOOLEAN:
        return isinstance(value, bool)
    if arg.type == ArgType.ENUM:
        return str(value) in arg.choices
    return True


def _group_method(token: TokenNode, catalog: CatalogRegistry) -> Optional[Modifier]:
    """The group method a field-less token starts with: @site().query_var("q")"""
    if token.field or not token.modifiers:
        return None
    return catalog.get_method(token.group, token.modifiers[0].key)


def running_type(
    token: TokenNode,
    catalog: CatalogRegistry,
    upto: Optional[int] = None
) -> Optional[ReturnType]:
    """
    Type flowing out of a token's modifier chain.

    Args:
        token: Token to inspect
        catalog: Catalog to resolve the field and modifiers against
        upto: Only thread through the first `upto` modifiers

    Returns:
        The resulting type, or None when it cannot be known (unknown group,
        field or modifier along the way)
    """
    modifiers = token.modifiers if upto is None else token.modifiers[:upto]
    group = catalog.get_group(token.group)
    if group is None:
        return None

    if token.field:
        field = group.get_field(token.field)
        if field is None:
            return None
        current = field.return_type
        remaining = modifiers
    else:
        method = group.get_method(modifiers[0].key) if modifiers else None
        if method is None:
            return None
        current = method.output_type
        remaining = modifiers[1:]

    for applied in remaining:
        modifier = catalog.get_modifier(applied.key)
        if modifier is None:
            return None
        current = modifier.result_type(current)

    return current


class TagValidator:
    """
    Validates documents against a catalog.

    Usage:
        validator = TagValidator(catalog)
        diagnostics = validator.validate(document, 'post')
    """

    def __init__(self, catalog: CatalogRegistry):
        self.catalog = catalog

    def validate(self, document: DocumentNode, context: Optional[str] = None) -> List[Diagnostic]:
        """
        Validate every token of a document.

        Args:
            document: Parsed document
            context: Current context name; applicability is not checked when None

        Returns:
            Diagnostics in document order
        """
        diagnostics: List[Diagnostic] = []
        for token_index, token in enumerate(document.tokens()):
            diagnostics.extend(self.validate_token(token, token_index, context))
        return diagnostics

    def validate_token(
        self,
        token: TokenNode,
        token_index: int = 0,
        context: Optional[str] = None
    ) -> List[Diagnostic]:
        """Validate a single token and its modifier chain."""
        diagnostics: List[Diagnostic] = []

        def report(kind, message, modifier_index=None, position=None):
            diagnostics.append(Diagnostic(
                kind=kind,
                message=message,
                token_index=token_index,
                modifier_index=modifier_index,
                position=token.position if position is None else position,
            ))

        current: Optional[ReturnType] = None
        start = 0
        group = self.catalog.get_group(token.group)

        if group is None:
            report(DiagnosticKind.UNKNOWN_GROUP, f"Unknown data group '{token.group}'")
        else:
            if context is not None and not group.applies_to(context):
                report(
                    DiagnosticKind.GROUP_NOT_APPLICABLE,
                    f"'{group.label or group.key}' is not available in the '{context}' context"
                )

            if token.field:
                field = group.get_field(token.field)
                if field is None:
                    report(DiagnosticKind.UNKNOWN_FIELD, f"Unknown field '{token.field}' in '{token.group}'")
                else:
                    current = field.return_type
            else:
                method = _group_method(token, self.catalog)
                if method is None:
                    report(DiagnosticKind.UNKNOWN_FIELD, f"No field given for '{token.group}'")
                else:
                    for problem in self._check_arguments(method, token.modifiers[0]):
                        report(*problem, modifier_index=0, position=token.modifiers[0].position)
                    current = method.output_type
                    start = 1

        for index in range(start, len(token.modifiers)):
            applied = token.modifiers[index]
            modifier = self.catalog.get_modifier(applied.key)

            if modifier is None:
                report(
                    DiagnosticKind.UNKNOWN_MODIFIER,
                    f"Unknown modifier '{applied.key}'",
                    modifier_index=index,
                    position=applied.position,
                )
                current = None
                continue

            if current is not None and not modifier.accepts(current):
                report(
                    DiagnosticKind.TYPE_MISMATCH,
                    f"'{applied.key}' cannot be applied to a {current.value} value",
                    modifier_index=index,
                    position=applied.position,
                )

            for problem in self._check_arguments(modifier, applied):
                report(*problem, modifier_index=index, position=applied.position)

            current = modifier.result_type(current)

        return diagnostics

    @staticmethod
    def _check_arguments(modifier: Modifier, applied: AppliedModifierNode) -> List[tuple]:
        """Check applied arguments against the declared ones, in declaration order."""
        problems = []
        for index, arg in enumerate(modifier.args):
            value = applied.args[index] if index < len(applied.args) else None

            if _is_missing(value):
                if arg.required and not arg.has_default:
                    problems.append((
                        DiagnosticKind.MISSING_ARGUMENT,
                        f"'{modifier.key}' requires '{arg.label or arg.key}'",
                    ))
                continue

            if not _is_valid_value(arg, value):
                problems.append((
                    DiagnosticKind.INVALID_ARGUMENT,
                    f"Invalid value {value!r} for '{arg.label or arg.key}' of '{modifier.key}'",
                ))
        return problems


def validate(
    document: DocumentNode,
    catalog: CatalogRegistry,
    context: Optional[str] = None
) -> List[Diagnostic]:
    """Validate a document against a catalog."""
    return TagValidator(catalog).validate(document, context)
