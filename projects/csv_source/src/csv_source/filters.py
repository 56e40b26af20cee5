"""Include/exclude row filtering."""

from collections.abc import Mapping, Sequence
from re import Pattern

from csv_source.exceptions import InvalidFilterSpecError, UnsupportedFilterError
from csv_source.fields import field_id, resolve_field
from csv_source.types import (
    FieldId,
    FilterRule,
    FilterSpec,
    LiteralRule,
    PatternRule,
    PredicateRule,
    ValueType,
)


def filter_rule(rule: object) -> FilterRule:
    """Convert a literal, compiled pattern, or callable into a filter rule."""
    if isinstance(rule, LiteralRule | PatternRule | PredicateRule):
        return rule
    if isinstance(rule, str):
        return LiteralRule(rule)
    if isinstance(rule, Pattern):
        return PatternRule(rule)
    if callable(rule):
        return PredicateRule(rule)
    msg = f"Unsupported filter expression: {rule!r}"
    raise UnsupportedFilterError(msg)


def convert_filter(spec: FilterSpec | None, option: str) -> dict[FieldId, FilterRule]:
    """Convert an include/exclude option into rules keyed by field identifier."""
    if spec is None:
        return {}
    if not isinstance(spec, Mapping):
        msg = f"{option} option must be a mapping of field name(s)/index(es) to rules"
        raise InvalidFilterSpecError(msg)
    return {field_id(field): filter_rule(rule) for field, rule in spec.items()}


def resolve_filter(
    rules: Mapping[FieldId, FilterRule],
    field_names: Sequence[str],
) -> dict[int, FilterRule]:
    """Key filter rules by the position of their field."""
    return {resolve_field(field, field_names): rule for field, rule in rules.items()}


def check_filter(rule: FilterRule, value: ValueType, *, case_sensitive: bool) -> bool:
    """Return whether a field value satisfies a filter rule."""
    match rule:
        case LiteralRule(text):
            field_text = "" if value is None else str(value)
            if case_sensitive:
                return text == field_text
            return text.upper() == field_text.upper()
        case PatternRule(pattern):
            return value is not None and pattern.search(str(value)) is not None
        case PredicateRule(predicate):
            return bool(predicate(value))
    msg = f"Unsupported filter expression: {rule!r}"
    raise UnsupportedFilterError(msg)


class RowFilter:
    """Per-field include and exclude rules for the rows of a source."""

    def __init__(
        self,
        include: Mapping[int, FilterRule],
        exclude: Mapping[int, FilterRule],
        *,
        case_sensitive: bool,
    ) -> None:
        """Initialize the filter with rules keyed by field position."""
        self.include = dict(include)
        self.exclude = dict(exclude)
        self.case_sensitive = case_sensitive

    def __bool__(self) -> bool:
        """Return whether any rule is configured."""
        return bool(self.include or self.exclude)

    def rejects(self, position: int, value: ValueType) -> bool:
        """Return whether the value at this position filters out its row.

        A row is filtered when the field fails its include rule or satisfies
        its exclude rule. The include rule is checked first.
        """
        if (rule := self.include.get(position)) is not None and not check_filter(
            rule,
            value,
            case_sensitive=self.case_sensitive,
        ):
            return True
        if (rule := self.exclude.get(position)) is not None:
            return check_filter(rule, value, case_sensitive=self.case_sensitive)
        return False
