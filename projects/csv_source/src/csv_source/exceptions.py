"""Errors raised while indexing a source."""


class SourceError(ValueError):
    """Base class for all source construction failures."""


class InvalidSourceError(SourceError):
    """Source is neither a path, an open file, nor a sequence of rows."""


class FieldNotFoundError(SourceError):
    """A field identifier does not resolve against the source field names."""


class InvalidFilterSpecError(SourceError):
    """An include/exclude option is not a mapping of fields to rules."""


class UnsupportedFilterError(SourceError, TypeError):
    """A filter rule is not a literal, a pattern, or a predicate."""
