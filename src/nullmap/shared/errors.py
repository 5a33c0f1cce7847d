class NullDistributionError(Exception):
    """Base class for every failure raised while building a null distribution report."""


class ConfigurationError(NullDistributionError):
    """No database backend (or more than one) is selected in the configuration."""


class DatabaseConnectionError(NullDistributionError):
    """The database backend is unreachable or rejected the credentials."""


class QueryError(NullDistributionError):
    """The table name is malformed or the backend rejected a query."""


class NoPrimaryKeyError(NullDistributionError):
    """The table has no usable single-column primary key."""


class CompositePrimaryKeyError(NoPrimaryKeyError):
    """The table's primary key spans more than one column."""


class EmptyResultError(NullDistributionError):
    """The sampled rows came back empty."""


class SchemaMismatchError(NullDistributionError):
    """Rows of one sample do not share the same column set."""
