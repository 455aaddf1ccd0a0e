from __future__ import annotations


class ChartError(Exception):
    """Base class for every error raised by simplechart."""


class ChartConfigurationError(ChartError, ValueError):
    pass


class MissingContainerError(ChartConfigurationError, LookupError):
    pass


class ChartInputError(ChartError, ValueError):
    """Rejected `set_data` input; the previously published scene is left untouched."""


class MalformedSeriesError(ChartInputError):
    pass


class EmptySeriesListError(ChartInputError):
    pass


class DegenerateRangeError(ChartInputError):
    pass


class ChartInternalError(ChartError, RuntimeError):
    """Engine invariant violation. Signals a bug, not bad input."""
