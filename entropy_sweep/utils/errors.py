# entropy_sweep/utils/errors.py


class SweepError(RuntimeError):
    """Base class for every error raised by the sweep engine."""


class ConfigurationError(SweepError, ValueError):
    """
    Invalid user-provided configuration (bits, fees, capital, grid).

    Fatal: raised before any pipeline runs.
    """


class SeriesValidationError(SweepError, ValueError):
    """
    Input bars violate the data-source contract
    (timestamps not strictly ascending, non-positive or non-finite price).

    Fatal: the series is rejected before entering any stage.
    """


class InsufficientDataError(SweepError):
    """
    Series too short for the requested period.

    Soft: captured in that combination's Summary, the sweep continues.
    """
