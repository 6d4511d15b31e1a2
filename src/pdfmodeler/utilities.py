"""
Utility functions for common tasks.

Includes:
- Logging setup for scripts and notebooks
- Left-shift estimation for distributions with support on [0, inf)
"""

import logging

import numpy as np
from numpy.typing import ArrayLike

from .core.estimation import ShiftedData

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
DEFAULT_SHIFT_TOLERANCE = 0.001


def configure_logging(level: int | str = logging.INFO) -> logging.Logger:
    """
    Attach a stream handler to the package logger.

    Calling this more than once replaces the handler instead of stacking
    duplicates.

    Args:
        level: Logging level for the package logger

    Returns:
        The configured package logger

    Example:
        >>> configure_logging("DEBUG")
        >>> results = evaluate_scores(estimation_results)
    """
    root = logging.getLogger("pdfmodeler")
    for handler in list(root.handlers):
        if getattr(handler, "_pdfmodeler_handler", False):
            root.removeHandler(handler)
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler._pdfmodeler_handler = True
    root.addHandler(handler)
    root.setLevel(level)
    return root


def estimate_left_shift_parameter(data: ArrayLike, tolerance: float = DEFAULT_SHIFT_TOLERANCE) -> float:
    """
    Estimate the amount to shift non-negative data to the left.

    Distributions with support [0, inf) fit poorly when the data sits well
    away from zero. Using the minimum x_min, the maximum x_max and the
    smallest observation strictly greater than the minimum, x_next:

        shift = (x_min * x_max - x_next^2) / (x_min + x_max - 2 * x_next)

    Data that cannot support an estimate (fewer than three observations,
    negative values, all values equal, or no distinct value between the
    minimum and maximum) is not shifted.

    Args:
        data: Non-negative observations
        tolerance: Estimates at or below this are reported as 0.0

    Returns:
        Estimated shift, 0.0 if there is no shift to apply

    Raises:
        ValueError: If the tolerance is negative

    References:
        Law, A.M. (2007). Simulation Modeling and Analysis, 4th ed.
        McGraw-Hill, p. 352.
    """
    if tolerance < 0.0:
        raise ValueError("The shift tolerance must be >= 0.0")
    x = np.asarray(data, dtype=float).ravel()
    if x.size < 3:
        return 0.0
    minimum, maximum = float(x.min()), float(x.max())
    if minimum < 0.0 or minimum == maximum:
        return 0.0
    # ties at the minimum are skipped
    next_smallest = float(x[x > minimum].min())
    if next_smallest == maximum:
        return 0.0
    bottom = minimum + maximum - 2.0 * next_smallest
    if bottom <= 0.0:
        # the estimate would not lie below the minimum
        logger.debug("No shift for min=%g, next=%g, max=%g", minimum, next_smallest, maximum)
        return 0.0
    shift = (minimum * maximum - next_smallest * next_smallest) / bottom
    if shift <= tolerance:
        return 0.0
    return float(shift)


def left_shift_data(data: ArrayLike, tolerance: float = DEFAULT_SHIFT_TOLERANCE) -> ShiftedData:
    """
    Shift the data to the left by the estimated shift parameter.

    Example:
        >>> shifted = left_shift_data(service_times)
        >>> result = EstimationResult(service_times, params, shifted_data=shifted)
    """
    shift = estimate_left_shift_parameter(data, tolerance)
    return ShiftedData.from_original(data, shift)
