"""Package-wide exception types.

These signal programming errors (structural misuse). Data-quality problems
never raise; they degrade to bounded scores instead.
"""


class PDFModelingError(Exception):
    """Base exception for all pdfmodeler errors."""


class MetricDomainError(PDFModelingError, ValueError):
    """Raised when a metric domain is empty, inverted, or infinite."""


class ModelDefinitionError(PDFModelingError):
    """Raised when an evaluation model is used before it is fully defined."""


class MetricMismatchError(PDFModelingError, ValueError):
    """Raised when scores do not match the metrics of an evaluation model."""


class NoScoringResultsError(PDFModelingError, LookupError):
    """Raised when a top result is requested but nothing was scored."""


class ConfigValidationError(PDFModelingError, ValueError):
    """Raised when supplied configuration values are invalid."""
