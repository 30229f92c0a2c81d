"""Exception types raised by the assessment services.

Routers translate these into HTTP responses; see api_utils.raise_http_error.

Author: Pat G Cappelaere, IBM Federal Consulting
Created: 2026-01-17
Version: 1.0.0
License: MIT
"""


class AssessmentError(Exception):
    """Base class for assessment engine errors."""


class GatewayError(AssessmentError):
    """Persistence failed. Retryable; the caller keeps its unsaved FieldSet."""


class InstanceNotFoundError(GatewayError):
    """No module instance with the requested id."""


class RecommendationNotFoundError(AssessmentError):
    """No register entry with the requested id."""


class StaleWriteError(AssessmentError):
    """Save rejected because the record changed since it was loaded."""


class SaveInProgressError(AssessmentError):
    """Another save of the same instance has not finished yet."""


class SyncError(AssessmentError):
    """Recommendation sync failed. Logged, never surfaced to the caller."""


# Made with Bob
