"""Failure classification for model calls.

Every failure of the external call is funnelled through ``classify_failure``
so the orchestrator's control flow does not depend on exception types.
"""

from enum import Enum


class FailureKind(str, Enum):
    """Categories of model-call failure."""

    UNAVAILABLE = "unavailable"


def classify_failure(exc: BaseException) -> FailureKind:
    """Map an exception raised by the model call to a failure kind.

    Network errors, malformed responses and API errors currently share one
    category; all of them get the same persona fallback message.
    """
    return FailureKind.UNAVAILABLE
