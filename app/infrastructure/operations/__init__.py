"""Operation results for side effects that must not fail a request."""

from infrastructure.operations.result import OperationResult
from infrastructure.operations.status import OperationStatus

__all__ = ["OperationResult", "OperationStatus"]
