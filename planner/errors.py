from typing import Any, Optional


class PlannerError(Exception):
    """Base class for failures surfaced by the gateway and the client cache."""

    status_code: int = 500

    def __init__(self, message: str, *, details: Optional[Any] = None):
        super().__init__(message)
        self.message = message
        self.details = details


class NetworkFailure(PlannerError):
    """A request could not be completed or came back with an unexpected status."""

    status_code = 502

    def __init__(self, message: str, *, status_code: Optional[int] = None, details: Optional[Any] = None):
        super().__init__(message, details=details)
        if status_code is not None:
            self.status_code = status_code


class ValidationFailure(PlannerError):
    status_code = 400


class NotFound(PlannerError):
    status_code = 404

    def __init__(self, entity: str, entity_id: str):
        super().__init__(f"{entity} not found")
        self.entity = entity
        self.entity_id = entity_id


class DuplicateSubmission(PlannerError):
    """An identical create is already in flight."""

    status_code = 409
