"""
Domain error taxonomy.

Services raise these; the handlers registered in ``jobboard.main`` turn them
into HTTP responses.
"""


class JobBoardError(Exception):
    """Base class for every deterministic domain failure"""

    status_code = 500

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class Forbidden(JobBoardError):
    """Authorization predicate returned false"""

    status_code = 403


class NotFound(JobBoardError):
    """Referenced entity does not exist (or is not visible to the actor)"""

    status_code = 404

    def __init__(self, resource_type: str, identifier: str):
        self.resource_type = resource_type
        self.identifier = identifier
        super().__init__(f"{resource_type} not found")


class Conflict(JobBoardError):
    """Uniqueness violation: duplicate application or duplicate role"""

    status_code = 409


class ValidationError(JobBoardError):
    """A required field is missing or unusable"""

    status_code = 400

    def __init__(self, field: str, message: str):
        self.field = field
        super().__init__(f"{field}: {message}")


class UpstreamError(JobBoardError):
    """Email provider transport or provider-side failure"""

    status_code = 502
