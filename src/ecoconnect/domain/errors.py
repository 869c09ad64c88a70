"""Error taxonomy for the item lifecycle."""


class EcoConnectError(Exception):
    """Base class for errors surfaced to callers."""


class InvalidInputError(EcoConnectError):
    """Malformed or missing input; rejected before any side effect."""


class NotFoundError(EcoConnectError):
    """No record exists for the requested identifier."""


class UpstreamFailureError(EcoConnectError):
    """An external collaborator failed and the failure is surfaced."""
