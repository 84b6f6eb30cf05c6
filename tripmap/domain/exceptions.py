"""Domain semantic exceptions."""


class DomainError(Exception):
    """Base domain exception."""


class PlanError(DomainError):
    """A planning run failed; the message is shown to the user."""


class PlaceNotFoundError(PlanError):
    """Origin or destination text could not be resolved."""


class PlanPreconditionError(PlanError):
    """Origin and destination are not both available."""


class RoutePreconditionError(PlanError):
    """Fewer than two places were given to the route estimator."""
