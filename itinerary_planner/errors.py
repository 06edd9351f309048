class PlannerError(Exception):
    """Base class for itinerary planner failures."""


class ConfigurationError(PlannerError):
    """The generation client is missing its API key or SDK."""


class MalformedResponseError(PlannerError):
    """The model returned text that is not valid JSON."""


class ItineraryDecodeError(PlannerError):
    """The model returned valid JSON that is not an itinerary."""

    def __init__(self, message: str, errors=None):
        super().__init__(message)
        self.errors = errors or []


class PlannerBusyError(PlannerError):
    """A generation is already in flight."""
