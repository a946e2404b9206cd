"""Exceptions raised by the discovery engine."""


class DiscoveryError(Exception):
    """Base class for discovery engine errors."""


class RankingUnavailableError(DiscoveryError):
    """A data provider failed, so no trustworthy ranking can be produced."""

    def __init__(self, message: str, provider: str | None = None):
        super().__init__(message)
        self.provider = provider


class InvalidSearchOptionsError(DiscoveryError, ValueError):
    """Search options were rejected before any work was done."""

    def __init__(self, problems: list[str]):
        super().__init__("Invalid search options: " + "; ".join(problems))
        self.problems = problems
