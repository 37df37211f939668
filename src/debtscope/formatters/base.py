"""Base formatter interface for report output."""

from abc import ABC, abstractmethod

from ..analysis.models import Report


class BaseFormatter(ABC):
    """Abstract base class for output formatters."""

    @abstractmethod
    def render(self, report: Report) -> None:
        """Render the report to stdout/stderr as appropriate."""

    @abstractmethod
    def format(self, report: Report) -> str:
        """Return the formatted string representation of the report."""
