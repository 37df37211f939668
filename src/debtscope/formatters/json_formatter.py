"""JSON formatter: a direct projection of ``Report.to_dict()``."""

import json

from ..analysis.models import Report
from .base import BaseFormatter


class JsonFormatter(BaseFormatter):
    """Render a report as JSON."""

    def render(self, report: Report) -> None:
        print(self.format(report))

    def format(self, report: Report) -> str:
        return json.dumps(report.to_dict(), indent=2)
