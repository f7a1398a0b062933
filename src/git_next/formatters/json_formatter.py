"""JSON formatter for git-next."""

import json
from typing import List

from ..engine.models import Advice
from .base import BaseFormatter, ReportContext, advice_stats


class JsonFormatter(BaseFormatter):
    """Render every advice item, suppressed ones included, plus counts."""

    def render(self, advice: List[Advice], context: ReportContext) -> None:
        print(self.format(advice, context))

    def format(self, advice: List[Advice], context: ReportContext) -> str:
        data = {
            "advice": [a.to_dict() for a in advice],
            "stats": advice_stats(advice),
        }
        return json.dumps(data, indent=2, ensure_ascii=False)
