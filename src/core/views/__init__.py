"""View exports

Builders turning command outcomes into transport-neutral reports.
"""

from src.core.views.report_builder import error_report, mention, reply_report

__all__ = ["error_report", "mention", "reply_report"]
