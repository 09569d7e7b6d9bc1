"""Mini README: Report exporters for SalonDesk.

Currently provides the CSV day report. Exporters only read summaries the
register has already computed.
"""

from .day_report import DayReport, format_currency

__all__ = ["DayReport", "format_currency"]
