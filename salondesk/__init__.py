"""Mini README: Core package initializer for SalonDesk.

SalonDesk tracks a salon's cash register day by day: service payments,
incidental expenses, the staff roster and a recomputed daily summary. This
module only re-exports the logging factory so importing the package stays
cheap; the register lives in :mod:`salondesk.register`.
"""

from .logging_utils import get_logger

__all__ = ["get_logger"]
