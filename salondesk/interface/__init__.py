"""Mini README: Interfaces for SalonDesk.

Exports the FastAPI application factory used by the CLI ``run`` command.
"""

from .web_app import create_application

__all__ = ["create_application"]
