"""
Reporting services.

Dashboard, public statistics, leaderboard, participant search and export.
"""

from deeddraw.services.reporting.reporting_service import ReportingService


__all__ = ["ReportingService"]
