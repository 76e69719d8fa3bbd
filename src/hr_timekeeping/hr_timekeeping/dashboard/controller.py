from __future__ import annotations

from flask import Flask

from ..common.http import envelope
from ..core.constants import API_PREFIX
from ..container import Container
from ..identity.session import admin_required


def register(app: Flask, container: Container) -> None:
    @app.route(f"{API_PREFIX}/work-shifts/dashboard-stats", methods=["GET"], endpoint="dashboard_stats")
    @admin_required
    def dashboard_stats():
        stats = container.dashboard_service.get_stats()
        return envelope("Dashboard stats retrieved successfully", stats.to_dict())
