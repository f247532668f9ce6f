"""
Top-level package for the Titanic passenger dashboard.

This package exposes the core architecture (records, aggregates, services,
views, UI adapters). Most code should import from submodules such as:
    titanic_dash.core
    titanic_dash.services
    titanic_dash.views
    titanic_dash.ui
"""

__all__: list[str] = []
