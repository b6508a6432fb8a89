"""Demand-driven shift planning for restaurants.

Modules:
- config: load and validate configuration (YAML or JSON)
- domain: SQLAlchemy models, session helpers and repositories
- services: time helpers, staffing needs, availability checks, efficiency scoring, dashboard metrics
- engine: per-day shift generator, optimizer, coverage finder, orchestrator
- forecasting: demand predictions, accuracy scoring, recommendations
- io: CSV import/export
- validator: post-generation checks and text summaries
- cli: command-line interface entrypoints
"""

__all__ = [
    "config",
    "domain",
    "services",
    "engine",
    "forecasting",
    "io",
    "validator",
    "cli",
]
