"""Service module exports."""

from . import (
    analytics,
    clients,
    dashboard,
    export_csv,
    import_csv,
    reports,
    seed,
    tasks,
)

__all__ = [
    "analytics",
    "clients",
    "dashboard",
    "export_csv",
    "import_csv",
    "reports",
    "seed",
    "tasks",
]
