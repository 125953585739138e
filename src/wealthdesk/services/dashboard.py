"""Dashboard figures derived from clients and tasks."""

from __future__ import annotations

from dataclasses import dataclass, field

from ..models.client import Client, ClientStatus
from ..models.task import Task, TaskStatus
from .tasks import upcoming_tasks


@dataclass(slots=True)
class DashboardStats:
    total_clients: int
    active_clients: int
    new_leads: int
    pending_tasks: int
    status_breakdown: dict[ClientStatus, int] = field(default_factory=dict)
    recent_clients: list[Client] = field(default_factory=list)
    upcoming_tasks: list[Task] = field(default_factory=list)


def build_dashboard(clients: list[Client], tasks: list[Task], *, limit: int = 5) -> DashboardStats:
    breakdown = {status: 0 for status in ClientStatus}
    for client in clients:
        breakdown[client.status] += 1

    recent = sorted(clients, key=lambda c: c.created_at, reverse=True)[:limit]
    return DashboardStats(
        total_clients=len(clients),
        active_clients=breakdown[ClientStatus.ACTIVE],
        new_leads=breakdown[ClientStatus.LEAD],
        pending_tasks=sum(1 for t in tasks if t.status == TaskStatus.PENDING),
        status_breakdown=breakdown,
        recent_clients=recent,
        upcoming_tasks=upcoming_tasks(tasks, limit=limit),
    )


__all__ = ["DashboardStats", "build_dashboard"]
