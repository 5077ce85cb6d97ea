"""Reconciliation engine."""

from .reconciler import Reconciler, diff_tasks, reconcile

__all__ = [
    "Reconciler",
    "diff_tasks",
    "reconcile",
]
