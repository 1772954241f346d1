"""Dependency Store error hierarchy."""

from __future__ import annotations


class StoreError(RuntimeError):
    """Base error for Dependency Store failures."""


class StoreTransportError(StoreError):
    """The store could not be reached or answered garbage."""


class TaskNotFoundError(StoreError):
    """A referenced task does not exist."""


class DependencyNotFoundError(StoreError):
    """No dependency with this id exists for the task."""


class InvalidDependencyError(StoreError):
    """The store refused the edge (e.g. a task depending on itself)."""


class DependencyCycleError(InvalidDependencyError):
    """The edge would close a cycle through other tasks."""
