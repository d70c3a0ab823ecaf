"""API route modules."""

from . import auth, export, processes, progress, responses, training

__all__ = ["auth", "export", "processes", "progress", "responses", "training"]
