"""Repositories over the workbook database."""

from .process_repository import Process, ProcessRepository, ProcessStep
from .progress_repository import ProgressRecord, ProgressRepository
from .response_repository import ResponseRecord, ResponseRepository
from .training_repository import StepIndex, TrainingDay, TrainingRepository, TrainingStep
from .user_repository import User, UserRepository

__all__ = [
    "Process",
    "ProcessRepository",
    "ProcessStep",
    "ProgressRecord",
    "ProgressRepository",
    "ResponseRecord",
    "ResponseRepository",
    "StepIndex",
    "TrainingDay",
    "TrainingRepository",
    "TrainingStep",
    "User",
    "UserRepository",
]
