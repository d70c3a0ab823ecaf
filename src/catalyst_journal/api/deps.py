"""Dependency injection for API routes.

Only the database is cached; repositories and services are cheap and built
per request on top of it, so overriding ``get_database`` in tests swaps the
whole stack.
"""

from functools import lru_cache

from fastapi import Depends

from ..config import get_settings
from ..curriculum.catalog import Catalog, get_catalog
from ..db.database import JournalDatabase
from ..db.repositories.process_repository import ProcessRepository
from ..db.repositories.progress_repository import ProgressRepository
from ..db.repositories.response_repository import ResponseRepository
from ..db.repositories.training_repository import TrainingRepository
from ..db.repositories.user_repository import UserRepository
from ..services.account_service import AccountService
from ..services.auth_service import AuthService, get_auth_service
from ..services.export_service import ExportService
from ..services.process_service import ProcessService
from ..services.progress_service import ProgressService
from ..services.resolution import ResolutionEngine
from ..services.response_service import ResponseStore
from ..services.step_form_service import StepFormService


@lru_cache
def get_database() -> JournalDatabase:
    """Get the workbook database instance."""
    settings = get_settings()
    return JournalDatabase(str(settings.db_path))


def get_user_repository(db: JournalDatabase = Depends(get_database)) -> UserRepository:
    return UserRepository(db)


def get_training_repository(db: JournalDatabase = Depends(get_database)) -> TrainingRepository:
    return TrainingRepository(db)


def get_response_repository(db: JournalDatabase = Depends(get_database)) -> ResponseRepository:
    return ResponseRepository(db)


def get_account_service(
    users: UserRepository = Depends(get_user_repository),
    auth: AuthService = Depends(get_auth_service),
) -> AccountService:
    return AccountService(users, auth, min_password_length=get_settings().min_password_length)


def get_response_store(
    catalog: Catalog = Depends(get_catalog),
    responses: ResponseRepository = Depends(get_response_repository),
    training: TrainingRepository = Depends(get_training_repository),
) -> ResponseStore:
    return ResponseStore(responses, training, catalog)


def get_step_form_service(
    catalog: Catalog = Depends(get_catalog),
    responses: ResponseRepository = Depends(get_response_repository),
    training: TrainingRepository = Depends(get_training_repository),
) -> StepFormService:
    return StepFormService(catalog, ResolutionEngine(responses, training), training)


def get_progress_service(
    db: JournalDatabase = Depends(get_database),
    training: TrainingRepository = Depends(get_training_repository),
    store: ResponseStore = Depends(get_response_store),
    forms: StepFormService = Depends(get_step_form_service),
) -> ProgressService:
    return ProgressService(ProgressRepository(db), training, store, forms)


def get_process_service(
    db: JournalDatabase = Depends(get_database),
    training: TrainingRepository = Depends(get_training_repository),
    store: ResponseStore = Depends(get_response_store),
    forms: StepFormService = Depends(get_step_form_service),
) -> ProcessService:
    return ProcessService(ProcessRepository(db), training, store, forms)


def get_export_service(
    processes: ProcessService = Depends(get_process_service),
    training: TrainingRepository = Depends(get_training_repository),
    store: ResponseStore = Depends(get_response_store),
) -> ExportService:
    return ExportService(processes, training, store)
