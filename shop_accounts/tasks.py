import asyncio
import logging
from datetime import timedelta

from .celery_app import celery_app
from .core.config import settings
from .db.database import SessionLocal
from .infrastructure.external_services.email_service import EmailService
from .infrastructure.repositories.unit_of_work_impl import UnitOfWorkImpl
from .application.use_cases.prune_inactive_users import PruneInactiveUsersUseCase

logger = logging.getLogger(__name__)


def run_prune(session_factory=SessionLocal, email_service=None) -> dict:
    """Run one pruning pass in a fresh session and return the report."""
    db = session_factory()
    try:
        use_case = PruneInactiveUsersUseCase(
            UnitOfWorkImpl(db),
            email_service or EmailService(settings),
            retention=timedelta(days=settings.INACTIVITY_RETENTION_DAYS),
        )
        report = asyncio.run(use_case.execute())
    finally:
        db.close()

    if report.failed:
        logger.warning("Pruning left %d users behind: %s", len(report.failed), report.failed)
    return report.to_dict()


@celery_app.task(name="shop_accounts.tasks.prune_inactive_users")
def prune_inactive_users():
    """Scheduled task: notify and delete inactive users."""
    return run_prune()
