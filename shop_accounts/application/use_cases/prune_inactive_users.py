"""Inactive user pruning use case"""

import asyncio
import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Callable, Dict, List

from sqlalchemy.exc import SQLAlchemyError

from ...core.errors import NotificationError
from ...core.security import utcnow
from ...domain.entities.user import User
from ...domain.repositories.unit_of_work import IUnitOfWork
from ...infrastructure.external_services.email_service import EmailService

logger = logging.getLogger(__name__)


@dataclass
class PruneReport:
    cutoff: datetime
    deleted: List[str] = field(default_factory=list)
    failed: Dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.failed

    def to_dict(self) -> dict:
        return {
            "cutoff": self.cutoff.isoformat(),
            "deleted": list(self.deleted),
            "failed": dict(self.failed),
        }


class PruneInactiveUsersUseCase:
    """
    Deletes every user whose last connection is strictly older than the
    retention window.

    Each user is notified and then deleted; all users are processed
    concurrently and the per-user outcomes are collected into a report.
    A user whose notification could not be sent is kept; when the deletions
    cannot be saved, every notified user is reported as failed.
    """

    def __init__(
        self,
        unit_of_work: IUnitOfWork,
        email_service: EmailService,
        retention: timedelta = timedelta(days=2),
        clock: Callable[[], datetime] = utcnow,
    ):
        self.unit_of_work = unit_of_work
        self.email_service = email_service
        self.retention = retention
        self.clock = clock

    async def execute(self) -> PruneReport:
        report = PruneReport(cutoff=self.clock() - self.retention)

        async with self.unit_of_work:
            inactive = await self.unit_of_work.users.list_inactive_since(report.cutoff)

            results = await asyncio.gather(
                *(self._notify_and_delete(user) for user in inactive),
                return_exceptions=True,
            )

            for user, result in zip(inactive, results):
                if isinstance(result, Exception):
                    logger.error("Could not prune user %s: %s", user.email, result)
                    report.failed[str(user.email)] = str(result)
                else:
                    report.deleted.append(str(user.email))

            try:
                await self.unit_of_work.commit()
            except SQLAlchemyError as e:
                # Notified users whose deletion was lost are reported, not dropped
                await self.unit_of_work.rollback()
                logger.error("Could not save %d deletions: %s", len(report.deleted), e)
                for address in report.deleted:
                    report.failed[address] = f"Notified but not deleted: {e}"
                report.deleted = []

        logger.info(
            "Pruned %d inactive users (%d failed), cutoff %s",
            len(report.deleted), len(report.failed), report.cutoff.isoformat(),
        )
        return report

    async def _notify_and_delete(self, user: User) -> None:
        sent = await self.email_service.send_inactive_account_email(
            to_email=str(user.email),
            first_name=user.first_name,
        )
        if not sent:
            raise NotificationError(str(user.email))

        await self.unit_of_work.users.delete(user.id)
