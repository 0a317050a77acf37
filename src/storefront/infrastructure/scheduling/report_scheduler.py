"""Periodic product report job."""

import asyncio
import logging
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from storefront.application.ports.mail import MailTransport
from storefront.application.services import ProductNotificationService
from storefront.infrastructure.persistence.sqlalchemy.repositories import (
    ProductRepositorySQLAlchemy,
)

logger = logging.getLogger(__name__)


class ProductReportScheduler:
    """
    Sends the catalog report every ``interval_seconds`` on the event loop.

    Each run uses its own database session. A failed run is logged and the
    loop carries on with the next tick.
    """

    def __init__(  # NOQA: PLR0913
        self,
        session_maker: async_sessionmaker[AsyncSession],
        mail_transport: MailTransport,
        interval_seconds: float,
        recipient: str,
        subject: str,
    ):
        self._session_maker = session_maker
        self._mail_transport = mail_transport
        self._interval_seconds = interval_seconds
        self._recipient = recipient
        self._subject = subject
        self._task: Optional[asyncio.Task[None]] = None

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def run_once(self) -> bool:
        """Run a single report.

        Returns
        -------
        True if a report was sent, False if the run was skipped or failed
        """
        logger.info("Running scheduled task: sending product report")
        try:
            async with self._session_maker() as session:
                service = ProductNotificationService(
                    product_repository=ProductRepositorySQLAlchemy(session),
                    mail_transport=self._mail_transport,
                    report_recipient=self._recipient,
                    report_subject=self._subject,
                )
                return await service.send_scheduled_report()
        except Exception:
            logger.exception("Scheduled product report failed")
            return False

    async def _run_forever(self) -> None:
        while True:
            await asyncio.sleep(self._interval_seconds)
            await self.run_once()

    def start(self) -> None:
        if self.is_running:
            return
        self._task = asyncio.create_task(self._run_forever())
        logger.info(
            "Product report scheduled every %ss to %s",
            self._interval_seconds,
            self._recipient,
        )

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
        logger.info("Product report scheduler stopped")
