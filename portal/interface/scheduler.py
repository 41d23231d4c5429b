"""Background jobs.

The expired invite sweep runs on a cron schedule inside the API process.
Each run resolves its use case from a fresh request scope of the DI
container, the same way an HTTP request would.
"""

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger
from dishka import AsyncContainer
import logfire

from portal.application.usecase.invite import CleanupExpiredInvitesUseCase
from portal.config import SchedulerSettings
from portal.domain.result import Err, Ok

CLEANUP_JOB_ID = "cleanup_expired_invites"


async def run_cleanup(container: AsyncContainer) -> int:
    """Expire every overdue pending invite once.

    Args:
        container: Application DI container

    Returns:
        Number of invites expired by this run (0 on failure)
    """
    async with container() as request_container:
        use_case = await request_container.get(CleanupExpiredInvitesUseCase)
        result = await use_case.execute()

    match result:
        case Ok(value=response):
            logfire.info(
                "Expired invite cleanup finished",
                expired_count=response.expired_count,
            )
            return response.expired_count
        case Err(kind=kind, message=message):
            logfire.error("Expired invite cleanup failed", kind=kind, error=message)
            return 0


def create_cleanup_scheduler(
    container: AsyncContainer, settings: SchedulerSettings
) -> AsyncIOScheduler:
    """Build the scheduler with the cleanup job registered.

    The scheduler is returned stopped; the app lifespan starts it.

    Args:
        container: Application DI container
        settings: Scheduler settings (cron expression and timezone)

    Returns:
        Configured scheduler
    """
    scheduler = AsyncIOScheduler(timezone=settings.timezone)
    scheduler.add_job(
        run_cleanup,
        trigger=CronTrigger.from_crontab(
            settings.cleanup_cron, timezone=settings.timezone
        ),
        args=[container],
        id=CLEANUP_JOB_ID,
        replace_existing=True,
        max_instances=1,
        coalesce=True,
    )
    return scheduler
