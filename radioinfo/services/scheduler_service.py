import logging
from datetime import datetime
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger

from radioinfo.services.refresh_coordinator import ScheduleRefresher


logger = logging.getLogger(__name__)

class RefreshScheduler:
    """Scheduler for periodic schedule refreshes"""

    def __init__(self, refresher: ScheduleRefresher, cron: str, timezone: str, misfire_grace_sec: int):
        self.refresher = refresher
        self.cron = cron
        self.timezone = timezone
        self.misfire_grace_sec = misfire_grace_sec
        self.scheduler: AsyncIOScheduler | None = None

    async def _refresh_job(self) -> None:
        """Background job that refreshes the selected channel"""
        logger.info("Scheduled schedule refresh triggered")
        try:
            result = await self.refresher.refresh()
            if result["status"] == "failed":
                logger.error(f"Scheduled refresh failed: {result.get('error')}")
        except Exception as e:
            logger.error(f"Exception in scheduled refresh: {e}", exc_info=True)

    def start(self) -> None:
        """Start the scheduler with the refresh job"""
        if self.scheduler and self.scheduler.running:
            logger.warning("Scheduler already running")
            return

        try:
            trigger = CronTrigger.from_crontab(self.cron, timezone=self.timezone)
        except (ValueError, KeyError) as exc:
            logger.error("Invalid cron expression '%s': %s", self.cron, exc)
            raise

        self.scheduler = AsyncIOScheduler(timezone=self.timezone)
        self.scheduler.add_job(
            self._refresh_job,
            trigger=trigger,
            id='schedule_refresh',
            max_instances=1,
            coalesce=True,
            misfire_grace_time=self.misfire_grace_sec
        )

        self.scheduler.start()
        next_time = self.get_next_run_time()
        logger.info(
            "Scheduler started. Next refresh: %s",
            next_time.isoformat() if next_time else "unknown"
        )

    def shutdown(self) -> None:
        """Shutdown the scheduler"""
        if self.scheduler and self.scheduler.running:
            self.scheduler.shutdown()
            logger.info("Scheduler stopped")
            self.scheduler = None

    def get_next_run_time(self) -> datetime | None:
        """Get next scheduled refresh time"""
        if not self.scheduler:
            return None
        job = self.scheduler.get_job('schedule_refresh')
        return job.next_run_time if job else None

    @property
    def running(self) -> bool:
        return bool(self.scheduler and self.scheduler.running)
