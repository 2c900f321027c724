import logging

from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.cron import CronTrigger

logger = logging.getLogger(__name__)

FORECAST_JOB_ID = "forecast_hourly"


def refresh_forecast(services):
    """One scheduled forecast invocation; the result is only logged."""
    result = services.forecast_pipeline().run({"source": "scheduler", "job": FORECAST_JOB_ID})
    if result.status_code != 200:
        logger.warning("Scheduled forecast refresh failed: %s", result.payload.get("error"))
    return result


def schedule_jobs(scheduler, services, minute: int):
    # Forecast: every hour at the configured minute
    scheduler.add_job(
        refresh_forecast,
        CronTrigger(minute=minute),
        args=[services],
        id=FORECAST_JOB_ID,
        replace_existing=True,
    )


def start(services) -> BackgroundScheduler | None:
    minute = services.settings.forecast_refresh_minute
    if minute is None:
        return None
    scheduler = BackgroundScheduler()
    schedule_jobs(scheduler, services, minute)
    scheduler.start()
    logger.info("Forecast refresh scheduled hourly at minute %d", minute)
    return scheduler


def stop(scheduler):
    if scheduler is not None:
        scheduler.shutdown(wait=False)
