"""Tests for the forecast refresh schedule."""
from dataclasses import replace
from unittest.mock import MagicMock

from apscheduler.triggers.cron import CronTrigger

from app.tasks import scheduler


class TestScheduler:
    """Test job registration and the scheduled run."""

    def test_schedule_jobs_registers_hourly_forecast(self, services):
        jobs = MagicMock()
        scheduler.schedule_jobs(jobs, services, minute=5)

        args, kwargs = jobs.add_job.call_args
        assert args[0] is scheduler.refresh_forecast
        assert isinstance(args[1], CronTrigger)
        assert kwargs["id"] == scheduler.FORECAST_JOB_ID
        assert kwargs["args"] == [services]

    def test_start_without_minute_does_nothing(self, services):
        assert scheduler.start(services) is None
        scheduler.stop(None)

    def test_start_and_stop(self, services):
        services.settings = replace(services.settings, forecast_refresh_minute=0)
        jobs = scheduler.start(services)
        try:
            assert jobs.running
            assert jobs.get_job(scheduler.FORECAST_JOB_ID) is not None
        finally:
            scheduler.stop(jobs)

    def test_refresh_forecast_runs_pipeline(self, services, fake_fetcher):
        services.weather_client = fake_fetcher
        result = scheduler.refresh_forecast(services)
        assert result.status_code == 200
        assert services.weather_store.get(result.payload["id"]) is not None

    def test_refresh_forecast_failure_is_returned(self, services):
        fetcher = MagicMock()
        fetcher.fetch_forecast.side_effect = RuntimeError("down")
        services.weather_client = fetcher
        result = scheduler.refresh_forecast(services)
        assert result.status_code == 500
