"""
Tests for SchedulerService - periodic expired-letter sweep
"""

import pytest
from unittest.mock import AsyncMock, MagicMock

from apscheduler.triggers.interval import IntervalTrigger

from app.services.scheduler_service import SchedulerService


@pytest.fixture
def mock_letter_service():
    service = MagicMock()
    service.sweep = AsyncMock(return_value=3)
    return service


class TestSweepJob:

    @pytest.mark.asyncio
    async def test_sweep_job_returns_removed_count(self, mock_letter_service):
        scheduler = SchedulerService(mock_letter_service, interval_minutes=60)

        assert await scheduler.sweep_job() == 3
        mock_letter_service.sweep.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_sweep_job_survives_store_failure(self, mock_letter_service):
        mock_letter_service.sweep = AsyncMock(side_effect=RuntimeError("db down"))
        scheduler = SchedulerService(mock_letter_service, interval_minutes=60)

        assert await scheduler.sweep_job() == 0


class TestLifecycle:

    @pytest.mark.asyncio
    async def test_start_registers_interval_job(self, mock_letter_service):
        scheduler = SchedulerService(mock_letter_service, interval_minutes=60)

        scheduler.start()
        try:
            job = scheduler.scheduler.get_job("expired_letter_sweep")
            assert job is not None
            assert isinstance(job.trigger, IntervalTrigger)
            assert job.trigger.interval.total_seconds() == 3600
        finally:
            scheduler.stop()

        assert not scheduler.scheduler.running

    def test_stop_without_start(self, mock_letter_service):
        scheduler = SchedulerService(mock_letter_service)

        scheduler.stop()

        assert not scheduler.scheduler.running
