from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger

from app.config import settings
from app.utils.logger import logger
from app.services.letter_service import LetterService

class SchedulerService:
    def __init__(self, letter_service: LetterService, interval_minutes: int = None):
        self.scheduler = AsyncIOScheduler()
        self.letter_service = letter_service
        self.interval_minutes = interval_minutes or settings.sweep_interval_minutes
        logger.info(" SchedulerService 초기화 완료")

    def start(self):
        try:
            self.scheduler.add_job(
                func=self.sweep_job,
                trigger=IntervalTrigger(minutes=self.interval_minutes),
                id='expired_letter_sweep',
                replace_existing=True,
                max_instances=1,
                coalesce=True,
            )
            self.scheduler.start()
            logger.info(f" 스케줄러 시작 - 만료 편지 정리 작업 등록 ({self.interval_minutes}분 간격)")
        except Exception as e:
            logger.error(f" 스케줄러 시작 실패: {e}")

    def stop(self):
        try:
            if self.scheduler.running:
                self.scheduler.shutdown(wait=False)
            logger.info(" 스케줄러 종료")
        except Exception as e:
            logger.error(f" 스케줄러 종료 실패: {e}")

    async def sweep_job(self) -> int:
        """주기 작업 - 실패해도 다음 주기에 다시 시도"""
        try:
            return await self.letter_service.sweep()
        except Exception as e:
            logger.error(f" 만료 편지 정리 작업 실패: {e}")
            return 0
