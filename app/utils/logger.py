import logging
from app.config import settings

def setup_logger(name: str = "secret_letters"):
    """서비스 로거 설정 - 레벨과 포맷은 설정값(LOG_LEVEL, LOG_FORMAT)을 따름"""

    level = getattr(logging, settings.log_level.upper(), logging.INFO)
    logger = logging.getLogger(name)
    logger.setLevel(level)

    if logger.handlers:
        return logger

    handler = logging.StreamHandler()
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(settings.log_format))
    logger.addHandler(handler)
    # uvicorn 루트 로거로 올라가 두 번 찍히지 않도록
    logger.propagate = False

    # 매시간 정리 작업마다 찍히는 apscheduler 실행 로그는 경고 이상만
    logging.getLogger("apscheduler").setLevel(max(level, logging.WARNING))

    return logger

logger = setup_logger()
