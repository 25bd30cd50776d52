# app/config.py
from pydantic_settings import BaseSettings
from pydantic import ConfigDict
from typing import List, Optional

class Settings(BaseSettings):
    model_config = ConfigDict(env_file=".env", extra="allow")

    # MySQL
    mysql_host: str
    mysql_port: int
    mysql_user: str
    mysql_password: str
    mysql_database: str

    # 직접 지정하면 MySQL 설정보다 우선 (테스트용 sqlite 등)
    database_url: Optional[str] = None
    db_connect_timeout: float = 10.0

    # Letter Settings
    letter_ttl_hours: int = 24
    max_image_length: int = 5_000_000  # base64 인코딩 기준 글자 수
    max_secret_code_length: int = 255

    # Sweep Settings
    sweep_interval_minutes: int = 60
    sweep_on_startup: bool = True

    # Client Shell
    static_dir: str = "public"
    cors_origins: List[str] = ["*"]

    # App Settings
    port: int = 10000
    debug: bool = False
    log_level: str = "INFO"
    log_format: str = "%(asctime)s - %(name)s - %(levelname)s - [%(funcName)s] %(message)s"

    @property
    def sqlalchemy_url(self) -> str:
        if self.database_url:
            return self.database_url
        return f"mysql+aiomysql://{self.mysql_user}:{self.mysql_password}@{self.mysql_host}:{self.mysql_port}/{self.mysql_database}"

settings = Settings()
