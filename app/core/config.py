from typing import List, Optional

from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    DB_HOST: str = "localhost"
    DB_PORT: str = "5432"
    DB_NAME: str = "recov"
    DB_USER: str = "postgres"
    DB_PASSWORD: str = ""
    # Overrides the DB_* settings when set, e.g. "sqlite://" for tests
    DATABASE_URL: Optional[str] = None

    DEFAULT_TENANT_ID: str = "default"
    LOG_LEVEL: str = "INFO"

    allowed_extensions: List[str] = [".csv", ".xlsx"]
    max_file_size: int = 20 * 1024 * 1024

    @property
    def database_url(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return (
            f"postgresql+psycopg2://{self.DB_USER}:{self.DB_PASSWORD}"
            f"@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"
        )

    class Config:
        env_file = ".env"

settings = Settings()
