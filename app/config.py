from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    MONGODB_URL: str = "mongodb://localhost:27017"
    MONGODB_DATABASE: str = "RealEstateDB"
    MONGODB_TIMEOUT_MS: int = 5000
    CORS_ORIGINS: str = "http://localhost:3000,https://localhost:3000,http://127.0.0.1:3000"
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False
    SEED_DATA: bool = True
    CODE_MAX_ATTEMPTS: int = 5
    DEFAULT_PAGE_SIZE: int = 10
    MAX_PAGE_SIZE: int = 100

    class Config:
        env_file = ".env"

    @property
    def cors_origins(self) -> list[str]:
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

settings = Settings()
