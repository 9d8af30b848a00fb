from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    APP_ENV: str = "development"
    DATABASE_URL: str = "sqlite:///./auth.db"
    REDIS_URL: str = "redis://localhost:6379/1"
    SECRET_KEY: str = "dev-secret-auth"
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 7
    BCRYPT_ROUNDS: int = 12
    LOG_LEVEL: str = "INFO"
    RATE_LIMIT_ENABLED: bool = True
    RATE_LIMIT_STORAGE_URI: str = "memory://"
    RATE_LIMIT_PER_MINUTE: int = 60
    LOGIN_RATE_LIMIT_PER_MINUTE: int = 10
    REVOCATION_ENABLED: bool = True
    CORS_ORIGINS: list[str] = ["http://localhost:8082"]

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


settings = Settings()


def validate_runtime_config() -> None:
    if settings.APP_ENV.lower() == "production" and settings.SECRET_KEY == "dev-secret-auth":
        raise RuntimeError("SECRET_KEY must be set in production.")
