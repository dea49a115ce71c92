from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    database_url: str = "sqlite:///./prereq_planner.db"
    jwt_secret: str = "change_me_in_production"
    environment: str = "development"
    log_level: str = "INFO"
    access_token_expire_minutes: int = 60 * 24 * 7  # 7 days
    max_courses_per_semester: int = 5
    cors_origins: list[str] = ["*"]

    class Config:
        env_file = ".env"
        extra = "ignore"


settings = Settings()
