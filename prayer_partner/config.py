from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    database_url: str = "sqlite+aiosqlite:///./prayer_partner.sqlite3"
    secret_key: str = "change-me"
    session_cookie: str = "prayer-partner-session-id"
    session_max_age: int = 30 * 24 * 60 * 60  # 30 days
    api_key: str = ""  # empty = no auth check (local dev)
    mongodb_url: str = ""  # empty = mirror disabled
    mongodb_database: str = "prayerRequests"
    items_per_page: int = 5
    bcrypt_rounds: int = 10
    log_level: str = "INFO"
    seed_demo_data: bool = False
    cors_origins: list[str] = ["http://localhost:3000"]

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
