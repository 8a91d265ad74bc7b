from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    database_url: str = "sqlite:///statusboard.db"
    secret_key: str = "change-me-in-production"
    host: str = "0.0.0.0"
    port: int = 3000
    session_cookie_name: str = "statusboard_session"
    session_max_age_minutes: int = 720
    cookie_secure: bool = False
    bcrypt_rounds: int = 10
    admin_username: str = "admin"
    admin_password: str = "map4491"
    known_services: list[str] = ["miraidon", "mable", "dm_support"]
    queueless_services: list[str] = ["dm_support"]
    log_level: str = "INFO"

    class Config:
        env_prefix = "STATUSBOARD_"


settings = Settings()
