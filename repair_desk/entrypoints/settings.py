from pydantic_settings import BaseSettings, SettingsConfigDict


class Config(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    ORDERS_FILE: str = "orders.json"
    USERS_FILE: str = "users.json"

    MAX_ORDERS: int = 100
    MAX_USERS: int = 50
    OVERDUE_AFTER_DAYS: int = 21

    # Created only when no users file exists yet
    DEFAULT_ADMIN_LOGIN: str = "admin"
    DEFAULT_ADMIN_PASSWORD: str = "admin"

    LOG_LEVEL: str = "INFO"
    LOG_FILE: str = "repair_desk.log"


config = Config()
