from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
        "frozen": True,
    }

    HOST: str = "0.0.0.0"
    PORT: int = 3000
    APP_ENV: str = Field(
        default="development",
        validation_alias=AliasChoices("APP_ENV", "NODE_ENV"),
    )

    # SMTP transport
    EMAIL_HOST: str = "localhost"
    EMAIL_PORT: int = 587
    EMAIL_USER: str = ""
    EMAIL_PASSWORD: str = ""
    EMAIL_SECURE: bool = False  # implicit TLS, usually port 465

    # Fixed message envelope
    EMAIL_FROM: str = "from@example.com"
    EMAIL_TO: str = "to@example.com"

    SCHEDULER_ENABLED: bool = True


def get_settings() -> Settings:
    return Settings()
