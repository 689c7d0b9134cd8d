import os

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # core
    APP_NAME: str = Field(default="Dummy Data Studio")
    ENV: str = Field(default=os.getenv("APP_ENV", "dev"))
    DEBUG: bool = Field(default=False)

    # model provider: gemini | openai | ollama | echo
    LLM_PROVIDER: str = Field(default="gemini")

    GEMINI_API_KEY: str | None = None
    GEMINI_MODEL: str = Field(default="gemini-2.5-flash")

    OPENAI_API_KEY: str | None = None
    OPENAI_MODEL: str = Field(default="gpt-4o-mini")

    OLLAMA_HOST: str = Field(default="http://localhost:11434")
    OLLAMA_MODEL: str = Field(default="mistral:7b-instruct")
    OLLAMA_TIMEOUT: float = Field(default=180.0)

    # logging
    LOG_LEVEL: str = Field(default="INFO")
    LOG_DIR: str | None = None

    # display
    PREVIEW_MAX_LINES: int = Field(default=50)

    # in-memory sessions
    SESSION_MAX: int = Field(default=1000)
    SESSION_IDLE_SECONDS: float = Field(default=3600.0)

    model_config = SettingsConfigDict(
        env_file=".env.dev",
        extra="ignore",
    )

    @property
    def app_name(self) -> str:
        return self.APP_NAME


settings = Settings()
