# memobook/shared/config.py
from pydantic import BaseModel, Field
import os

def _env(name: str, default: str | None = None):
    return lambda: os.getenv(name, default)

class Settings(BaseModel):
    ENV: str = Field(default_factory=_env("ENV", "dev"))
    LOG_LEVEL: str = Field(default_factory=_env("LOG_LEVEL", "INFO"))

    # store: sqlite file under ./storage unless overridden
    DATABASE_URL: str | None = Field(default_factory=_env("DATABASE_URL"))

    # summarization model (OpenAI chat completions)
    OPENAI_API_KEY: str | None = Field(default_factory=_env("OPENAI_API_KEY"))
    SUMMARY_MODEL: str = Field(default_factory=_env("SUMMARY_MODEL", "gpt-4o-mini"))
    SUMMARY_MAX_TOKENS: int = Field(default_factory=lambda: int(os.getenv("SUMMARY_MAX_TOKENS", "500")))
    SUMMARY_TEMPERATURE: float = Field(default_factory=lambda: float(os.getenv("SUMMARY_TEMPERATURE", "0.3")))

settings = Settings()
