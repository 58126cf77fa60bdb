from __future__ import annotations
from dotenv import load_dotenv, find_dotenv; load_dotenv(find_dotenv(usecwd=True), override=True)

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Zone for rendered record timestamps and local activity summary days
    TIMEZONE: str = Field(default="UTC")

    # drop: skip workout events that fail to harmonize; strict: fail the workout
    WORKOUT_EVENT_POLICY: Literal["drop", "strict"] = Field(
        default="drop",
        description="How workout harmonization treats a failing workout event",
    )


def get_settings() -> Settings:
    return Settings()  # type: ignore[call-arg]
