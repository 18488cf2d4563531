"""Configuration models using Pydantic."""

from typing import Literal

from pydantic import BaseModel, field_validator

from chop.selector import DEFAULT_SELECTOR_COMMAND


class SelectorConfig(BaseModel):
    """Configuration for the interactive selector.

    The command receives candidate lines on stdin and prints the chosen ones.
    """

    command: str | list[str] = DEFAULT_SELECTOR_COMMAND

    @field_validator("command")
    @classmethod
    def _not_empty(cls, value: str | list[str]) -> str | list[str]:
        if isinstance(value, str):
            if not value.strip():
                raise ValueError("selector command is required")
        elif not [part for part in value if part.strip()]:
            raise ValueError("selector command is required")
        return value


class ChopConfig(BaseModel):
    """Root configuration model."""

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] | None = None
    selector: SelectorConfig = SelectorConfig()

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_level(cls, value: object) -> object:
        if isinstance(value, str):
            return value.upper()
        return value
