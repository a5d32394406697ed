# settings.py
"""
Runtime configuration for the calculator front end.

Values come from environment variables (optionally via a .env file loaded with python-dotenv)
and are validated with a Pydantic model. Command-line flags override them in main.py.
The core in calc.py never reads settings itself; the front end passes what it needs.
"""

import logging
import os
from typing import Optional

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, field_validator

from rpncalc import calc

ENV_PREFIX = "RPNCALC_"


class Settings(BaseModel):
    """Validated calculator settings."""
    operand_order: str = calc.CONVENTIONAL
    verbose_errors: bool = False
    log_level: str = "WARNING"
    prompt: str = "> "
    history_file: Optional[str] = os.path.expanduser("~/.rpncalc_history")

    @field_validator('operand_order')
    @classmethod
    def operand_order_must_be_known(cls, v: str) -> str:
        v = v.strip().lower()
        if v not in calc.OPERAND_ORDERS:
            raise ValueError(f"operand_order must be one of {', '.join(calc.OPERAND_ORDERS)}")
        return v

    @field_validator('log_level')
    @classmethod
    def log_level_must_be_known(cls, v: str) -> str:
        v = v.strip().upper()
        if not isinstance(logging.getLevelName(v), int):
            raise ValueError(f"Unknown log level: {v}")
        return v

    @field_validator('history_file')
    @classmethod
    def empty_history_file_disables_history(cls, v: Optional[str]) -> Optional[str]:
        if v is None or not v.strip():
            return None
        return os.path.expanduser(v.strip())

    @classmethod
    def from_env(cls, dotenv: bool = True) -> "Settings":
        """
        Build settings from RPNCALC_* environment variables.

        Args:
            dotenv: Whether to load a .env file into the environment first

        Returns:
            Settings instance; unset variables keep their defaults

        Raises:
            pydantic.ValidationError: If a variable has an invalid value
        """
        if dotenv:
            load_dotenv(find_dotenv(usecwd=True))
        values = {}
        for name in ("operand_order", "verbose_errors", "log_level", "prompt", "history_file"):
            raw = os.getenv(ENV_PREFIX + name.upper())
            if raw is not None:
                values[name] = raw
        return cls(**values)
