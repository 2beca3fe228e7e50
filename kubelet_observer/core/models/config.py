from __future__ import annotations

import logging
import sys
from typing import Optional

import pydantic as pd
from pydantic_settings import BaseSettings, SettingsConfigDict
from rich.console import Console
from rich.logging import RichHandler

from kubelet_observer.core.abstract import formatters

logger = logging.getLogger("kubelet_observer")


class Config(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="KUBELET_OBSERVER_")

    quiet: bool = pd.Field(False)
    verbose: bool = pd.Field(False)

    # Kubelet Settings
    hosturl: str
    request_timeout: float = pd.Field(5.0, gt=0)  # in seconds
    file_input: Optional[str] = pd.Field(None)

    # Logging Settings
    format: str = pd.Field("table")
    log_to_stderr: bool = pd.Field(False)
    width: Optional[int] = pd.Field(None, ge=1)

    # Output Settings
    file_output: Optional[str] = pd.Field(None)

    _logging_console: Optional[Console] = pd.PrivateAttr(None)

    @property
    def Formatter(self) -> formatters.FormatterFunc:
        return formatters.find(self.format)

    @pd.field_validator("hosturl")
    @classmethod
    def validate_hosturl(cls, v: str) -> str:
        if not v.startswith("https://") and not v.startswith("http://"):
            raise ValueError("--hosturl must start with https:// or http://")

        return v.removesuffix("/")

    @pd.field_validator("format")
    @classmethod
    def validate_format(cls, v: str) -> str:
        formatters.find(v)  # NOTE: raises if formatter is not found
        return v

    @property
    def logging_console(self) -> Console:
        if self._logging_console is None:
            self._logging_console = Console(file=sys.stderr if self.log_to_stderr else sys.stdout, width=self.width)
        return self._logging_console

    @staticmethod
    def set_config(config: Config) -> None:
        global _config

        _config = config
        logging.basicConfig(
            level="NOTSET",
            format="%(message)s",
            datefmt="[%X]",
            handlers=[RichHandler(console=config.logging_console)],
            force=True,
        )
        logging.getLogger("").setLevel(logging.CRITICAL)
        logger.setLevel(logging.DEBUG if config.verbose else logging.CRITICAL if config.quiet else logging.INFO)

    @staticmethod
    def get_config() -> Optional[Config]:
        return _config


# NOTE: This class is just a proxy for _config.
# Import settings from this module and use it like it is just a config object.
class _Settings:
    def __getattr__(self, name: str):
        if _config is None:
            raise AttributeError("Config is not set")

        return getattr(_config, name)


_config: Optional[Config] = None
settings = _Settings()
