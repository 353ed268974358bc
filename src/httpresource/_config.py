import os
from functools import cached_property

from pydantic import BaseModel

from ._utils._work_queue import Priority
from ._utils.constants import (
    DEFAULT_TIMEOUT,
    ENV_DISABLE_SSL_VERIFY,
    ENV_FOLLOW_REDIRECTS,
    ENV_PRIORITY,
    ENV_TIMEOUT,
    TRUTHY_VALUES,
)


def _env_flag(name: str) -> bool | None:
    value = os.getenv(name)
    if value is None or value == "":
        return None
    return value.strip().lower() in TRUTHY_VALUES


class Config(BaseModel):
    timeout: float = DEFAULT_TIMEOUT
    priority: Priority = Priority.NORMAL
    follow_redirects: bool = True
    disable_ssl_verify: bool = False

    @classmethod
    def from_env(cls) -> "Config":
        """Build a configuration from ``HTTPRESOURCE_*`` environment variables.

        Unset variables keep their defaults. ``HTTPRESOURCE_PRIORITY`` accepts a
        priority name (``high``) or its integer value (``4``).
        """
        values: dict = {}

        timeout = os.getenv(ENV_TIMEOUT)
        if timeout:
            values["timeout"] = timeout

        priority = os.getenv(ENV_PRIORITY)
        if priority:
            if priority.upper() in Priority.__members__:
                values["priority"] = Priority[priority.upper()]
            elif priority.lstrip("-").isdigit():
                values["priority"] = int(priority)
            else:
                values["priority"] = priority

        follow_redirects = _env_flag(ENV_FOLLOW_REDIRECTS)
        if follow_redirects is not None:
            values["follow_redirects"] = follow_redirects

        disable_ssl_verify = _env_flag(ENV_DISABLE_SSL_VERIFY)
        if disable_ssl_verify is not None:
            values["disable_ssl_verify"] = disable_ssl_verify

        return cls.model_validate(values)


class ConfigurationManager:
    """Singleton configuration manager."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    @cached_property
    def config(self) -> Config:
        return Config.from_env()

    def reset(self) -> None:
        self.__dict__.pop("config", None)
