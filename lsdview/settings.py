"""Resolution of settings from the command line, the environment and the config file."""

from __future__ import annotations

import os
from typing import Any, ClassVar


def _is_unset(value: Any) -> bool:
    """Tell whether a raw value means that the source did not provide the setting."""
    return value is None or value is False or (
        isinstance(value, (list, tuple, str)) and len(value) == 0
    )


class Configurable:
    """Mixin for settings that may come from the command line, environment or config.

    The first source that yields a value wins, in this order: command line,
    environment, configuration file, then the type's default.

    Subclasses name where their raw value lives through ``cli_attr`` (an
    attribute of the parsed command line), ``config_attr`` (a dotted path into
    the configuration, such as ``"sorting.reverse"``) and ``env_var`` (an
    environment variable). A raw value is turned into the setting by
    ``_coerce``, which calls the class with it unless overridden.
    """

    cli_attr: ClassVar[str | None] = None
    config_attr: ClassVar[str | None] = None
    env_var: ClassVar[str | None] = None

    @classmethod
    def configure_from(cls, cli: Any, config: Any) -> Any:
        """Return the setting from the first source that provides one."""
        for value in (cls.from_cli(cli), cls.from_environment(), cls.from_config(config)):
            if value is not None:
                return value
        return cls._default()

    @classmethod
    def from_cli(cls, cli: Any) -> Any:
        """Return the value given on the command line, or None."""
        if cls.cli_attr is None or cli is None:
            return None
        raw = getattr(cli, cls.cli_attr, None)
        if _is_unset(raw):
            return None
        return cls._coerce(raw)

    @classmethod
    def from_config(cls, config: Any) -> Any:
        """Return the value given in the configuration, or None."""
        if cls.config_attr is None or config is None:
            return None
        raw: Any = config
        for part in cls.config_attr.split("."):
            raw = getattr(raw, part, None)
            if raw is None:
                return None
        return cls._coerce(raw)

    @classmethod
    def from_environment(cls) -> Any:
        """Return the value given by environment variables, or None."""
        if cls.env_var is None:
            return None
        raw = os.environ.get(cls.env_var)
        if raw is None or raw == "":
            return None
        return cls._coerce(raw)

    @classmethod
    def _coerce(cls, raw: Any) -> Any:
        return cls(raw)

    @classmethod
    def _default(cls) -> Any:
        return cls()