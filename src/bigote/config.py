"""Render configuration for Bigote.

Delimiters and the escape function are per-render configuration, passed
explicitly on every render call rather than read from global state.

Usage:
    from bigote import render
    from bigote.config import RenderConfig

    render("<% name %>", {"name": "x"}, config=RenderConfig(delimiters=("<%", "%>")))

    # Also accepted, for compatibility with older call sites:
    render("<% name %>", {"name": "x"}, config=("<%", "%>"))
    render("{{name}}", {"name": "x"}, config={"escape": str.upper})

"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

DEFAULT_DELIMITERS: tuple[str, str] = ("{{", "}}")


@dataclass(frozen=True, slots=True)
class RenderConfig:
    """Immutable render configuration.

    Frozen dataclass ensures thread-safety (immutable after creation).

    Attributes:
        delimiters: Initial (open, close) tag pair for every template parsed
            during the render, partials and lambda sub-renders included
        escape: Function applied to ``{{name}}`` values. None selects the
            default HTML escaping, which also passes numbers through as-is.
            A custom function always receives the raw value.

    """

    delimiters: tuple[str, str] = DEFAULT_DELIMITERS
    escape: Callable[[Any], str] | None = None

    @classmethod
    def from_dict(cls, config_dict: Mapping[str, Any]) -> RenderConfig:
        """Create RenderConfig from a mapping.

        Unknown keys are silently ignored. ``tags`` is accepted as an alias
        for ``delimiters``.

        Example:
            >>> RenderConfig.from_dict({"tags": ["<%", "%>"], "unknown": 1}).delimiters
            ('<%', '%>')

        """
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}
        if "delimiters" not in filtered and config_dict.get("tags") is not None:
            filtered["delimiters"] = config_dict["tags"]
        if filtered.get("delimiters") is None:
            filtered.pop("delimiters", None)
        else:
            filtered["delimiters"] = tuple(filtered["delimiters"])
        return cls(**filtered)


_DEFAULT_CONFIG = RenderConfig()


def coerce_config(
    config: RenderConfig | Mapping[str, Any] | tuple[str, str] | list[str] | None,
) -> RenderConfig:
    """Normalize the forms a caller may pass as ``config``.

    Accepts None, a RenderConfig, a mapping (see RenderConfig.from_dict), or
    a bare delimiter pair.
    """
    if config is None:
        return _DEFAULT_CONFIG
    if isinstance(config, RenderConfig):
        return config
    if isinstance(config, Mapping):
        return RenderConfig.from_dict(config)
    if isinstance(config, (list, tuple)):
        return RenderConfig(delimiters=tuple(config))
    msg = f"Invalid render config: {config!r}"
    raise TypeError(msg)


__all__ = ["DEFAULT_DELIMITERS", "RenderConfig", "coerce_config"]
