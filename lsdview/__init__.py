"""Options, configuration, colours and column layout for an ls-like directory listing."""

__version__ = "0.1.0"

__all__ = ["cli", "settings", "config", "color", "grid", "layout"]