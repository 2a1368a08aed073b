"""Core infrastructure shared by ttynamed components."""

__all__ = [
    "errors",
    "file_sync_utils",
    "logging_config",
    "logging_utils",
    "paths",
    "settings",
]
