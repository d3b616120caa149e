"""Command-line interface of the page editor.

This package provides the `telex-editor` developer tool: HTML conversion
and normalization, and opening stored pages through the editor core.
"""

from .config import ConfigLoader, EditorConfig
from .models import ExitCode
from .errors import (
    CLIError,
    ConfigError,
    ConfigFilesystemError,
)

__all__ = [
    'ConfigLoader',
    'EditorConfig',
    'ExitCode',
    'CLIError',
    'ConfigError',
    'ConfigFilesystemError',
]
