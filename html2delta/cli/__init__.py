"""Command-line interface for html2delta.

This module provides the Typer-based CLI that converts HTML files into
delta operation JSON, plus the YAML options loader it uses.
"""

from .config import ConfigLoader
from .errors import CLIError, ConfigError, FilesystemError
from .main import app, main
from .models import ExitCode

__all__ = [
    "app",
    "main",
    "ConfigLoader",
    "ExitCode",
    "CLIError",
    "ConfigError",
    "FilesystemError",
]
