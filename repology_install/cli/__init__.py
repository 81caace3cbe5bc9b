"""CLI module for repology-install.

Options can be given as CLI arguments or environment variables.
"""

from .main import Config, build_config, cli, main, run

__all__ = [
    "cli",
    "main",
    "Config",
    "build_config",
    "run",
]
