"""
Command-line interface for the nodemx package.
"""

from .main import main_cli

__all__ = [
    "main_cli",
]
