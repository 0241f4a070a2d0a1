"""
aws-switchrole commands package.

Each CLI command lives in its own module and is registered in switchrole.cli.
"""

from .env import env
from .clear import clear

__all__ = ["env", "clear"]
