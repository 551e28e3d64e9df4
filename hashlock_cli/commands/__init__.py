"""
CLI command modules.
"""

from hashlock_cli.commands import hashlock, order, secrets

__all__ = ["hashlock", "order", "secrets"]
