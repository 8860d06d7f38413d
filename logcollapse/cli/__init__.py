"""
CLI layer - user-facing commands.
"""

from logcollapse.cli.commands import collapse

__all__ = ['collapse']
