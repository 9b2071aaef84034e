"""Sous-package CLI commands - re-exporte les commandes publiques."""

from devotional.adapters.cli.commands.feed_commands import download, feed
from devotional.adapters.cli.commands.moderation_commands import (
    approve,
    ban,
    moderate,
    queue,
)
from devotional.adapters.cli.commands.submit_commands import submit

__all__ = [
    # fil
    "feed",
    "download",
    # moderation
    "queue",
    "approve",
    "ban",
    "moderate",
    # soumission
    "submit",
]
