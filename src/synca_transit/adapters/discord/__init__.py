"""Discord webhook adapter."""

from synca_transit.adapters.discord.discord_notifier import DiscordWebhookNotifier

__all__ = ["DiscordWebhookNotifier"]
