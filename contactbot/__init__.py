"""Contact-request Telegram bot with a deferred follow-up reminder."""

__version__ = "0.1.0"
