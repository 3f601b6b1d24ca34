"""External integrations.

Only the Telegram Bot API lives here for now (`telegram_api`).
"""
