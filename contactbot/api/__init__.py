"""HTTP routers mounted by ``contactbot.main.create_app``."""
