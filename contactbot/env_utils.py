import logging
import os
from pathlib import Path

from dotenv import dotenv_values

_ENV_PATH = Path(".env").resolve()  # absolute path = no cwd surprises
_ENV_EXAMPLE_PATH = Path(".env.example").resolve()

_last_mtimes: dict[str, float] | None = None

_logger = logging.getLogger(__name__)


def _mtime(path: Path) -> float:
    try:
        return path.stat().st_mtime
    except FileNotFoundError:
        return -1.0


def load_env(force: bool = False) -> None:
    """Load environment variables from dotenv files.

    Precedence (highest → lowest):
    - .env (if present): overrides existing process env values
    - .env.example: fills missing keys only (never overrides)

    Files are re-read only when their mtime changes, or always with
    ``force=True`` or under pytest.
    """
    global _last_mtimes

    test_mode = bool(os.getenv("PYTEST_RUNNING"))
    current = {"env": _mtime(_ENV_PATH), "example": _mtime(_ENV_EXAMPLE_PATH)}
    if not force and not test_mode and current == _last_mtimes:
        return
    _last_mtimes = current

    if current["env"] >= 0:
        for key, val in dotenv_values(_ENV_PATH).items():
            if val is not None:
                os.environ[key] = val
        _logger.debug("env loaded from %s", _ENV_PATH)

    if current["example"] >= 0:
        for key, val in dotenv_values(_ENV_EXAMPLE_PATH).items():
            if val is not None and key not in os.environ:
                os.environ[key] = val


__all__ = ["load_env"]
