import os

from contactbot import env_utils


def test_dotenv_overrides_and_example_fills(tmp_path, monkeypatch):
    env_file = tmp_path / ".env"
    env_file.write_text("BOT_TOKEN=from-dotenv\n", encoding="utf-8")
    example = tmp_path / ".env.example"
    example.write_text("BOT_TOKEN=example\nCONTACTBOT_EXAMPLE_ONLY=1\n", encoding="utf-8")

    monkeypatch.setattr(env_utils, "_ENV_PATH", env_file)
    monkeypatch.setattr(env_utils, "_ENV_EXAMPLE_PATH", example)
    monkeypatch.setenv("BOT_TOKEN", "from-process")
    monkeypatch.delenv("CONTACTBOT_EXAMPLE_ONLY", raising=False)

    env_utils.load_env(force=True)

    assert os.environ["BOT_TOKEN"] == "from-dotenv"
    assert os.environ["CONTACTBOT_EXAMPLE_ONLY"] == "1"
    monkeypatch.delenv("CONTACTBOT_EXAMPLE_ONLY")


def test_missing_files_are_fine(tmp_path, monkeypatch):
    monkeypatch.setattr(env_utils, "_ENV_PATH", tmp_path / "nope.env")
    monkeypatch.setattr(env_utils, "_ENV_EXAMPLE_PATH", tmp_path / "nope.example")
    env_utils.load_env(force=True)
