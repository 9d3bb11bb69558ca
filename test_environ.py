"""
Test suite for environment configuration loading.
"""
from utils.environ import BotConfig, get_bool_env, load_bot_config

ALL_VARS = [
    "DISCORD_BOT_TOKEN", "DISCORD_APP_ID", "DISCORD_GUILD_ID", "DISCORD_ANNOUNCE_CHANNEL_ID",
    "CALENDAR_ID", "TIMEZONE", "GOOGLE_SA_EMAIL", "GOOGLE_SA_PRIVATE_KEY",
    "UPSTASH_REDIS_REST_URL", "UPSTASH_REDIS_REST_TOKEN", "MAPPING_STORE_FILE",
]


def clear_env(monkeypatch):
    for name in ALL_VARS:
        monkeypatch.delenv(name, raising=False)


def test_load_bot_config_reads_environment(monkeypatch):
    clear_env(monkeypatch)
    monkeypatch.setenv("DISCORD_BOT_TOKEN", "tok")
    monkeypatch.setenv("DISCORD_ANNOUNCE_CHANNEL_ID", "555")
    monkeypatch.setenv("CALENDAR_ID", "club@group.calendar.google.com")
    monkeypatch.setenv("UPSTASH_REDIS_REST_URL", "https://u.upstash.io")
    monkeypatch.setenv("UPSTASH_REDIS_REST_TOKEN", "secret")

    config = load_bot_config()

    assert config.discord_token == "tok"
    assert config.announce_channel_id == "555"
    assert config.timezone == "America/Indiana/Indianapolis"
    assert config.missing() == []


def test_timezone_override(monkeypatch):
    clear_env(monkeypatch)
    monkeypatch.setenv("TIMEZONE", "America/Chicago")
    assert load_bot_config().timezone == "America/Chicago"


def test_missing_lists_required_variables(monkeypatch):
    clear_env(monkeypatch)
    missing = load_bot_config().missing()
    assert "DISCORD_BOT_TOKEN" in missing
    assert "DISCORD_ANNOUNCE_CHANNEL_ID" in missing
    assert "CALENDAR_ID" in missing
    assert any("UPSTASH_REDIS_REST_URL" in name for name in missing)


def test_file_store_satisfies_store_requirement():
    config = BotConfig(discord_token="t", announce_channel_id="1", calendar_id="c", mapping_store_file="m.json")
    assert config.missing() == []


def test_env_helpers(monkeypatch):
    monkeypatch.setenv("FLAG_ON", "Yes")
    assert get_bool_env("FLAG_ON") is True
    assert get_bool_env("FLAG_UNSET_XYZ") is False
