from pathlib import Path

from config.settings import DEFAULT_FLAGGED_WORDS, Settings, parse_id_list
from tests.factories import make_config, make_env


def test_parse_id_list_shapes() -> None:
    assert parse_id_list("1, 2,,3") == [1, 2, 3]
    assert parse_id_list([1, "2", ["3", 1]]) == [1, 2, 3]
    assert parse_id_list(None) == []
    assert parse_id_list(["x", -5, "7"]) == [7]


def test_from_env_reads_token_and_ids() -> None:
    env = make_env(
        token="abc",  # noqa: S106
        user_ids="11",
        role_ids={"FBI_COMMAND_ROLE": "21", "MANAGEMENT_ROLE_ID": "23"},
        ALLOWED_USER_ID_2="12",
        FBI_SUPERVISOR_ROLE="22",
        CLIENT_ID="900",
    )
    settings = Settings.from_env(env=env, config=make_config(user_ids=[13], role_ids=["24"]))

    assert settings.token == "abc"
    assert settings.application_id == 900
    assert settings.privileged_user_ids == frozenset({11, 12, 13})
    assert settings.privileged_role_ids == frozenset({21, 22, 23, 24})


def test_legacy_token_variable() -> None:
    settings = Settings.from_env(env={"TOKEN": "legacy"}, config={})
    assert settings.token == "legacy"


def test_missing_token_is_none() -> None:
    assert Settings.from_env(env=make_env(token=None), config={}).token is None


def test_defaults_with_empty_config() -> None:
    settings = Settings.from_env(env={}, config={})

    assert settings.confirmation_ttl_seconds is None
    assert settings.command_log_page_size == 10
    assert settings.history_limit == 50
    assert settings.flagged_words == DEFAULT_FLAGGED_WORDS
    assert settings.keepalive_enabled is False
    assert settings.keepalive_port == 3000
    assert settings.huggingface_api_key is None


def test_yaml_tunables(tmp_path) -> None:
    config = make_config(
        data_dir=str(tmp_path),
        confirmation_ttl_seconds=300,
        page_size=25,
        history_limit=20,
        flagged_words=["approved"],
    )
    settings = Settings.from_env(env={"HUGGINGFACE_API_KEY": "hf"}, config=config)

    assert settings.data_dir == Path(tmp_path)
    assert settings.confirmation_ttl_seconds == 300.0
    assert settings.command_log_page_size == 25
    assert settings.history_limit == 20
    assert settings.flagged_words == ("approved",)
    assert settings.huggingface_api_key == "hf"


def test_keepalive_only_in_development() -> None:
    dev = Settings.from_env(env={"STATE": "DEVELOPMENT", "PORT": "8080"}, config={})
    prod = Settings.from_env(env={"STATE": "PRODUCTION"}, config={})

    assert dev.keepalive_enabled is True
    assert dev.keepalive_port == 8080
    assert prod.keepalive_enabled is False
