import pytest

from vekta.config import DEFAULT_CHUNK_SIZE, DEFAULT_TEXT_MODEL, VektaConfig, load_config
from vekta.errors import ConfigurationError


def test_defaults_from_empty_environment() -> None:
    config = load_config({})

    assert config == VektaConfig()
    assert config.quiet is False
    assert config.chunk_size == DEFAULT_CHUNK_SIZE
    assert config.text_model == DEFAULT_TEXT_MODEL
    assert config.batch_size is None


def test_environment_overrides() -> None:
    config = load_config(
        {
            "VEKTA_QUIET": "1",
            "VEKTA_LOG_LEVEL": "debug",
            "VEKTA_LOG_FORMAT": "JSON",
            "VEKTA_BATCH_SIZE": "3",
            "VEKTA_CHUNK_SIZE": "64",
            "VEKTA_PROVIDER": "mock",
            "VEKTA_DEVICE": "cpu",
            "VEKTA_RERANK_MODEL": "local/reranker",
        }
    )

    assert config.quiet is True
    assert config.log_level == "DEBUG"
    assert config.log_format == "json"
    assert config.batch_size == 3
    assert config.chunk_size == 64
    assert config.provider == "mock"
    assert config.device == "cpu"
    assert config.rerank_model == "local/reranker"


@pytest.mark.parametrize("value", ["0", "true", "yes", ""])
def test_quiet_only_for_exact_one(value: str) -> None:
    assert load_config({"VEKTA_QUIET": value}).quiet is False


@pytest.mark.parametrize(
    "key, value",
    [
        ("VEKTA_BATCH_SIZE", "zero"),
        ("VEKTA_BATCH_SIZE", "0"),
        ("VEKTA_CHUNK_SIZE", "-5"),
        ("VEKTA_PROVIDER", "remote"),
        ("VEKTA_LOG_FORMAT", "xml"),
        ("VEKTA_LOG_LEVEL", "chatty"),
    ],
)
def test_invalid_values_raise(key: str, value: str) -> None:
    with pytest.raises(ConfigurationError, match=key):
        load_config({key: value})


def test_dotenv_file_in_working_directory_is_loaded(clean_env, monkeypatch: pytest.MonkeyPatch) -> None:
    (clean_env / ".env").write_text("VEKTA_CHUNK_SIZE=32\n", encoding="utf-8")

    config = load_config()

    assert config.chunk_size == 32
