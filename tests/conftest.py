import pytest

EDKEY_ENV_VARS = [
    "EDKEY_OUTPUT_PATH",
    "EDKEY_COMMENT",
    "EDKEY_WRITE_PUBLIC_KEY",
    "EDKEY_FILE_MODE",
    "EDKEY_OVERWRITE",
    "EDKEY_LOG_LEVEL",
    "EDKEY_LOG_JSON",
]

@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep EDKEY_* settings from the calling shell out of every test."""
    for env_var in EDKEY_ENV_VARS:
        monkeypatch.delenv(env_var, raising=False)
