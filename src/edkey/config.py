from pydantic import BaseModel, Field, ValidationError, field_validator
from typing import Optional
import yaml
import os

from edkey.errors import ConfigurationError

class KeygenConfig(BaseModel):
    output_path: str = "./id_ed25519"
    comment: str = ""
    write_public_key: bool = True
    file_mode: int = 0o600 # same as ssh-keygen for private keys
    overwrite: bool = False

    @field_validator("file_mode", mode="before")
    @classmethod
    def octal_file_mode(cls, value):
        # Strings are octal, as for chmod; YAML ints must already be a permission mode
        if isinstance(value, str):
            try:
                value = int(value, 8)
            except ValueError:
                raise ValueError(f"file_mode must be an octal file mode, got {value!r}") from None
        if isinstance(value, int) and not 0 <= value <= 0o777:
            raise ValueError(
                f"file_mode {value} is outside 0o0..0o777; write octal modes quoted ('600') or with a leading 0"
            )
        return value

class LoggingConfig(BaseModel):
    log_level: str = "INFO"
    json_output: bool = Field(default=False, alias="json")

    model_config = {"populate_by_name": True}

class Config(BaseModel):
    keygen: KeygenConfig = Field(default_factory=KeygenConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}

def _parse_bool(env_var: str, value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ConfigurationError(f"{env_var} must be a boolean, got {value!r}")

def _parse_mode(env_var: str, value: str) -> int:
    try:
        # File modes are written in octal, e.g. 600 or 0o600
        return int(value, 8)
    except ValueError:
        raise ConfigurationError(f"{env_var} must be an octal file mode, got {value!r}") from None

def load_config(config_path: Optional[str] = None) -> Config:
    config_data = {}
    if config_path and os.path.exists(config_path):
        with open(config_path, 'r') as f:
            config_data = yaml.safe_load(f) or {}
        if not isinstance(config_data, dict):
            raise ConfigurationError(f"{config_path} must contain a mapping")

    # Environment variables override YAML values
    env_overrides = {
        "EDKEY_OUTPUT_PATH": "keygen.output_path",
        "EDKEY_COMMENT": "keygen.comment",
        "EDKEY_WRITE_PUBLIC_KEY": "keygen.write_public_key",
        "EDKEY_FILE_MODE": "keygen.file_mode",
        "EDKEY_OVERWRITE": "keygen.overwrite",
        "EDKEY_LOG_LEVEL": "logging.log_level",
        "EDKEY_LOG_JSON": "logging.json",
    }

    for env_var, config_key in env_overrides.items():
        if env_var in os.environ:
            value = os.environ[env_var]
            keys = config_key.split('.')
            current_dict = config_data
            for i, key in enumerate(keys):
                if i == len(keys) - 1:
                    if key in ["write_public_key", "overwrite", "json"]:
                        current_dict[key] = _parse_bool(env_var, value)
                    elif key == "file_mode":
                        current_dict[key] = _parse_mode(env_var, value)
                    else:
                        current_dict[key] = value
                else:
                    if key not in current_dict or not isinstance(current_dict[key], dict):
                        current_dict[key] = {}
                    current_dict = current_dict[key]

    try:
        return Config(**config_data)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e
