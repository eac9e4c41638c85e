import logging
import os
import tomllib
from pathlib import Path
from typing import Any, List, Tuple

logger = logging.getLogger(__name__)

DEFAULTS_PATH = Path(__file__).with_name("config_defaults.toml")
CONFIG_PATH = Path(os.environ.get("DIPPYMAP_CONFIG", "config.toml"))


class ConfigException(Exception):
    pass


def merge_toml(main: dict[str, Any], default: dict[str, Any], current_path: str = "") -> Tuple[
    List[str], dict[str, Any]]:
    output = {}
    errors = []
    for key in default:
        key_path = f"{current_path}.{key}" if current_path else key
        if key in main:
            if type(main[key]) is type(default[key]):
                if isinstance(main[key], dict):
                    new_errors, output[key] = merge_toml(main[key], default[key], current_path=key_path)
                    errors.extend(new_errors)
                else:
                    output[key] = main[key]
            else:
                errors.append(key_path)
                output[key] = default[key]
        else:
            output[key] = default[key]
    return errors, output


def load(config_path: Path = CONFIG_PATH) -> dict[str, Any]:
    with open(DEFAULTS_PATH, "rb") as toml_file:
        default_toml = tomllib.load(toml_file)

    if not config_path.exists():
        return default_toml

    try:
        with open(config_path, "rb") as toml_file:
            toml = tomllib.load(toml_file)
    except tomllib.TOMLDecodeError as err:
        raise ConfigException(f"{config_path} is not valid toml: {err}") from err

    errors, merged = merge_toml(toml, default_toml)
    for key_path in errors:
        logger.warning(f"{config_path}: {key_path} has the wrong type, using the default")
    return merged


all_config = load()

# LOGGING
LOGGING_LEVEL: str = all_config["logging"]["level"]

# SVG LAYERS
PROVINCES_LAYER_ID: str = all_config["layers"]["provinces"]
HIGHLIGHTS_LAYER_ID: str = all_config["layers"]["highlights"]
ORDERS_LAYER_ID: str = all_config["layers"]["orders"]
UNITS_LAYER_ID: str = all_config["layers"]["units"]

# RENDERING
HIGHLIGHT_PATTERN_ID: str = all_config["highlight"]["pattern"]
PROVINCE_FILL_OPACITY: float = all_config["province"]["fill_opacity"]
