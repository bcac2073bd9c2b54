"""Option validation and loading.

``build_options`` validates keyword options for one call and is what every
operation uses. ``load_options_file`` reads option defaults from a JSON file
for the command line interface.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, TypeVar

from pydantic import ValidationError

from termtext.config.schema import ScanOptions, TrimOptions, WidthOptions
from termtext.core.errors import ConfigError

logger = logging.getLogger(__name__)

OptionsT = TypeVar("OptionsT", bound=ScanOptions)

_ALL_KEYS = set(TrimOptions.model_fields) | set(WidthOptions.model_fields)


def build_options(model: type[OptionsT], **values: Any) -> OptionsT:
    """Validate call options.

    Args:
        model: Options model to build.
        **values: Option values; None values are dropped so defaults apply.

    Returns:
        Validated options.

    Raises:
        ConfigError: If validation fails.
    """
    data = {k: v for k, v in values.items() if v is not None}
    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid options for {model.__name__}: {e}") from e


def load_options_file(path: Path, model: type[ScanOptions]) -> dict[str, Any]:
    """Read option defaults for ``model`` from a JSON object file.

    Keys that only other option models accept are dropped, so one file can
    serve every command. Unknown keys are kept for ``build_options`` to reject.

    Raises:
        ConfigError: If the file can't be read or is not a JSON object.
    """
    try:
        content = path.read_text(encoding="utf-8-sig").strip()
        data = json.loads(content) if content else {}
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"Failed to read options file {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Expected object in {path}, got {type(data).__name__}")

    other_keys = _ALL_KEYS - set(model.model_fields)
    logger.debug("Options loaded from: %s", path)
    return {k: v for k, v in data.items() if k not in other_keys}
