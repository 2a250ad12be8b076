"""
Configuration loading for pydantic settings models.

Values come from, in increasing precedence: model defaults, a JSON file
(explicit path, or the path named by an environment variable), and explicit
overrides. ``.env`` files are honoured through python-dotenv.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Type, TypeVar

from dotenv import load_dotenv
from pydantic import BaseModel

from .logger import get_logger
from .paths import PROJECT_ROOT

logger = get_logger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


def load_model_config(
    model_cls: Type[ModelT],
    path: str | Path | None = None,
    env_var: Optional[str] = None,
    overrides: Optional[Mapping[str, Any]] = None,
) -> ModelT:
    """
    Build a settings model from defaults, a JSON file and overrides.

    Args:
        model_cls: pydantic model to validate into
        path: JSON file to read. Relative paths resolve against the project root.
        env_var: Environment variable holding a JSON path, used when ``path`` is None
        overrides: Field values applied last

    Returns:
        Validated model instance

    Raises:
        FileNotFoundError: If the configured file does not exist
        pydantic.ValidationError: If the merged values are invalid
    """
    load_dotenv()

    if path is None and env_var:
        path = os.getenv(env_var) or None

    data: Dict[str, Any] = {}
    if path is not None:
        file_path = Path(path)
        if not file_path.is_absolute():
            file_path = PROJECT_ROOT / file_path
        logger.info("Loading %s from %s", model_cls.__name__, file_path)
        with open(file_path, "r", encoding="utf-8") as f:
            data = json.load(f)

    if overrides:
        data.update(overrides)
    return model_cls.model_validate(data)
