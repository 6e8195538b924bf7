"""
Plan file reading and writing.

Plan files are JSON by default. Files ending in ``.yaml`` or ``.yml`` are
read and written as YAML, which is easier to edit by hand.

A workouts file is either a bare list of workouts or an object with a
``workouts`` list (a weekly plan). Anything else is a FormatError.
Activity files are a bare list of raw activities or an exported document
with an ``activities`` list.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Union

import yaml

from domain.exceptions import FormatError

logger = logging.getLogger(__name__)

YAML_SUFFIXES = {".yaml", ".yml"}

PathLike = Union[str, Path]


def _is_yaml(path: Path) -> bool:
    return path.suffix.lower() in YAML_SUFFIXES


def read_document(path: PathLike) -> Any:
    """
    Parse a JSON or YAML file.

    Raises:
        FileNotFoundError: If the file does not exist
        FormatError: If the content cannot be parsed
    """
    path = Path(path)
    text = path.read_text(encoding="utf-8")
    try:
        if _is_yaml(path):
            return yaml.safe_load(text)
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise FormatError(f"Invalid JSON in {path}: {e}", path=str(path)) from e
    except yaml.YAMLError as e:
        raise FormatError(f"Invalid YAML in {path}: {e}", path=str(path)) from e


def load_workouts(path: PathLike) -> List[Any]:
    """
    Load the workouts from a workouts file or weekly plan file.

    Returns:
        Raw workout dicts, in file order (not validated)
    """
    data = read_document(path)
    if isinstance(data, list):
        workouts = data
    elif isinstance(data, dict) and isinstance(data.get("workouts"), list):
        workouts = data["workouts"]
    else:
        raise FormatError(
            "Invalid file format: expected array of workouts or WeeklyWorkoutPlan",
            path=str(path),
        )
    logger.info(f"Loaded {len(workouts)} workouts from {path}")
    return workouts


def load_plan(path: PathLike) -> Dict[str, Any]:
    """Load a weekly plan document (not validated beyond being an object)."""
    data = read_document(path)
    if not isinstance(data, dict):
        raise FormatError(
            "Invalid file format: expected a weekly workout plan object", path=str(path)
        )
    return data


def save_document(path: PathLike, data: Any) -> Path:
    """
    Write ``data`` as pretty JSON (or YAML), creating parent directories.

    Returns:
        The written path
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    if _is_yaml(path):
        text = yaml.safe_dump(data, sort_keys=False, allow_unicode=True)
    else:
        text = json.dumps(data, indent=2, ensure_ascii=False) + "\n"
    path.write_text(text, encoding="utf-8")
    logger.info(f"Saved {path}")
    return path


def load_raw_activities(path: PathLike) -> List[Any]:
    """
    Load activities from a raw export or a previous activities file.

    Returns:
        Activity dicts, in file order
    """
    data = read_document(path)
    if isinstance(data, dict) and isinstance(data.get("activities"), list):
        activities = data["activities"]
    elif isinstance(data, list):
        activities = data
    else:
        raise FormatError("Invalid raw activities file format", path=str(path))
    logger.info(f"Loaded {len(activities)} activities from {path}")
    return activities
