import dataclasses
import json
from pathlib import Path
from typing import Any


class PayloadError(Exception):
    """Raised when a payload file cannot be turned into an instance."""


def load_instance(target: type, path: Path | str) -> Any:
    """Read a JSON payload from *path* and build a *target* dataclass from it.

    A JSON ``null`` payload yields ``None``.  Keys that are not fields of
    *target* are ignored; missing fields keep their defaults.
    """
    if not dataclasses.is_dataclass(target):
        msg = f"{target.__qualname__} is not a dataclass"
        raise PayloadError(msg)

    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except OSError as exc:
        msg = f"Could not read {path}: {exc}"
        raise PayloadError(msg) from exc
    except json.JSONDecodeError as exc:
        msg = f"Invalid JSON in {path}: {exc}"
        raise PayloadError(msg) from exc
    except UnicodeDecodeError as exc:
        msg = f"{path} is not valid UTF-8: {exc}"
        raise PayloadError(msg) from exc

    if data is None:
        return None
    if not isinstance(data, dict):
        msg = f"Payload must be a JSON object, got {type(data).__name__}"
        raise PayloadError(msg)

    names = {f.name for f in dataclasses.fields(target)}
    return target(**{k: v for k, v in data.items() if k in names})
