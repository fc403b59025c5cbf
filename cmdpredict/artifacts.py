import json
import logging

import yaml

from cmdpredict.errors import ModelLoadError

__all__ = ["load_document"]

logger = logging.getLogger(__name__)


def load_document(path):
    """Load a JSON or YAML artifact, picking the format from the suffix."""
    path = str(path)
    try:
        with open(path, encoding="utf-8") as f:
            if path.endswith(".yaml") or path.endswith(".yml"):
                data = yaml.safe_load(f)
            else:
                data = json.load(f)
    except OSError as e:
        raise ModelLoadError(f"Can't read {path}: {e}", path=path) from e
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise ModelLoadError(f"Can't parse {path}: {e}", path=path) from e

    if not isinstance(data, dict):
        raise ModelLoadError(f"{path}: top level must be a mapping", path=path)
    logger.debug("Loaded artifact %s (%d top-level keys)", path, len(data))
    return data
