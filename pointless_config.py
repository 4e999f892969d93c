"""
Configuration file support for pointless.

Looks for .pointless.yaml (or .pointless.yml) in the working directory and
its parents:

    threshold: 1024  # bytes
    exclude:
      - "*_test.go"
      - "vendor/**"
"""

import logging
from dataclasses import dataclass, replace
from pathlib import Path

import yaml

logger = logging.getLogger(__name__)

DEFAULT_THRESHOLD = 1024
CONFIG_FILE_NAMES = (".pointless.yaml", ".pointless.yml")


@dataclass(frozen=True)
class PointlessConfig:
    threshold: int = DEFAULT_THRESHOLD
    exclude: tuple = ()

    def with_threshold(self, threshold):
        return replace(self, threshold=threshold)


def find_config_file(start=None):
    directory = Path(start) if start is not None else Path.cwd()
    directory = directory.resolve()

    for candidate_dir in (directory, *directory.parents):
        for name in CONFIG_FILE_NAMES:
            path = candidate_dir / name
            if path.is_file():
                return path
    return None


def _config_from_mapping(data, source):
    problems = []
    threshold = DEFAULT_THRESHOLD
    exclude = ()

    raw_threshold = data.get("threshold")
    if raw_threshold is not None:
        if isinstance(raw_threshold, int) and not isinstance(raw_threshold, bool) and raw_threshold > 0:
            threshold = raw_threshold
        else:
            problems.append(f"threshold must be a positive integer, got {raw_threshold!r}")

    raw_exclude = data.get("exclude")
    if raw_exclude is not None:
        if isinstance(raw_exclude, list) and all(isinstance(p, str) for p in raw_exclude):
            exclude = tuple(raw_exclude)
        else:
            problems.append("exclude must be a list of glob patterns")

    warning = None
    if problems:
        warning = f"{source}: " + "; ".join(problems)
    return PointlessConfig(threshold=threshold, exclude=exclude), warning


def load_config(path=None, start=None):
    """
    Loads the configuration, returning (config, warning).

    Never raises: on any problem the defaults are used for the affected
    settings and warning describes what went wrong.
    """
    if path is None:
        try:
            path = find_config_file(start)
        except OSError as exc:
            return PointlessConfig(), f"finding config file: {exc}"
        if path is None:
            return PointlessConfig(), None

    logger.debug("loading config from %s", path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as exc:
        return PointlessConfig(), f"reading config file: {exc}"
    except yaml.YAMLError as exc:
        return PointlessConfig(), f"parsing config file: {exc}"

    if data is None:
        return PointlessConfig(), None
    if not isinstance(data, dict):
        return PointlessConfig(), f"parsing config file: {path} must contain a mapping"

    return _config_from_mapping(data, path)
