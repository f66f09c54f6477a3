"""Shared utilities for reading and writing YAML definition files."""

import logging
from pathlib import Path
from typing import Any, Callable, TypeVar

import yaml

from skillengine.core.exceptions import InvalidSkillError

T = TypeVar("T")
logger = logging.getLogger(__name__)

DEFINITION_SUFFIXES = (".yml", ".yaml")


def is_definition_file(path: Path) -> bool:
    return path.is_file() and path.suffix in DEFINITION_SUFFIXES


def parse_definition(content: str, def_id: str) -> dict[str, Any]:
    """
    Parse a YAML definition document.

    Args:
        content: Raw file content
        def_id: Definition ID, used in error messages

    Returns:
        The parsed mapping (empty for an empty document)

    Raises:
        InvalidSkillError: If the YAML is malformed or not a mapping
    """
    try:
        raw = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise InvalidSkillError(def_id, f"malformed YAML: {e}") from e

    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise InvalidSkillError(def_id, "definition file must contain a mapping")
    return raw


def read_definition(path: Path) -> dict[str, Any]:
    """Read and parse a single definition file."""
    return parse_definition(path.read_text(encoding="utf-8"), path.stem)


def discover_definitions(
    path: Path,
    parse_fn: Callable[[Path, dict[str, Any]], T | None],
) -> list[T]:
    """
    Scan a directory for definition files.

    A file that cannot be read or parsed is logged and skipped; it never
    aborts the scan of the remaining files.

    Args:
        path: Directory containing *.yml / *.yaml files
        parse_fn: Callback(file_path, raw_dict) -> typed object or None

    Returns:
        List of objects from successful parses, in file name order
    """
    if not path.exists():
        logger.warning(f"Definitions directory not found: {path}")
        return []

    results = []
    for def_file in sorted(path.iterdir()):
        if not is_definition_file(def_file):
            continue

        try:
            result = parse_fn(def_file, read_definition(def_file))
            if result is not None:
                results.append(result)
        except Exception as e:
            logger.warning(f"Failed to load skill {def_file.name}: {e}")
            continue

    return results


def write_definition(path: Path, document: dict[str, Any]) -> Path:
    """
    Write a definition document as YAML.

    The file is written to a sibling temp file first and then moved into
    place, so readers never see a half-written definition.

    Returns:
        Path to the written file
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    content = yaml.dump(
        document, default_flow_style=False, sort_keys=False, allow_unicode=True
    )

    tmp_path = path.with_name(f".{path.name}.tmp")
    tmp_path.write_text(content, encoding="utf-8")
    tmp_path.replace(path)
    return path
