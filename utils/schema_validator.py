"""Utility for validating YAML reference data against JSON schemas.

The module catalogue, the industry weight map and the recommendation
templates are maintained as YAML files under config/. Each one has a
matching JSON schema under schemas/ and is validated when it is loaded.

Author: Pat G Cappelaere, IBM Federal Consulting
Created: 2025-12-05
Version: 2.0.0
License: MIT
"""

import json
import logging
from pathlib import Path
from typing import Optional

import yaml
from jsonschema import Draft7Validator

from .config import config

logger = logging.getLogger(__name__)


def load_schema(schema_path: Path) -> dict:
    """Load JSON schema from file.

    Args:
        schema_path: Path to the JSON schema file.

    Returns:
        Schema as a dictionary.

    Raises:
        FileNotFoundError: If schema file doesn't exist.
        json.JSONDecodeError: If schema file is not valid JSON.

    Example:
        >>> schema = load_schema(Path("schemas/modules.schema.json"))
        >>> print(schema["title"])
        Module Catalogue
    """
    try:
        with open(schema_path, 'r', encoding='utf-8') as f:
            schema = json.load(f)
        logger.debug(f"Loaded schema from: {schema_path}")
        return schema
    except FileNotFoundError:
        logger.error(f"Schema file not found: {schema_path}")
        raise
    except json.JSONDecodeError as e:
        logger.error(f"Invalid JSON in schema file: {str(e)}")
        raise


def validate_json(data: dict, schema: dict) -> tuple[bool, list[str]]:
    """Validate data against schema.

    Args:
        data: Parsed data to validate.
        schema: JSON schema to validate against.

    Returns:
        Tuple of (is_valid, list_of_error_messages).

    Example:
        >>> schema = load_schema(Path("schemas/industry_weights.schema.json"))
        >>> is_valid, errors = validate_json({"meta": {}}, schema)
        >>> print(is_valid)
        False
    """
    validator = Draft7Validator(schema)
    errors = []

    for error in validator.iter_errors(data):
        error_path = ".".join(str(p) for p in error.path) if error.path else "root"
        error_msg = f"{error_path}: {error.message}"
        errors.append(error_msg)
        logger.debug(f"Validation error: {error_msg}")

    is_valid = len(errors) == 0
    if is_valid:
        logger.debug("JSON validation successful")
    else:
        logger.warning(f"JSON validation failed with {len(errors)} errors")

    return is_valid, errors


def load_validated_yaml(name: str, config_dir: Optional[Path] = None) -> dict:
    """Load a YAML reference file and validate it against its schema.

    Looks for ``{config_dir}/{name}.yml`` and ``{SCHEMAS_DIR}/{name}.schema.json``.

    Args:
        name: Reference file stem (e.g., "modules").
        config_dir: Override for the config directory.

    Returns:
        Parsed YAML content.

    Raises:
        FileNotFoundError: If the YAML or schema file is missing.
        ValueError: If the content does not match the schema.
    """
    yaml_path = (config_dir or config.CONFIG_DIR) / f"{name}.yml"
    schema_path = config.SCHEMAS_DIR / f"{name}.schema.json"

    if not yaml_path.exists():
        raise FileNotFoundError(f"Reference file not found: {yaml_path}")

    with open(yaml_path, 'r', encoding='utf-8') as f:
        data = yaml.safe_load(f) or {}

    is_valid, errors = validate_json(data, load_schema(schema_path))
    if not is_valid:
        raise ValueError(f"{yaml_path} failed schema validation:\n- " + "\n- ".join(errors))

    logger.info(f"Loaded reference data from: {yaml_path}")
    return data


# Made with Bob
