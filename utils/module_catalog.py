"""Module catalogue loader utility.

This module provides functions to load the assessment module catalogue
from config/modules.yml and to look up module definitions and their
declared read-only dependencies.

Author: Pat G Cappelaere, IBM Federal Consulting
Created: 2025-12-06
Version: 2.0.0
License: MIT
"""

import logging
from functools import lru_cache
from typing import Optional

from models.module_instance import ModuleDefinition

from .schema_validator import load_validated_yaml

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def load_module_catalog() -> dict[str, ModuleDefinition]:
    """Load the module catalogue, keyed by module key.
    
    Returns:
        Dictionary of module key to ModuleDefinition, in display order.
        
    Raises:
        FileNotFoundError: If modules.yml doesn't exist.
        ValueError: If modules.yml fails validation or repeats a key.
        
    Example:
        >>> catalog = load_module_catalog()
        >>> print(catalog['A4_MANAGEMENT_CONTROLS'].name)
        A4 - Management Systems
    """
    data = load_validated_yaml("modules")
    
    catalog: dict[str, ModuleDefinition] = {}
    for entry in data['modules']:
        definition = ModuleDefinition(**entry)
        if definition.key in catalog:
            raise ValueError(f"Duplicate module key in catalogue: {definition.key}")
        catalog[definition.key] = definition
    
    ordered = dict(sorted(catalog.items(), key=lambda item: item[1].order))
    logger.info(f"Loaded {len(ordered)} module definitions")
    return ordered


def get_module_definition(module_key: str) -> Optional[ModuleDefinition]:
    """Get the catalogue entry for a module.
    
    Args:
        module_key: Module key (e.g., "RE_03_OCCUPANCY").
        
    Returns:
        ModuleDefinition, or None if the key is not catalogued.
    """
    return load_module_catalog().get(module_key)


def get_required_modules(module_key: str) -> list[str]:
    """Get the modules a module reads from.
    
    Args:
        module_key: Module key.
        
    Returns:
        List of module keys (empty for unknown modules).
        
    Example:
        >>> get_required_modules("RE_03_OCCUPANCY")
        ['RISK_ENGINEERING']
    """
    definition = get_module_definition(module_key)
    return list(definition.requires) if definition else []


def get_modules_for_doc_type(doc_type: str) -> list[ModuleDefinition]:
    """Get catalogue entries that apply to a document type (e.g., "FRA")."""
    return [
        definition for definition in load_module_catalog().values()
        if doc_type in definition.doc_types
    ]
