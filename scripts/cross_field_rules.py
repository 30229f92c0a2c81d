"""
cross_field_rules.py

Cross-file rules for the assessment engine reference data.

These rules enforce constraints that cannot be expressed using JSON Schema
alone and MUST be executed after schema validation of each YAML file.

If any rule fails, a ValueError is raised with a clear, human-readable message.
"""

EXPOSURE_KEYS = (
    "exposures_flood",
    "exposures_wind_storm",
    "exposures_earthquake",
    "exposures_wildfire",
    "exposures_other",
    "exposures_human_malicious",
)


def validate_cross_field_constraints(modules: dict, weights: dict, templates: dict):
    errors = []

    # ------------------------------------------------------------
    # Rule 1: Module keys must be unique
    # ------------------------------------------------------------
    module_keys = [module["key"] for module in modules.get("modules", [])]
    duplicates = sorted({key for key in module_keys if module_keys.count(key) > 1})
    for key in duplicates:
        errors.append(f"Module key defined more than once: '{key}'")

    # ------------------------------------------------------------
    # Rule 2: `requires` may only reference catalogued modules
    # ------------------------------------------------------------
    known_modules = set(module_keys)
    for module in modules.get("modules", []):
        for required in module.get("requires", []):
            if required == module["key"]:
                errors.append(f"Module '{module['key']}' requires itself")
            elif required not in known_modules:
                errors.append(
                    f"Module '{module['key']}' requires unknown module '{required}'"
                )

    # ------------------------------------------------------------
    # Rule 3: Industry weights may only reference canonical keys
    # ------------------------------------------------------------
    canonical_keys = set(weights.get("meta", {}).get("canonical_keys", []))
    for industry_key, industry in weights.get("industries", {}).items():
        for factor_key in industry.get("weights", {}):
            if factor_key not in canonical_keys:
                errors.append(
                    f"Industry '{industry_key}' weights unknown factor '{factor_key}'"
                )

    # ------------------------------------------------------------
    # Rule 4: Templates may only reference rated factors
    # ------------------------------------------------------------
    rated_keys = canonical_keys | set(EXPOSURE_KEYS)
    for template_key in templates.get("templates", {}):
        if template_key not in rated_keys:
            errors.append(f"Recommendation template for unknown factor '{template_key}'")

    # ------------------------------------------------------------
    # Final decision
    # ------------------------------------------------------------
    if errors:
        raise ValueError("Cross-field validation failed:\n- " + "\n- ".join(errors))
