#!/usr/bin/env python3

"""
validate_config.py

Validate the assessment engine reference data (config/*.yml) against:
1) Structural JSON Schema (schemas/*.schema.json)
2) Cross-file rules

USAGE:
    python scripts/validate_config.py [config-dir]

EXIT CODES:
    0 - Validation successful
    1 - Validation failed
"""

import sys
from pathlib import Path

# scripts/ is one level below repo root
REPO_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(REPO_ROOT))

from utils.logging_config import get_logger  # noqa: E402
from utils.schema_validator import load_validated_yaml  # noqa: E402

from cross_field_rules import validate_cross_field_constraints  # noqa: E402

logger = get_logger(__name__)

REFERENCE_FILES = ("modules", "industry_weights", "recommendation_templates")


def main():
    if len(sys.argv) > 2:
        print("Usage: python validate_config.py [config-dir]")
        sys.exit(1)

    config_dir = Path(sys.argv[1]).resolve() if len(sys.argv) == 2 else REPO_ROOT / "config"

    # ------------------------------------------------------------
    # Basic path validation
    # ------------------------------------------------------------
    if not config_dir.exists():
        print(f"❌ Config folder not found: {config_dir}")
        sys.exit(1)

    try:
        # --------------------------------------------------------
        # 1. Structural schema validation
        # --------------------------------------------------------
        loaded = {name: load_validated_yaml(name, config_dir) for name in REFERENCE_FILES}

        # --------------------------------------------------------
        # 2. Cross-file validation
        # --------------------------------------------------------
        validate_cross_field_constraints(
            loaded["modules"], loaded["industry_weights"], loaded["recommendation_templates"]
        )

        print(f"✅ {config_dir}: reference data is valid")

    except FileNotFoundError as e:
        print(f"❌ {e}")
        sys.exit(1)

    except ValueError as e:
        # Raised by schema validation or cross_field_rules.py
        print("❌ Reference data validation failed:")
        print(str(e))
        sys.exit(1)

    except Exception as e:
        logger.error(f"Unexpected validation error: {e}")
        print("❌ Unexpected validation error:")
        print(str(e))
        sys.exit(1)


if __name__ == "__main__":
    main()
