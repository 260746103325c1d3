#!/usr/bin/env python3
"""Validate workshop YAML files against the schema."""
import sys
from pathlib import Path

import yaml
from jsonschema import Draft7Validator, FormatChecker


def load_schema() -> dict:
    """Load the workshop JSON schema from schema.yaml."""
    schema_path = Path(__file__).parent / "schema.yaml"
    with open(schema_path) as f:
        return yaml.safe_load(f)


def format_error(error) -> list[str]:
    """Describe one schema violation, with its location in the file when known."""
    lines = [f"Schema validation error: {error.message}"]
    if error.path:
        lines.append(f"  at path: {'.'.join(str(p) for p in error.path)}")
    return lines


def validate_workshop_file(filepath: Path, schema: dict) -> list[str]:
    """
    Validate a single workshop YAML file. Returns list of errors.

    Every violation is reported, not just the first. Inspection dates must
    be real calendar days ('2024-02-30' is rejected).
    """
    try:
        with open(filepath) as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        return [f"YAML parse error: {e}"]
    except OSError as e:
        return [f"Error: {e}"]

    validator = Draft7Validator(schema, format_checker=FormatChecker())
    violations = sorted(
        validator.iter_errors(data), key=lambda e: [str(p) for p in e.path]
    )

    errors = []
    for violation in violations:
        errors.extend(format_error(violation))
    return errors


def main(argv=None):
    """Validate the given workshop files (default: workshop.yaml in the project root)."""
    schema = load_schema()
    args = sys.argv[1:] if argv is None else argv
    paths = [Path(a) for a in args] or [Path(__file__).parent / "workshop.yaml"]

    all_valid = True
    for filepath in paths:
        errors = validate_workshop_file(filepath, schema)
        if errors:
            print(f"FAIL: {filepath.name}")
            for error in errors:
                print(f"  {error}")
            all_valid = False
        else:
            print(f"OK: {filepath.name}")

    return 0 if all_valid else 1


if __name__ == "__main__":
    sys.exit(main())
