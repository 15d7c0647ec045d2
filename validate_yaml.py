#!/usr/bin/env python3
"""Validate portal config and record files against the schema."""
import sys
from datetime import date
from pathlib import Path

import yaml
from jsonschema import FormatChecker, validate, ValidationError

from models.calculations import parse_date
from models.file_store import RECORDS_FILE

FORMAT_CHECKER = FormatChecker()


@FORMAT_CHECKER.checks("service-date")
def is_service_date(instance) -> bool:
    """Any date the record store can rank by."""
    return parse_date(instance) is not None


def coerce_dates(data):
    """Turn dates YAML loads from unquoted values into ISO strings, as the store reads them."""
    if isinstance(data, dict):
        return {key: coerce_dates(value) for key, value in data.items()}
    if isinstance(data, list):
        return [coerce_dates(value) for value in data]
    if isinstance(data, date):
        return data.isoformat()
    return data


def load_schema() -> dict:
    """Load the JSON schemas (config, records) from schema.yaml."""
    schema_path = Path(__file__).parent / "schema.yaml"
    with open(schema_path) as f:
        return yaml.safe_load(f)


def validate_file(filepath: Path, schema: dict) -> list[str]:
    """Validate a single YAML file. Returns list of errors."""
    errors = []
    try:
        with open(filepath) as f:
            data = yaml.safe_load(f)
        validate(
            instance=coerce_dates(data),
            schema=schema,
            format_checker=FORMAT_CHECKER,
        )
    except yaml.YAMLError as e:
        errors.append(f"YAML parse error: {e}")
    except ValidationError as e:
        errors.append(f"Schema validation error: {e.message}")
        if e.path:
            errors.append(f"  at path: {'.'.join(str(p) for p in e.path)}")
    except OSError as e:
        errors.append(f"Error: {e}")
    return errors


def collect_files(home: Path, config_file: Path) -> list[tuple[Path, str]]:
    """Files to validate, paired with the schema section that applies."""
    files = []
    if config_file.exists():
        files.append((config_file, "config"))
    categories_dir = home / "categories"
    if categories_dir.is_dir():
        for records_file in sorted(categories_dir.glob(f"*/{RECORDS_FILE}")):
            files.append((records_file, "records"))
    return files


def main(argv=None):
    """Validate the config file and every category's records file."""
    args = sys.argv[1:] if argv is None else argv
    home = Path(args[0]) if args else Path(__file__).parent / "portal"
    config_file = home / "config" / "recommended.yaml"

    if not home.exists():
        print(f"Error: portal directory not found: {home}")
        return 1

    schema = load_schema()
    files = collect_files(home, config_file)

    if not files:
        print(f"Warning: No config or record files found in {home}")
        return 0

    all_valid = True
    for filepath, section in files:
        errors = validate_file(filepath, schema[section])
        name = filepath.relative_to(home)
        if errors:
            print(f"FAIL: {name}")
            for error in errors:
                print(f"  {error}")
            all_valid = False
        else:
            print(f"OK: {name}")

    return 0 if all_valid else 1


if __name__ == "__main__":
    sys.exit(main())
