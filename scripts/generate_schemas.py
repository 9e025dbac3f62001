"""Generate JSON schemas from Pydantic models and save to schemas/ directory."""

import json
from pathlib import Path

from compatgate.config import CheckConfig
from compatgate.contracts import CheckReport


def generate_schemas():
    """Generate JSON schemas for the config file and the written report."""
    schemas_dir = Path(__file__).parent.parent / "schemas"
    schemas_dir.mkdir(exist_ok=True)

    # Generate check config schema
    config_schema = CheckConfig.model_json_schema()
    config_schema_path = schemas_dir / "check_config.schema.json"
    with open(config_schema_path, 'w', encoding='utf-8') as f:
        json.dump(config_schema, f, indent=2, ensure_ascii=False)
    print(f"Generated: {config_schema_path}")

    # Generate compatibility report schema
    report_schema = CheckReport.model_json_schema()
    report_schema_path = schemas_dir / "compatibility_report.schema.json"
    with open(report_schema_path, 'w', encoding='utf-8') as f:
        json.dump(report_schema, f, indent=2, ensure_ascii=False)
    print(f"Generated: {report_schema_path}")

    print("\nSchema generation complete!")


if __name__ == "__main__":
    generate_schemas()
