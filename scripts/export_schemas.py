"""Export JSON schemas for Itinerary, BudgetBreakdown and GameProgressReport."""

import json
from pathlib import Path

from backend.app.models import BudgetBreakdown, GameProgressReport, Itinerary

EXPORTED_MODELS = [Itinerary, BudgetBreakdown, GameProgressReport]


def main() -> None:
    """Export schemas to docs/schemas/."""
    schemas_dir = Path("docs/schemas")
    schemas_dir.mkdir(parents=True, exist_ok=True)

    for model in EXPORTED_MODELS:
        schema = model.model_json_schema()
        path = schemas_dir / f"{model.__name__}.schema.json"
        with open(path, "w") as f:
            json.dump(schema, f, indent=2)
        print(f"Exported {model.__name__} schema to {path}")


if __name__ == "__main__":
    main()
