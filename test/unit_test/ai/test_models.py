from __future__ import annotations

from cdi_platform.ai.models import GeneratedEstimate


def test_accepts_camel_case_and_defaults_missing_numbers() -> None:
    estimate = GeneratedEstimate.model_validate(
        {
            "projectName": "Deck",
            "lineItems": [
                {"name": "Framing", "totalCost": 1200.5, "laborCost": 700},
                {"name": "Boards", "total_cost": 800},
            ],
            "taxRate": 0.08,
            "notes": ["Rot near stairs"],
            "unexpected": "ignored",
        }
    )

    assert estimate.project_name == "Deck"
    assert estimate.tax_rate == 0.08
    assert estimate.line_items[0].labor_cost == 700
    assert estimate.line_items[0].material_cost == 0.0
    assert estimate.line_items[1].task_category == "General"
    assert estimate.line_item_total() == 2000.5
    assert estimate.notes == ["Rot near stairs"]


def test_dump_by_alias() -> None:
    estimate = GeneratedEstimate(project_name="Roof", estimated_duration=3)

    dumped = estimate.model_dump(by_alias=True)

    assert dumped["projectName"] == "Roof"
    assert dumped["estimatedDuration"] == 3
    assert dumped["lineItems"] == []
