"""Estimate payloads returned by the model.

The model is asked for camelCase JSON, so fields carry camelCase aliases and
accept either spelling. Missing numeric fields default to zero rather than
failing the whole estimate.
"""

from __future__ import annotations

from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class EstimateLineItem(BaseModel):
    """One priced task in an estimate."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    name: str
    description: str = ""
    task_category: str = Field(default="General", alias="taskCategory")
    quantity: float = 0.0
    unit_type: str = Field(default="fixed", alias="unitType")
    unit_cost: float = Field(default=0.0, alias="unitCost")
    labor_cost: float = Field(default=0.0, alias="laborCost")
    material_cost: float = Field(default=0.0, alias="materialCost")
    equipment_cost: float = Field(default=0.0, alias="equipmentCost")
    total_cost: float = Field(default=0.0, alias="totalCost")
    notes: Optional[str] = None


class EstimateMeasurements(BaseModel):
    """Measurements extracted from the description or photos."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    area: Optional[float] = None
    length: Optional[float] = None
    height: Optional[float] = None
    volume: Optional[float] = None
    rooms: Optional[float] = None
    square_feet: Optional[float] = Field(default=None, alias="squareFeet")
    notes: Optional[str] = None


class GeneratedEstimate(BaseModel):
    """Complete estimate as produced by the model."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    project_name: str = Field(alias="projectName")
    project_description: str = Field(default="", alias="projectDescription")
    scope: str = ""
    line_items: List[EstimateLineItem] = Field(default_factory=list, alias="lineItems")
    subtotal: float = 0.0
    tax_rate: float = Field(default=0.0, alias="taxRate")
    tax_amount: float = Field(default=0.0, alias="taxAmount")
    total: float = 0.0
    estimated_duration: float = Field(default=0.0, alias="estimatedDuration", description="Days")
    # Photo-based estimates return notes as a list of observations
    notes: Union[str, List[str]] = ""
    assumptions: List[str] = Field(default_factory=list)
    measurements: EstimateMeasurements = Field(default_factory=EstimateMeasurements)

    def line_item_total(self) -> float:
        """Sum of line item totals, for checking the model's subtotal."""
        return sum(item.total_cost for item in self.line_items)
