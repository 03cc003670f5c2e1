"""Regional unit-cost pricing in the style of published cost calculators.

Used two ways: as guidance text injected into estimate prompts, and as a
deterministic fallback cost for a known task when no model is involved.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from pydantic import BaseModel

# (ZIP prefixes, multiplier, region label)
REGIONAL_MULTIPLIERS: List[Tuple[Tuple[str, ...], float, str]] = [
    (("10", "11", "02", "06", "07"), 1.25, "Northeast metros"),
    (("90", "91", "92", "93", "94"), 1.32, "California"),
    (("98",), 1.22, "Seattle"),
    (("30", "31", "32", "33"), 0.90, "Southeast"),
    (("60", "61", "62", "63", "64", "65"), 0.95, "Midwest"),
    (tuple(str(p) for p in range(70, 80)), 0.88, "South Central"),
    (tuple(str(p) for p in range(80, 90)), 1.05, "Mountain West"),
]

MATERIAL_WASTE_FACTOR = 1.1
LOW_RANGE_FACTOR = 0.85
HIGH_RANGE_FACTOR = 1.15


@dataclass(frozen=True)
class UnitPrice:
    """National average price per unit before regional adjustment."""

    labor: float
    material: float
    unit: str


BASE_PRICES: Dict[str, UnitPrice] = {
    "Interior Painting": UnitPrice(1.5, 1.0, "square_foot"),
    "Exterior Painting": UnitPrice(2.0, 1.5, "square_foot"),
    "Hardwood Flooring Installation": UnitPrice(5.0, 6.0, "square_foot"),
    "Carpet Installation": UnitPrice(2.0, 3.0, "square_foot"),
    "Tile Installation": UnitPrice(8.0, 7.0, "square_foot"),
    "Drywall Installation": UnitPrice(1.0, 0.8, "square_foot"),
    "Asphalt Shingle Roof": UnitPrice(3.5, 4.0, "square_foot"),
    "Kitchen Cabinet Installation": UnitPrice(100.0, 150.0, "linear_foot"),
    "Granite Countertop Installation": UnitPrice(30.0, 45.0, "square_foot"),
}
DEFAULT_PRICE = UnitPrice(10.0, 10.0, "square_foot")

# task key -> (task name, category, keywords); first keyword hit wins
TASKS: Dict[str, Tuple[str, str, Tuple[str, ...]]] = {
    "interior_painting": ("Interior Painting", "Painting", ("paint", "painting", "interior paint", "wall paint")),
    "exterior_painting": ("Exterior Painting", "Painting", ("exterior paint", "house paint", "outside paint")),
    "hardwood_flooring": ("Hardwood Flooring Installation", "Flooring", ("hardwood", "wood floor")),
    "carpet_installation": ("Carpet Installation", "Flooring", ("carpet", "carpeting")),
    "tile_installation": ("Tile Installation", "Flooring", ("tile", "ceramic", "porcelain")),
    "drywall_installation": ("Drywall Installation", "Drywall", ("drywall", "sheetrock", "gypsum")),
    "drywall_repair": ("Drywall Repair", "Drywall", ("wall repair", "hole repair")),
    "roof_shingles": ("Asphalt Shingle Roof", "Roofing", ("roof", "shingle", "roofing", "asphalt")),
    "kitchen_cabinets": ("Kitchen Cabinet Installation", "Cabinets", ("cabinet",)),
    "countertops_granite": ("Granite Countertop Installation", "Countertops", ("granite",)),
    "countertops_quartz": ("Quartz Countertop Installation", "Countertops", ("quartz",)),
    "bathroom_remodel": ("Bathroom Remodel", "Remodeling", ("bathroom remodel", "bath remodel")),
    "kitchen_remodel": ("Kitchen Remodel", "Remodeling", ("kitchen remodel",)),
    "fence_wood": ("Wood Fence Installation", "Fencing", ("fence",)),
    "deck_wood": ("Wood Deck Construction", "Outdoor", ("deck", "patio")),
    "window_replacement": ("Window Replacement", "Windows", ("window",)),
    "door_installation": ("Interior Door Installation", "Doors", ("door",)),
    "hvac_installation": ("HVAC System Installation", "HVAC", ("hvac", "air conditioning", "furnace", "heating")),
    "electrical_outlet": ("Electrical Outlet Installation", "Electrical", ("outlet", "plug")),
    "plumbing_fixture": ("Plumbing Fixture Installation", "Plumbing", ("plumbing", "fixture", "faucet", "sink")),
}


class CostRange(BaseModel):
    low: float
    average: float
    high: float


class TaskCostEstimate(BaseModel):
    """Priced task for a ZIP code."""

    task_name: str
    zip_code: str
    cost_range: CostRange
    labor_cost: float
    material_cost: float
    price_per_unit: float
    unit: str
    regional_multiplier: float


def regional_multiplier(zip_code: str) -> float:
    """Cost multiplier for the region a ZIP code falls in.

    Matches on the first two digits; unknown prefixes price at national average.
    """
    prefix = (zip_code or "").strip()[:2]
    for prefixes, multiplier, _ in REGIONAL_MULTIPLIERS:
        if prefix in prefixes:
            return multiplier
    return 1.0


def estimate_task_cost(task_name: str, zip_code: str, quantity: float) -> TaskCostEstimate:
    """Price a task for a quantity at a location.

    Labor and material are scaled by the regional multiplier; material also
    carries a 10 % waste allowance. The range spans -15 % to +15 % of the
    total. Tasks without a base price use a flat default.

    Args:
        task_name: Task display name, e.g. ``"Interior Painting"``
        zip_code: Project ZIP code
        quantity: Units of work in the task's unit

    Returns:
        Priced task
    """
    pricing = BASE_PRICES.get(task_name, DEFAULT_PRICE)
    multiplier = regional_multiplier(zip_code)

    labor_cost = pricing.labor * multiplier * quantity
    material_cost = pricing.material * multiplier * quantity * MATERIAL_WASTE_FACTOR
    total = labor_cost + material_cost

    return TaskCostEstimate(
        task_name=task_name,
        zip_code=zip_code,
        cost_range=CostRange(low=total * LOW_RANGE_FACTOR, average=total, high=total * HIGH_RANGE_FACTOR),
        labor_cost=labor_cost,
        material_cost=material_cost,
        price_per_unit=total / quantity if quantity else 0.0,
        unit=pricing.unit,
        regional_multiplier=multiplier,
    )


def find_matching_task(description: str) -> Optional[str]:
    """Map free text to a known task key by keyword, or None."""
    text = description.lower()
    for key, (_, _, keywords) in TASKS.items():
        if any(keyword in text for keyword in keywords):
            return key
    return None


def task_categories() -> List[str]:
    """Sorted distinct categories of the known tasks."""
    return sorted({category for _, category, _ in TASKS.values()})


def pricing_guidelines(zip_code: str) -> str:
    """Pricing methodology section injected into estimate prompts."""
    return f"""
**Pricing Methodology - Use Homewyse Standards:**

You should estimate costs using the same methodology as Homewyse.com cost calculators:

1. **Regional Adjustments by ZIP Code:**
   - Base your estimates on {zip_code} location
   - Apply regional cost multipliers based on:
     * Local labor rates
     * Material availability and shipping costs
     * Market demand and competition
     * Cost of living adjustments

2. **Cost Component Breakdown:**
   - Separate labor costs from material costs
   - Labor: Based on local contractor hourly rates ($45-$150/hr depending on trade and region)
   - Materials: Include 10-15% waste factor
   - Consider bulk discounts for larger quantities

3. **Quality Levels:**
   - Provide estimates for standard/mid-grade quality
   - Economy options: -20% from standard
   - Premium options: +30-50% from standard

4. **Regional Multipliers by ZIP Code Prefix:**
   - 10xxx-02xxx (Northeast major metros): 1.20-1.35x
   - 90xxx-94xxx (California metros): 1.25-1.40x
   - 98xxx (Seattle area): 1.15-1.30x
   - 30xxx-39xxx (Southeast): 0.85-0.95x
   - 60xxx-65xxx (Midwest): 0.90-1.00x
   - 70xxx-79xxx (South Central): 0.85-0.95x
   - 80xxx-89xxx (Mountain/West): 0.95-1.10x

5. **Common Task Pricing (adjust for region):**
   - Interior Painting: $1.50-$3.50/sq ft (labor $0.80-$2, materials $0.70-$1.50)
   - Hardwood Flooring: $8-$15/sq ft installed
   - Tile Work: $10-$25/sq ft installed
   - Drywall: $1.50-$3/sq ft installed
   - Kitchen Cabinets: $100-$300/linear ft
   - Granite Countertops: $50-$100/sq ft installed
   - Roofing (asphalt): $5-$12/sq ft
   - Wood Fence: $15-$30/linear ft
   - Window Replacement: $300-$800 per window

6. **Include in Every Estimate:**
   - Job preparation costs (5-10% of materials)
   - Cleanup and disposal (2-5% of total)
   - Permits if required (vary by location)
   - Contractor overhead and profit margin (15-25%)

Use these Homewyse-inspired guidelines to provide accurate, market-based pricing.
"""
