import pytest
from httpx import AsyncClient

from test.factories import make_agreement, make_tool

pytestmark = pytest.mark.asyncio

BASE = "/api/v1/tool-rentals"


async def test_list_rentals_and_summary(client: AsyncClient, repos):
    tool = await repos.tools.create(make_tool(current_status="rented"))
    await repos.rentals.create(make_agreement("member-1", tool.id))

    rentals = await client.get(f"{BASE}/members/member-1")
    summary = await client.get(f"{BASE}/members/member-1/summary")

    assert rentals.status_code == 200
    assert rentals.json()[0]["tool"]["brand"] == "DeWalt"
    assert rentals.json()[0]["ownership_progress"] == 50.0
    assert summary.json()["total_weekly_payments"] == 10.0


async def test_search_tools(client: AsyncClient, repos):
    await repos.tools.create(make_tool(brand="Makita"))
    await repos.tools.create(make_tool(brand="Bosch"))

    response = await client.get(f"{BASE}/tools", params={"q": "makita"})

    assert [tool["brand"] for tool in response.json()] == ["Makita"]


async def test_initiate_rental(client: AsyncClient, repos):
    tool = await repos.tools.create(make_tool(purchase_cost=520.0, warranty_months=12))

    created = await client.post(BASE, json={"member_id": "member-1", "tool_id": tool.id})
    again = await client.post(BASE, json={"member_id": "member-2", "tool_id": tool.id})
    missing = await client.post(BASE, json={"member_id": "member-1", "tool_id": "nope"})

    assert created.status_code == 201
    assert created.json()["weekly_payment_amount"] == 11.5
    assert created.json()["agreement_status"] == "pending"
    assert again.status_code == 400
    assert again.json()["error_type"] == "ConflictError"
    assert missing.status_code == 404


async def test_upgrades_and_trade_in(client: AsyncClient, repos):
    tool = await repos.tools.create(make_tool(current_status="rented"))
    agreement = await repos.rentals.create(make_agreement("member-1", tool.id))
    upgrade = await repos.tools.create(make_tool(retail_price=300.0))

    options = await client.get(f"{BASE}/{agreement.id}/upgrades")
    traded = await client.post(f"{BASE}/{agreement.id}/trade-in", json={"new_tool_id": upgrade.id})
    twice = await client.post(f"{BASE}/{agreement.id}/trade-in", json={"new_tool_id": upgrade.id})

    assert [o["tool"]["id"] for o in options.json()] == [upgrade.id]
    assert traded.status_code == 200
    assert traded.json()["credit_applied"] == 100.0
    assert traded.json()["old_agreement"]["agreement_status"] == "traded_in"
    assert traded.json()["new_agreement"]["remaining_balance"] == 200.0
    assert twice.status_code == 400


async def test_trade_in_credit_above_tier(client: AsyncClient, repos):
    tool = await repos.tools.create(make_tool())
    agreement = await repos.rentals.create(make_agreement("member-1", tool.id))
    upgrade = await repos.tools.create(make_tool(retail_price=300.0))

    response = await client.post(
        f"{BASE}/{agreement.id}/trade-in", json={"new_tool_id": upgrade.id, "credit_percentage": 70}
    )

    assert response.status_code == 400
    assert response.json()["error_type"] == "ValidationError"


async def test_trade_in_negative_credit_rejected(client: AsyncClient, repos):
    tool = await repos.tools.create(make_tool())
    agreement = await repos.rentals.create(make_agreement("member-1", tool.id))
    upgrade = await repos.tools.create(make_tool(retail_price=300.0))

    response = await client.post(
        f"{BASE}/{agreement.id}/trade-in", json={"new_tool_id": upgrade.id, "credit_percentage": -50}
    )

    assert response.status_code == 422
    assert (await repos.rentals.get_by_id(agreement.id)).agreement_status == "active"


async def test_donation_preview(client: AsyncClient, repos):
    tool = await repos.tools.create(make_tool(condition="new"))
    agreement = await repos.rentals.create(make_agreement("member-1", tool.id))

    response = await client.get(f"{BASE}/{agreement.id}/donation")

    assert response.status_code == 200
    assert response.json()["credit_percentage"] == 50.0
    assert response.json()["tax_deduction_percentage"] == 50.0


async def test_request_repair(client: AsyncClient, repos):
    tool = await repos.tools.create(make_tool(current_status="rented"))
    agreement = await repos.rentals.create(make_agreement("member-1", tool.id))

    created = await client.post(f"{BASE}/{agreement.id}/repairs", json={"issue_description": "Battery won't hold"})
    empty = await client.post(f"{BASE}/{agreement.id}/repairs", json={"issue_description": " "})

    assert created.status_code == 201
    assert created.json()["repair_status"] == "pending"
    assert empty.status_code == 400


async def test_unknown_agreement(client: AsyncClient):
    response = await client.get(f"{BASE}/missing/upgrades")
    assert response.status_code == 404
    assert "missing" in response.json()["detail"]
