"""
Tool Rental Endpoints.

Rent-to-own agreements for members: dashboard, upgrades via trade-in,
donation previews, repairs and new rentals.
"""

from typing import List

from fastapi import APIRouter, Query, status

from cdi_platform.core.database.entities.tools import ToolInventory, ToolRentalAgreement, ToolRepair
from cdi_platform.services.tool_rentals import (
    DashboardSummary,
    DonationPreview,
    RentalView,
    TradeInResult,
    UpgradeOption,
)
from cdi_platform.server.deps import ToolRentalDep
from cdi_platform.server.schemas import RentalCreate, RepairCreate, TradeInRequest

router = APIRouter()


@router.get(
    "/members/{member_id}",
    response_model=List[RentalView],
    summary="List Member Rentals",
    description="List a member's rental agreements with tool details and ownership progress, newest first.",
    response_description="Rentals with progress figures.",
)
async def list_rentals(member_id: str, service: ToolRentalDep) -> List[RentalView]:
    return await service.list_rentals(member_id)


@router.get(
    "/members/{member_id}/summary",
    response_model=DashboardSummary,
    summary="Get Rental Summary",
    description="Weekly payments across active rentals, total invested, and value of tools already owned.",
    response_description="Dashboard totals.",
)
async def get_summary(member_id: str, service: ToolRentalDep) -> DashboardSummary:
    return await service.summary(member_id)


@router.get(
    "/tools",
    response_model=List[ToolInventory],
    summary="Search Available Tools",
    description="Search available tools by model, brand or category (case-insensitive).",
    response_description="Matching available tools.",
)
async def search_tools(service: ToolRentalDep, q: str = Query(default="", description="Search term")) -> List[ToolInventory]:
    return await service.search_available_tools(q)


@router.post(
    "",
    response_model=ToolRentalAgreement,
    status_code=status.HTTP_201_CREATED,
    summary="Start Rental",
    description="Create a pending rent-to-own agreement for an available tool and reserve it.",
    response_description="The new agreement.",
    responses={
        201: {"description": "Agreement created"},
        400: {"description": "Tool is not available"},
        404: {"description": "Tool not found"},
    },
)
async def initiate_rental(body: RentalCreate, service: ToolRentalDep) -> ToolRentalAgreement:
    return await service.initiate_rental(body.member_id, body.tool_id)


@router.get(
    "/{agreement_id}/upgrades",
    response_model=List[UpgradeOption],
    summary="List Upgrade Options",
    description="Pricier available tools in the same category, priced after the agreement's trade-in credit.",
    response_description="Up to five options, cheapest first.",
    responses={404: {"description": "Agreement or tool not found"}},
)
async def list_upgrades(agreement_id: str, service: ToolRentalDep) -> List[UpgradeOption]:
    return await service.load_upgrade_options(agreement_id)


@router.post(
    "/{agreement_id}/trade-in",
    response_model=TradeInResult,
    summary="Trade In Tool",
    description="Close the agreement as traded in and open a pending agreement for the new tool with the credit applied.",
    response_description="Both agreements and the credit applied.",
    responses={
        400: {"description": "Agreement not eligible, credit too high, or tool unavailable"},
        404: {"description": "Agreement or tool not found"},
    },
)
async def trade_in(agreement_id: str, body: TradeInRequest, service: ToolRentalDep) -> TradeInResult:
    return await service.process_trade_in(agreement_id, body.new_tool_id, body.credit_percentage)


@router.get(
    "/{agreement_id}/donation",
    response_model=DonationPreview,
    summary="Preview Donation Value",
    description="Credit and tax deduction the member would receive for donating the tool back.",
    response_description="Donation preview.",
    responses={404: {"description": "Agreement or tool not found"}},
)
async def preview_donation(agreement_id: str, service: ToolRentalDep) -> DonationPreview:
    return await service.preview_donation_value(agreement_id)


@router.post(
    "/{agreement_id}/repairs",
    response_model=ToolRepair,
    status_code=status.HTTP_201_CREATED,
    summary="Request Repair",
    description="Open a repair ticket for the rented tool and mark the tool as in repair.",
    response_description="The new repair ticket.",
    responses={
        400: {"description": "Issue description missing"},
        404: {"description": "Agreement or tool not found"},
    },
)
async def request_repair(agreement_id: str, body: RepairCreate, service: ToolRentalDep) -> ToolRepair:
    return await service.request_repair(agreement_id, body.issue_description)
