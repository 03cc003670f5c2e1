"""Domain queries of the concrete repositories, against in-memory SQLite."""

from __future__ import annotations

from datetime import datetime, timedelta

from cdi_platform.core.database.entities import (
    AssignmentStatus,
    InvitationStatus,
    SyncStatus,
    ToolStatus,
)
from test.factories import (
    make_agreement,
    make_assignment,
    make_batch,
    make_business,
    make_category,
    make_estimate,
    make_event,
    make_listing,
    make_member,
    make_phone_integration,
    make_profile,
    make_tool,
    make_transaction,
)


class TestProfileRepository:
    async def test_get_by_workspace_email(self, repos):
        profile = await repos.profiles.create(make_profile(workspace_email="jane.doe@example.org"))

        assert (await repos.profiles.get_by_workspace_email("jane.doe@example.org")).id == profile.id
        assert await repos.profiles.get_by_workspace_email("nobody@example.org") is None


class TestMarketplaceRepositories:
    async def test_list_for_seller_filters_and_orders(self, repos):
        now = datetime(2026, 3, 1)
        old = await repos.listings.create(make_listing("seller", title="Old", created_at=now - timedelta(days=60)))
        new = await repos.listings.create(make_listing("seller", title="New", created_at=now - timedelta(days=1)))
        await repos.listings.create(make_listing("other", title="Other"))

        all_time = await repos.listings.list_for_seller("seller")
        recent = await repos.listings.list_for_seller("seller", since=now - timedelta(days=30))

        assert [listing.id for listing in all_time] == [new.id, old.id]
        assert [listing.id for listing in recent] == [new.id]

    async def test_totals_by_listing_oldest_first(self, repos):
        listing = await repos.listings.create(make_listing("seller"))
        t0 = datetime(2026, 1, 1)
        await repos.transactions.create(make_transaction("buyer", listing_id=listing.id, total_amount=80.0, created_at=t0 + timedelta(hours=1)))
        await repos.transactions.create(make_transaction("buyer", listing_id=listing.id, total_amount=50.0, created_at=t0))

        totals = await repos.transactions.totals_by_listing([listing.id, "missing"])

        assert totals == {listing.id: [50.0, 80.0]}
        assert await repos.transactions.totals_by_listing([]) == {}

    async def test_list_voluntary_since(self, repos):
        start = datetime(2026, 3, 1)
        await repos.transactions.create(make_transaction("a", is_voluntary=True, voluntary_amount=5.0, created_at=start + timedelta(days=1)))
        await repos.transactions.create(make_transaction("b", is_voluntary=True, voluntary_amount=5.0, created_at=start - timedelta(days=1)))
        await repos.transactions.create(make_transaction("c", is_voluntary=False, created_at=start + timedelta(days=1)))

        assert {t.user_id for t in await repos.transactions.list_voluntary()} == {"a", "b"}
        assert [t.user_id for t in await repos.transactions.list_voluntary(start)] == ["a"]

    async def test_categories_get_many(self, repos):
        category = await repos.categories.create(make_category())
        assert (await repos.categories.get_many([category.id]))[category.id].name == "Power Tools"


class TestToolRepositories:
    async def test_upgrade_candidates(self, repos):
        cheap = await repos.tools.create(make_tool(retail_price=230.0))
        pricey = await repos.tools.create(make_tool(retail_price=400.0))
        await repos.tools.create(make_tool(retail_price=150.0))
        await repos.tools.create(make_tool(retail_price=300.0, current_status=ToolStatus.RENTED.value))
        await repos.tools.create(make_tool(retail_price=300.0, category="saw"))

        candidates = await repos.tools.list_upgrade_candidates("drill", 200.0)

        assert [tool.id for tool in candidates] == [cheap.id, pricey.id]

    async def test_search_available_is_case_insensitive(self, repos):
        drill = await repos.tools.create(make_tool(brand="Makita", model="XFD131", category="drill"))
        saw = await repos.tools.create(make_tool(brand="DeWalt", model="DCS570", category="circular saw"))
        await repos.tools.create(make_tool(brand="Makita", current_status=ToolStatus.IN_REPAIR.value))

        assert [t.id for t in await repos.tools.search_available("makita")] == [drill.id]
        assert [t.id for t in await repos.tools.search_available("SAW")] == [saw.id]
        assert len(await repos.tools.search_available()) == 2

    async def test_rentals_for_member_newest_first(self, repos):
        tool = await repos.tools.create(make_tool())
        first = await repos.rentals.create(make_agreement("m", tool.id, start_date=datetime(2025, 1, 1).date()))
        second = await repos.rentals.create(make_agreement("m", tool.id, start_date=datetime(2025, 6, 1).date()))
        await repos.rentals.create(make_agreement("other", tool.id))

        assert [a.id for a in await repos.rentals.list_for_member("m")] == [second.id, first.id]


class TestTeamRepositories:
    async def test_team_member_by_user_id(self, repos):
        business = await repos.businesses.create(make_business())
        member = await repos.team_members.create(make_member(business.id, user_id="user-1"))

        assert (await repos.team_members.get_by_user_id("user-1")).id == member.id
        assert await repos.team_members.get_by_user_id("user-2") is None

    async def test_set_status_for_batch(self, repos):
        business = await repos.businesses.create(make_business())
        member = await repos.team_members.create(make_member(business.id))
        estimate = await repos.estimates.create(make_estimate(business.id))
        in_batch = await repos.task_assignments.create(make_assignment(estimate.id, member.id, batch_invitation_id="batch"))
        outside = await repos.task_assignments.create(make_assignment(estimate.id, member.id))
        responded = datetime(2026, 3, 1, 12, 0)

        await repos.task_assignments.set_status_for_batch("batch", AssignmentStatus.ACCEPTED.value, responded)
        await repos.session.commit()

        await repos.session.refresh(in_batch)
        await repos.session.refresh(outside)
        assert in_batch.status == AssignmentStatus.ACCEPTED.value
        assert in_batch.responded_at == responded
        assert outside.status == AssignmentStatus.INVITED.value
        assert [a.id for a in await repos.task_assignments.list_for_batch("batch")] == [in_batch.id]


class TestInvitationRepository:
    async def test_open_batch_is_newest_pending(self, repos):
        now = datetime(2026, 3, 1)
        await repos.invitations.create(make_batch("biz", "m", invitation_token="1" * 64, created_at=now - timedelta(days=2)))
        newest = await repos.invitations.create(make_batch("biz", "m", invitation_token="2" * 64, created_at=now))
        await repos.invitations.create(
            make_batch("biz", "m", invitation_token="3" * 64, status=InvitationStatus.SENT.value, created_at=now + timedelta(days=1))
        )

        assert (await repos.invitations.get_open_for_member("biz", "m")).id == newest.id
        assert await repos.invitations.get_open_for_member("biz", "other") is None
        assert (await repos.invitations.get_by_token("2" * 64)).id == newest.id
        assert len(await repos.invitations.list_for_business("biz")) == 3


class TestCalendarEventRepository:
    async def test_pending_and_counts(self, repos):
        await repos.calendar_events.create(make_event("biz", "m"))
        await repos.calendar_events.create(make_event("biz", "m", sync_status=SyncStatus.SYNCED.value))
        await repos.calendar_events.create(make_event("biz", "m", sync_status=SyncStatus.FAILED.value, sync_error="401"))
        await repos.calendar_events.create(make_event("other", "x"))

        assert len(await repos.calendar_events.list_pending()) == 2
        assert len(await repos.calendar_events.list_pending("biz")) == 1
        assert await repos.calendar_events.count_by_status("biz") == {"pending": 1, "synced": 1, "failed": 1}
        assert len(await repos.calendar_events.list_for_team_member("m")) == 2

    async def test_reset_failed(self, repos):
        failed = await repos.calendar_events.create(make_event("biz", "m", sync_status=SyncStatus.FAILED.value, sync_error="401"))
        other = await repos.calendar_events.create(make_event("other", "x", sync_status=SyncStatus.FAILED.value))

        await repos.calendar_events.reset_failed("biz")

        await repos.session.refresh(failed)
        await repos.session.refresh(other)
        assert failed.sync_status == SyncStatus.PENDING.value
        assert failed.sync_error is None
        assert other.sync_status == SyncStatus.FAILED.value


class TestSmsRepositories:
    async def test_phone_integration_by_business(self, repos):
        integration = await repos.phone_integrations.create(make_phone_integration("biz"))
        assert (await repos.phone_integrations.get_by_business("biz")).id == integration.id
        assert await repos.phone_integrations.get_by_business("other") is None
