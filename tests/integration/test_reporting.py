"""
Integration tests for reporting.

Only verified transactions count toward totals; admins never appear as
participants.
"""

from datetime import date
from decimal import Decimal

import pytest

from deeddraw.models import UserCategory


@pytest.fixture
def populated_ledger(ledger, user_factory, submission):
    """
    Ledger with:
    - admin Ada (no entries)
    - Bob: verified 5 points, pending 1 point
    - Carol: verified 2 points, rejected 3 points
    - Dave: pending 4 points only
    """

    async def create():
        users = {
            "ada": await user_factory("Ada", "Admin", is_admin=True),
            "bob": await user_factory(
                "Bob", "Builder", city="Toronto", province="ON"
            ),
            "carol": await user_factory(
                "Carol", "Bobbins", category=UserCategory.DEVELOPER
            ),
            "dave": await user_factory("Dave", "Bobrow"),
        }
        bob_verified = await ledger.submit_transaction(
            submission(users["bob"].id, points=5)
        )
        await ledger.submit_transaction(submission(users["bob"].id, points=1))
        carol_verified = await ledger.submit_transaction(
            submission(users["carol"].id, points=2)
        )
        carol_rejected = await ledger.submit_transaction(
            submission(users["carol"].id, points=3)
        )
        await ledger.submit_transaction(submission(users["dave"].id, points=4))

        await ledger.approve_transaction(bob_verified.id)
        await ledger.approve_transaction(carol_verified.id)
        await ledger.reject_transaction(carol_rejected.id, "Bounced")
        return users, bob_verified, carol_verified

    return create


class TestDashboard:
    """Tests for admin dashboard."""

    @pytest.mark.asyncio
    async def test_dashboard(self, ledger, populated_ledger):
        await populated_ledger()

        stats = await ledger.dashboard()

        assert stats["total_participants"] == 3
        assert stats["total_points"] == 7
        assert stats["total_revenue"] == Decimal("14000")
        assert stats["pending_transactions"] == 2
        assert stats["verified_transactions"] == 2
        assert stats["rejected_transactions"] == 1
        assert stats["pool_progress"] == Decimal("1.75")
        assert len(stats["recent_activity"]) == 5
        assert {a["type"] for a in stats["recent_activity"]} == {"transaction"}

    @pytest.mark.asyncio
    async def test_empty_dashboard(self, ledger):
        stats = await ledger.dashboard()

        assert stats["total_points"] == 0
        assert stats["total_revenue"] == Decimal("0")
        assert stats["pool_progress"] == Decimal("0")
        assert stats["recent_activity"] == []

    @pytest.mark.asyncio
    async def test_recent_activity_includes_withdrawals(
        self, ledger, user_factory, submission
    ):
        alice = await user_factory("Alice", referral_code="ALICE1001")
        bob = await user_factory("Bob")
        tx = await ledger.submit_transaction(
            submission(bob.id, points=2, referral_code="ALICE1001")
        )
        await ledger.approve_transaction(tx.id)
        withdrawal = await ledger.request_withdrawal(
            {"user_id": alice.id, "amount": "200", "email": "alice@example.com"}
        )

        activity = (await ledger.dashboard())["recent_activity"]

        assert activity[0]["type"] == "withdrawal"
        assert activity[0]["id"] == withdrawal.id
        assert activity[1]["certificate_number"] == tx.certificate_number


class TestPublicStats:
    """Tests for public pool figures."""

    @pytest.mark.asyncio
    async def test_global_stats(self, ledger, populated_ledger):
        await populated_ledger()

        stats = await ledger.global_stats()

        assert stats == {
            "total_points": 7,
            "points_until_draw": 393,
            "progress": Decimal("1.75"),
            "target_points": 400,
            "prize_pool": Decimal("500000"),
            "participants": 2,
        }

    @pytest.mark.asyncio
    async def test_leaderboard(self, ledger, populated_ledger):
        """Participants with points only, highest first."""
        await populated_ledger()

        board = await ledger.leaderboard()

        assert [(row["name"], row["points"]) for row in board] == [
            ("Bob Builder", 5),
            ("Carol Bobbins", 2),
        ]
        assert board[0]["location"] == "Toronto, ON"
        assert board[1]["location"] == "N/A"
        assert board[1]["category"] == "developer"

    @pytest.mark.asyncio
    async def test_search_requires_verified_entry(self, ledger, populated_ledger):
        """Dave matches 'bob' but has no verified entry."""
        await populated_ledger()

        results = await ledger.search_participants("BOB")

        assert [row["name"] for row in results] == ["Bob Builder", "Carol Bobbins"]

    @pytest.mark.asyncio
    async def test_search_full_name(self, ledger, populated_ledger):
        await populated_ledger()

        results = await ledger.search_participants("carol bob")

        assert [row["name"] for row in results] == ["Carol Bobbins"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("query", [None, "", " b ", "x"])
    async def test_search_too_short(self, ledger, populated_ledger, query):
        await populated_ledger()

        assert await ledger.search_participants(query) == []


class TestExport:
    """Tests for the draw export."""

    @pytest.mark.asyncio
    async def test_export(self, ledger, populated_ledger):
        users, bob_verified, carol_verified = await populated_ledger()

        rows = await ledger.export_participants()

        by_name = {row["name"]: row for row in rows}
        assert set(by_name) == {"Bob Builder", "Carol Bobbins", "Dave Bobrow"}
        assert by_name["Bob Builder"]["points"] == 5
        assert by_name["Bob Builder"]["certificate_numbers"] == [
            bob_verified.certificate_number
        ]
        assert by_name["Carol Bobbins"]["points"] == 2
        assert by_name["Carol Bobbins"]["certificate_numbers"] == [
            carol_verified.certificate_number
        ]
        assert by_name["Dave Bobrow"]["points"] == 0
        assert by_name["Dave Bobrow"]["certificate_numbers"] == []
        assert by_name["Bob Builder"]["city"] == "Toronto"
        assert by_name["Dave Bobrow"]["phone"] == ""
        assert isinstance(by_name["Bob Builder"]["registered_date"], date)


class TestListUsers:
    """Tests for admin user listing."""

    @pytest.mark.asyncio
    async def test_list_users_with_totals(self, ledger, populated_ledger):
        users, _, _ = await populated_ledger()

        result = await ledger.list_users(page=1, per_page=2)

        assert result["pagination"] == {
            "total": 4,
            "page": 1,
            "per_page": 2,
            "pages": 2,
        }
        assert len(result["users"]) == 2

        everyone = (await ledger.list_users(per_page=10))["users"]
        carol = next(u for u in everyone if u["id"] == users["carol"].id)
        assert carol["total_points"] == 2
        assert carol["total_paid"] == Decimal("4000")
        assert carol["transaction_count"] == 2

        dave = next(u for u in everyone if u["id"] == users["dave"].id)
        assert dave["total_points"] == 0
        assert dave["total_paid"] == Decimal("0")
        assert dave["transaction_count"] == 1

    @pytest.mark.asyncio
    async def test_list_users_filters(self, ledger, populated_ledger):
        users, _, _ = await populated_ledger()

        developers = await ledger.list_users(category="developer")
        searched = await ledger.list_users(search="DAVE")

        assert [u["id"] for u in developers["users"]] == [users["carol"].id]
        assert [u["id"] for u in searched["users"]] == [users["dave"].id]
