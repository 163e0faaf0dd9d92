"""
Reporting service.

Read-only aggregates for the admin dashboard, the public site and the draw
export. Everything is recomputed from verified transactions on demand;
pending and rejected entries never count toward totals.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from deeddraw.config.business_constants import (
    LEADERBOARD_LIMIT,
    PARTICIPANT_SEARCH_LIMIT,
    PARTICIPANT_SEARCH_MIN_LENGTH,
    PRIZE_POOL,
    RECENT_ACTIVITY_LIMIT,
    TARGET_POINTS,
    calculate_pool_progress,
    points_until_draw,
    to_money,
)
from deeddraw.models.enums import TransactionStatus
from deeddraw.models.user import User
from deeddraw.repositories.transaction_repository import TransactionRepository
from deeddraw.repositories.user_repository import UserRepository
from deeddraw.repositories.withdrawal_repository import WithdrawalRepository
from deeddraw.services.base_service import BaseService
from deeddraw.utils.datetime_utils import ensure_utc
from deeddraw.utils.exceptions import ValidationError


def _location(user: User) -> str:
    if user.city and user.province:
        return f"{user.city}, {user.province}"
    return "N/A"


class ReportingService(BaseService):
    """Read-only ledger aggregates."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize reporting service."""
        super().__init__(session)
        self.user_repo = UserRepository(session)
        self.transaction_repo = TransactionRepository(session)
        self.withdrawal_repo = WithdrawalRepository(session)

    async def dashboard(self) -> dict:
        """
        Admin dashboard statistics.

        Returns:
            Dict with total_participants, total_points, total_revenue,
            pending/verified/rejected_transactions, pool_progress and
            recent_activity (latest transactions and withdrawals merged)
        """
        total_points = await self.transaction_repo.sum_verified_points()

        return {
            "total_participants": await self.user_repo.count_participants(),
            "total_points": total_points,
            "total_revenue": await self.transaction_repo.sum_verified_amount(),
            "pending_transactions": await self.transaction_repo.count_by_status(
                TransactionStatus.PENDING.value
            ),
            "verified_transactions": await self.transaction_repo.count_by_status(
                TransactionStatus.VERIFIED.value
            ),
            "rejected_transactions": await self.transaction_repo.count_by_status(
                TransactionStatus.REJECTED.value
            ),
            "pool_progress": calculate_pool_progress(total_points),
            "recent_activity": await self.recent_activity(),
        }

    async def recent_activity(self, limit: int = RECENT_ACTIVITY_LIMIT) -> list[dict]:
        """
        Latest transactions and withdrawals, newest first.

        Args:
            limit: Max number of entries

        Returns:
            Activity dicts with type, id, participant, amount, status, date
        """
        transactions = await self.transaction_repo.get_recent(limit)
        withdrawals = await self.withdrawal_repo.find_filtered(limit=limit)

        owner_ids = {t.user_id for t in transactions} | {w.user_id for w in withdrawals}
        owners = {}
        for user_id in owner_ids:
            owners[user_id] = await self.user_repo.get_by_id(user_id)

        activity = [
            {
                "type": "transaction",
                "id": t.id,
                "certificate_number": t.certificate_number,
                "participant_name": owners[t.user_id].full_name,
                "participant_email": owners[t.user_id].email,
                "points": t.points,
                "amount": t.amount,
                "status": t.status,
                "date": ensure_utc(t.created_at),
            }
            for t in transactions
        ] + [
            {
                "type": "withdrawal",
                "id": w.id,
                "participant_name": owners[w.user_id].full_name,
                "participant_email": owners[w.user_id].email,
                "amount": w.amount,
                "status": w.status,
                "date": ensure_utc(w.created_at),
            }
            for w in withdrawals
        ]

        activity.sort(key=lambda entry: entry["date"], reverse=True)
        return activity[:limit]

    async def global_stats(self) -> dict:
        """
        Public pool statistics.

        Returns:
            Dict with total_points, points_until_draw, progress,
            target_points, prize_pool, participants
        """
        total_points = await self.transaction_repo.sum_verified_points()
        return {
            "total_points": total_points,
            "points_until_draw": points_until_draw(total_points),
            "progress": calculate_pool_progress(total_points),
            "target_points": TARGET_POINTS,
            "prize_pool": PRIZE_POOL,
            "participants": await self.transaction_repo.count_distinct_verified_owners(),
        }

    async def leaderboard(self, limit: int = LEADERBOARD_LIMIT) -> list[dict]:
        """Top participants by points, earliest registration first on ties."""
        users = await self.user_repo.get_leaderboard(limit)
        return [
            {
                "name": user.full_name,
                "category": user.category,
                "location": _location(user),
                "points": user.total_points,
                "registration_date": ensure_utc(user.created_at),
            }
            for user in users
        ]

    async def search_participants(self, query: str | None) -> list[dict]:
        """
        Public participant search by name.

        Queries shorter than two characters return nothing. Only users with
        at least one verified transaction are listed.
        """
        query = (query or "").strip()
        if len(query) < PARTICIPANT_SEARCH_MIN_LENGTH:
            return []

        users = await self.user_repo.search_verified_participants(
            query, PARTICIPANT_SEARCH_LIMIT
        )
        return [
            {
                "name": user.full_name,
                "category": user.category,
                "location": _location(user),
                "points": user.total_points,
            }
            for user in users
        ]

    async def export_participants(self) -> list[dict]:
        """
        Participant list for the draw.

        Returns:
            One dict per non-admin user (newest first) with ledger-recomputed
            points and the certificate numbers of verified entries
        """
        users = await self.user_repo.get_participants()
        user_ids = [user.id for user in users]
        totals = await self.transaction_repo.get_user_totals(user_ids)
        certificates = await self.transaction_repo.get_verified_certificates_by_user(
            user_ids
        )

        participants = []
        for user in users:
            points = totals.get(user.id, (0, None, 0))[0]
            participants.append({
                "name": user.full_name,
                "email": user.email,
                "phone": user.phone or "",
                "points": points,
                "province": user.province or "",
                "city": user.city or "",
                "referral_code": user.referral_code,
                "certificate_numbers": certificates.get(user.id, []),
                "registered_date": ensure_utc(user.created_at).date(),
            })

        self.logger.info(
            "Participants exported", extra={"count": len(participants)}
        )
        return participants

    async def list_users(
        self,
        page: int = 1,
        per_page: int = 20,
        search: str | None = None,
        category: str | None = None,
    ) -> dict:
        """
        Admin user listing with ledger totals.

        Args:
            page: Page number (1-indexed)
            per_page: Items per page
            search: Optional name/email fragment
            category: Optional category filter

        Returns:
            Dict with users and pagination (total, page, per_page, pages)
        """
        if page < 1 or per_page < 1:
            raise ValidationError("Page and per_page must be positive")

        users, total = await self.user_repo.find_paginated(
            page=page, per_page=per_page, search=search, category=category
        )
        totals = await self.transaction_repo.get_user_totals([u.id for u in users])

        rows = []
        for user in users:
            points, paid, count = totals.get(user.id, (0, to_money(None), 0))
            rows.append({
                "id": user.id,
                "first_name": user.first_name,
                "last_name": user.last_name,
                "email": user.email,
                "phone": user.phone,
                "category": user.category,
                "city": user.city,
                "province": user.province,
                "is_active": user.is_active,
                "total_points": points,
                "total_paid": paid,
                "transaction_count": count,
                "created_at": ensure_utc(user.created_at),
            })

        return {
            "users": rows,
            "pagination": {
                "total": total,
                "page": page,
                "per_page": per_page,
                "pages": -(-total // per_page),
            },
        }
