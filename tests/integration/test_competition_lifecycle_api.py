"""Integration tests for the competition lifecycle HTTP endpoints."""

from __future__ import annotations

from datetime import timedelta
from uuid import uuid4

import pytest

from eliterank.lifecycle.status import CompetitionStatus
from tests.factories import make_competition
from tests.factories.competition_factory import FINALS_DATE, VOTING_START, at

pytestmark = pytest.mark.integration


# ===========================================
# HEALTH
# ===========================================


class TestHealth:
    @pytest.mark.asyncio
    async def test_health(self, client):
        resp = await client.get("/health")
        assert resp.status_code == 200
        assert resp.json() == {"status": "ok", "service": "eliterank-lifecycle"}


# ===========================================
# READ
# ===========================================


class TestLifecycleRead:
    @pytest.mark.asyncio
    async def test_lifecycle_snapshot(self, client, store, clock):
        record = make_competition(CompetitionStatus.NOMINATION)
        store.add(record)
        clock.set(at(VOTING_START, hours=3))

        resp = await client.get(f"/api/competitions/{record.id}/lifecycle")

        assert resp.status_code == 200
        data = resp.json()
        assert data["competition"]["status"] == "nomination"
        assert data["phase"] == "voting"
        assert data["publicly_viewable"] is True
        assert data["drift"]["needs_update"] is True
        assert data["drift"]["target_status"] == "voting"
        assert data["readiness"]["ready"] is True
        assert data["next_transition"]["next_status"] == "voting"
        assert data["restriction"]

    @pytest.mark.asyncio
    async def test_draft_readiness_errors(self, client, store):
        record = make_competition(CompetitionStatus.DRAFT, ready=False)
        store.add(record)

        resp = await client.get(f"/api/competitions/{record.id}/lifecycle")

        data = resp.json()
        assert data["readiness"]["ready"] is False
        assert "City must be assigned" in data["readiness"]["errors"]
        assert data["next_transition"] is None
        assert data["publicly_viewable"] is False

    @pytest.mark.asyncio
    async def test_unknown_competition(self, client):
        resp = await client.get(f"/api/competitions/{uuid4()}/lifecycle")
        assert resp.status_code == 404

    @pytest.mark.asyncio
    async def test_invalid_id(self, client):
        resp = await client.get("/api/competitions/not-a-uuid/lifecycle")
        assert resp.status_code == 422


# ===========================================
# PROPOSE / CONFIRM / EXECUTE
# ===========================================


class TestTransitions:
    @pytest.mark.asyncio
    async def test_propose(self, client, store):
        record = make_competition(CompetitionStatus.VOTING)
        store.add(record)

        resp = await client.post(
            f"/api/competitions/{record.id}/transitions/propose",
            json={"status": "draft"},
        )

        assert resp.status_code == 200
        data = resp.json()
        assert data["valid"] is True
        assert data["requires_confirmation"] is True
        assert len(data["warnings"]) == 1
        assert data["expected_updated_at"] is not None

    @pytest.mark.asyncio
    async def test_propose_unknown_status(self, client, store):
        record = make_competition()
        store.add(record)

        resp = await client.post(
            f"/api/competitions/{record.id}/transitions/propose",
            json={"status": "paused"},
        )
        assert resp.status_code == 422

    @pytest.mark.asyncio
    async def test_confirm_invalid_transition(self, client, store):
        record = make_competition(CompetitionStatus.ARCHIVED)
        store.add(record)

        resp = await client.post(
            f"/api/competitions/{record.id}/transitions/confirm",
            json={"status": "voting", "expected_updated_at": record.updated_at.isoformat()},
        )

        assert resp.status_code == 422
        assert resp.json()["detail"]["errors"] == [
            "Archived competitions can only be moved back to Draft"
        ]

    @pytest.mark.asyncio
    async def test_confirm_stale_token(self, client, store):
        record = make_competition(CompetitionStatus.COMPLETED)
        store.add(record)
        stale = record.updated_at - timedelta(hours=1)

        resp = await client.post(
            f"/api/competitions/{record.id}/transitions/confirm",
            json={"status": "archive", "expected_updated_at": stale.isoformat()},
        )
        assert resp.status_code == 409

    @pytest.mark.asyncio
    async def test_execute_requires_confirmation(self, client, store):
        record = make_competition(CompetitionStatus.COMPLETED)
        store.add(record)

        resp = await client.post(
            f"/api/competitions/{record.id}/transitions/execute",
            json={"status": "archive", "expected_updated_at": record.updated_at.isoformat()},
        )

        assert resp.status_code == 428
        assert resp.json()["detail"]["new_status"] == "archive"
        assert (await store.get(record.id)).status is CompetitionStatus.COMPLETED

    @pytest.mark.asyncio
    async def test_confirm_then_execute(self, client, store):
        record = make_competition(CompetitionStatus.COMPLETED)
        store.add(record)
        token = record.updated_at.isoformat()

        confirm = await client.post(
            f"/api/competitions/{record.id}/transitions/confirm",
            json={"status": "archive", "expected_updated_at": token},
        )
        assert confirm.status_code == 200

        resp = await client.post(
            f"/api/competitions/{record.id}/transitions/execute",
            json={
                "status": "archive",
                "expected_updated_at": confirm.json()["expected_updated_at"],
                "confirmed": True,
            },
        )

        assert resp.status_code == 200
        assert resp.json()["status"] == "archive"
        assert (await store.get(record.id)).status is CompetitionStatus.ARCHIVED

    @pytest.mark.asyncio
    async def test_execute_publish_gate(self, client, store):
        record = make_competition(CompetitionStatus.DRAFT, host_id=None)
        store.add(record)

        resp = await client.post(
            f"/api/competitions/{record.id}/transitions/execute",
            json={"status": "publish", "expected_updated_at": record.updated_at.isoformat()},
        )

        assert resp.status_code == 422
        assert "Host must be assigned" in resp.json()["detail"]["errors"]

    @pytest.mark.asyncio
    async def test_execute_stale_token(self, client, store):
        record = make_competition(CompetitionStatus.DRAFT)
        store.add(record)
        stale = record.updated_at - timedelta(seconds=5)

        resp = await client.post(
            f"/api/competitions/{record.id}/transitions/execute",
            json={"status": "publish", "expected_updated_at": stale.isoformat()},
        )

        assert resp.status_code == 409
        assert (await store.get(record.id)).status is CompetitionStatus.DRAFT

    @pytest.mark.asyncio
    async def test_execute_missing_competition(self, client):
        resp = await client.post(
            f"/api/competitions/{uuid4()}/transitions/execute",
            json={"status": "publish"},
        )
        assert resp.status_code == 404


# ===========================================
# RECONCILE
# ===========================================


class TestReconcileEndpoint:
    @pytest.mark.asyncio
    async def test_reconcile(self, client, store, clock):
        due = make_competition(CompetitionStatus.JUDGING)
        draft = make_competition(CompetitionStatus.DRAFT)
        store.add(due)
        store.add(draft)
        clock.set(at(FINALS_DATE, days=2))

        resp = await client.post("/api/competitions/reconcile")

        assert resp.status_code == 200
        data = resp.json()
        assert data["checked"] == 1
        assert data["transitioned"] == [
            {"id": str(due.id), "from": "judging", "to": "completed"}
        ]
        assert (await store.get(draft.id)).status is CompetitionStatus.DRAFT
