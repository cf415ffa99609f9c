"""
Tests for the admin business control endpoints
"""
from datetime import datetime, timedelta
from uuid import uuid4

import pytest

from domain.enums import UserType
from conftest import auth_headers, create_user


RULES_URL = "/api/v1/admin/pricing-rules"
CAMPAIGNS_URL = "/api/v1/admin/campaigns"
WHITELIST_URL = "/api/v1/admin/whitelist"


def rule_payload(**overrides) -> dict:
    payload = {
        "name": "Zbritje teknologji",
        "category": "industry",
        "conditions": [{"field": "category", "operator": "equals", "value": "Teknologji"}],
        "effect": {"kind": "discount", "mode": "fixed", "value": 10},
        "priority": 60,
    }
    payload.update(overrides)
    return payload


def campaign_payload(**overrides) -> dict:
    now = datetime.utcnow()
    payload = {
        "name": "Oferta e pranverës",
        "campaign_type": "flash_sale",
        "discount": 20,
        "start_date": (now - timedelta(hours=1)).isoformat(),
        "end_date": (now + timedelta(days=7)).isoformat(),
    }
    payload.update(overrides)
    return payload


QUOTE_REQUEST = {"category": "Teknologji", "location": {"city": "Tiranë"}}


class TestAdminAccess:
    """Only admins reach the business control routes"""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("url", [RULES_URL, CAMPAIGNS_URL, WHITELIST_URL])
    async def test_employer_forbidden(self, client, employer, url):
        response = await client.get(url, headers=auth_headers(employer))
        assert response.status_code == 403
        assert response.json()["success"] is False

    @pytest.mark.asyncio
    async def test_anonymous_unauthorized(self, client):
        response = await client.get(RULES_URL)
        assert response.status_code == 401


class TestPricingRules:
    """Pricing rule management"""

    @pytest.mark.asyncio
    async def test_create_and_list(self, client, admin):
        created = await client.post(RULES_URL, json=rule_payload(), headers=auth_headers(admin))

        assert created.status_code == 201
        rule = created.json()["data"]["rule"]
        assert rule["is_active"] is True
        assert rule["times_applied"] == 0
        assert rule["effect"] == {"kind": "discount", "mode": "fixed", "value": 10}

        listed = await client.get(RULES_URL, headers=auth_headers(admin))
        data = listed.json()["data"]
        assert [r["id"] for r in data["rules"]] == [rule["id"]]
        assert data["pagination"]["total_rules"] == 1

    @pytest.mark.asyncio
    async def test_unknown_condition_field_rejected(self, client, admin):
        payload = rule_payload(conditions=[{"field": "shoe_size", "operator": "equals", "value": 42}])

        response = await client.post(RULES_URL, json=payload, headers=auth_headers(admin))

        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == "conditions.0.field"

    @pytest.mark.asyncio
    async def test_list_operator_requires_list(self, client, admin):
        payload = rule_payload(conditions=[{"field": "seniority", "operator": "in_array", "value": "senior"}])
        response = await client.post(RULES_URL, json=payload, headers=auth_headers(admin))
        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_priority_out_of_range(self, client, admin):
        response = await client.post(RULES_URL, json=rule_payload(priority=101), headers=auth_headers(admin))
        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == "priority"

    @pytest.mark.asyncio
    async def test_toggle_switches_rule_off_and_on(self, client, admin):
        rule_id = (await client.post(RULES_URL, json=rule_payload(), headers=auth_headers(admin))).json()["data"]["rule"]["id"]

        off = await client.patch(f"{RULES_URL}/{rule_id}/toggle", headers=auth_headers(admin))
        on = await client.patch(f"{RULES_URL}/{rule_id}/toggle", headers=auth_headers(admin))

        assert off.json()["data"]["rule"]["is_active"] is False
        assert on.json()["data"]["rule"]["is_active"] is True

        inactive = await client.get(RULES_URL, params={"isActive": "false"}, headers=auth_headers(admin))
        assert inactive.json()["data"]["rules"] == []

    @pytest.mark.asyncio
    async def test_toggle_unknown_rule(self, client, admin):
        response = await client.patch(f"{RULES_URL}/{uuid4()}/toggle", headers=auth_headers(admin))
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_active_rule_changes_quote(self, client, admin, employer):
        await client.post(RULES_URL, json=rule_payload(), headers=auth_headers(admin))

        response = await client.post("/api/v1/jobs/pricing/quote", json=QUOTE_REQUEST, headers=auth_headers(employer))

        pricing = response.json()["data"]["pricing"]
        assert pricing["discount"] == 10
        assert pricing["final_price"] == pricing["base_price"] - 10
        assert len(pricing["applied_rules"]) == 1

    @pytest.mark.asyncio
    async def test_rule_usage_recorded_on_job_creation(self, client, admin, employer, job_payload):
        await client.post(RULES_URL, json=rule_payload(), headers=auth_headers(admin))

        await client.post("/api/v1/jobs", json=job_payload, headers=auth_headers(employer))

        rules = (await client.get(RULES_URL, headers=auth_headers(admin))).json()["data"]["rules"]
        assert rules[0]["times_applied"] == 1
        assert rules[0]["last_applied_at"] is not None


class TestCampaigns:
    """Campaign lifecycle"""

    @pytest.mark.asyncio
    async def test_created_as_draft_by_default(self, client, admin):
        response = await client.post(CAMPAIGNS_URL, json=campaign_payload(), headers=auth_headers(admin))

        assert response.status_code == 201
        campaign = response.json()["data"]["campaign"]
        assert campaign["status"] == "draft"
        assert campaign["is_active"] is False

    @pytest.mark.asyncio
    async def test_create_activated(self, client, admin):
        response = await client.post(
            CAMPAIGNS_URL, json=campaign_payload(activate=True), headers=auth_headers(admin)
        )
        campaign = response.json()["data"]["campaign"]
        assert campaign["status"] == "active"
        assert campaign["is_active"] is True

    @pytest.mark.asyncio
    async def test_percentage_over_limit_rejected(self, client, admin):
        response = await client.post(CAMPAIGNS_URL, json=campaign_payload(discount=95), headers=auth_headers(admin))
        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_end_before_start_rejected(self, client, admin):
        now = datetime.utcnow()
        payload = campaign_payload(start_date=now.isoformat(), end_date=(now - timedelta(days=1)).isoformat())
        response = await client.post(CAMPAIGNS_URL, json=payload, headers=auth_headers(admin))
        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_activate_then_pause(self, client, admin):
        campaign_id = (
            await client.post(CAMPAIGNS_URL, json=campaign_payload(), headers=auth_headers(admin))
        ).json()["data"]["campaign"]["id"]

        activated = await client.patch(f"{CAMPAIGNS_URL}/{campaign_id}/activate", headers=auth_headers(admin))
        paused = await client.patch(f"{CAMPAIGNS_URL}/{campaign_id}/pause", headers=auth_headers(admin))

        assert activated.json()["data"]["campaign"]["status"] == "active"
        assert paused.json()["data"]["campaign"]["status"] == "paused"
        assert paused.json()["data"]["campaign"]["is_active"] is False

    @pytest.mark.asyncio
    async def test_pause_requires_active(self, client, admin):
        campaign_id = (
            await client.post(CAMPAIGNS_URL, json=campaign_payload(), headers=auth_headers(admin))
        ).json()["data"]["campaign"]["id"]

        response = await client.patch(f"{CAMPAIGNS_URL}/{campaign_id}/pause", headers=auth_headers(admin))

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_ended_campaign_cannot_activate(self, client, admin):
        now = datetime.utcnow()
        payload = campaign_payload(
            start_date=(now - timedelta(days=10)).isoformat(),
            end_date=(now - timedelta(days=1)).isoformat(),
        )
        campaign_id = (
            await client.post(CAMPAIGNS_URL, json=payload, headers=auth_headers(admin))
        ).json()["data"]["campaign"]["id"]

        response = await client.patch(f"{CAMPAIGNS_URL}/{campaign_id}/activate", headers=auth_headers(admin))

        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == "end_date"

    @pytest.mark.asyncio
    async def test_list_by_status(self, client, admin):
        await client.post(CAMPAIGNS_URL, json=campaign_payload(), headers=auth_headers(admin))
        await client.post(CAMPAIGNS_URL, json=campaign_payload(activate=True), headers=auth_headers(admin))

        response = await client.get(CAMPAIGNS_URL, params={"status": "active"}, headers=auth_headers(admin))

        data = response.json()["data"]
        assert [c["status"] for c in data["campaigns"]] == ["active"]
        assert data["pagination"]["total_campaigns"] == 1

    @pytest.mark.asyncio
    async def test_running_campaign_used_by_job_creation(self, client, admin, employer, job_payload):
        campaign_id = (
            await client.post(CAMPAIGNS_URL, json=campaign_payload(activate=True), headers=auth_headers(admin))
        ).json()["data"]["campaign"]["id"]

        created = await client.post("/api/v1/jobs", json=job_payload, headers=auth_headers(employer))

        pricing = created.json()["data"]["job"]["pricing"]
        assert pricing["campaign_applied"] == campaign_id
        assert pricing["final_price"] == round(pricing["base_price"] * 0.8, 2)

        campaigns = (await client.get(CAMPAIGNS_URL, headers=auth_headers(admin))).json()["data"]["campaigns"]
        assert campaigns[0]["current_uses"] == 1

    @pytest.mark.asyncio
    async def test_campaign_stops_at_max_uses(self, client, admin, employer, job_payload):
        campaign_id = (
            await client.post(
                CAMPAIGNS_URL, json=campaign_payload(activate=True, max_uses=1), headers=auth_headers(admin)
            )
        ).json()["data"]["campaign"]["id"]

        first = await client.post("/api/v1/jobs", json=job_payload, headers=auth_headers(employer))
        second = await client.post("/api/v1/jobs", json=job_payload, headers=auth_headers(employer))

        assert first.json()["data"]["job"]["pricing"]["campaign_applied"] == campaign_id
        pricing = second.json()["data"]["job"]["pricing"]
        assert second.status_code == 201
        assert pricing["campaign_applied"] is None
        assert pricing["final_price"] == pricing["base_price"]

        campaigns = (await client.get(CAMPAIGNS_URL, headers=auth_headers(admin))).json()["data"]["campaigns"]
        assert campaigns[0]["current_uses"] == 1


class TestWhitelist:
    """Free posting whitelist"""

    @pytest.mark.asyncio
    async def test_grant_list_and_revoke(self, client, admin, employer):
        granted = await client.post(
            f"{WHITELIST_URL}/{employer.id}", json={"reason": "  Partner strategjik "}, headers=auth_headers(admin)
        )

        assert granted.status_code == 200
        entry = granted.json()["data"]["employer"]
        assert entry["free_posting_enabled"] is True
        assert entry["reason"] == "Partner strategjik"
        assert entry["granted_by"] == str(admin.id)
        assert entry["granted_at"] is not None

        listed = await client.get(WHITELIST_URL, headers=auth_headers(admin))
        assert [e["employer_id"] for e in listed.json()["data"]["employers"]] == [str(employer.id)]

        revoked = await client.delete(f"{WHITELIST_URL}/{employer.id}", headers=auth_headers(admin))
        assert revoked.status_code == 200
        assert revoked.json()["data"]["employer"]["free_posting_enabled"] is False

        listed = await client.get(WHITELIST_URL, headers=auth_headers(admin))
        assert listed.json()["data"]["total"] == 0

    @pytest.mark.asyncio
    async def test_granted_employer_posts_for_free(self, client, admin, employer, job_payload):
        await client.post(f"{WHITELIST_URL}/{employer.id}", json={"reason": "Partner"}, headers=auth_headers(admin))

        response = await client.post("/api/v1/jobs", json=job_payload, headers=auth_headers(employer))

        job = response.json()["data"]["job"]
        assert job["status"] == "active"
        assert job["pricing"]["final_price"] == 0

    @pytest.mark.asyncio
    async def test_unknown_employer(self, client, admin):
        response = await client.post(f"{WHITELIST_URL}/{uuid4()}", json={"reason": "Partner"}, headers=auth_headers(admin))
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_jobseeker_cannot_be_whitelisted(self, client, session_factory, admin):
        seeker = await create_user(session_factory, UserType.JOBSEEKER)

        response = await client.post(f"{WHITELIST_URL}/{seeker.id}", json={"reason": "Partner"}, headers=auth_headers(admin))

        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == "employer_id"

    @pytest.mark.asyncio
    async def test_double_grant_rejected(self, client, session_factory, admin):
        employer = await create_user(session_factory, free_posting=True)
        response = await client.post(f"{WHITELIST_URL}/{employer.id}", json={"reason": "Partner"}, headers=auth_headers(admin))
        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_revoke_without_grant_rejected(self, client, admin, employer):
        response = await client.delete(f"{WHITELIST_URL}/{employer.id}", headers=auth_headers(admin))
        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_blank_reason_rejected(self, client, admin, employer):
        response = await client.post(f"{WHITELIST_URL}/{employer.id}", json={"reason": "   "}, headers=auth_headers(admin))
        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == "reason"
