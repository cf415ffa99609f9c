"""
Tests for the job posting endpoints
"""
from datetime import datetime, timedelta
from uuid import uuid4

import pytest

from domain.enums import JobCategory, JobType, PaymentStatus, UserType
from domain.value_objects import JobStatus, PlatformCategories
from conftest import auth_headers, create_job, create_user, load_job


class TestCreateJob:
    """POST /api/v1/jobs"""

    @pytest.mark.asyncio
    async def test_free_posting_employer_job_goes_live(self, client, session_factory, job_payload):
        employer = await create_user(session_factory, free_posting=True)

        response = await client.post("/api/v1/jobs", json=job_payload, headers=auth_headers(employer))

        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        job = body["data"]["job"]
        assert job["status"] == "active"
        assert job["payment_status"] == "paid"
        assert job["pricing"]["final_price"] == 0
        assert job["pricing"]["free_posting"] is True
        assert job["location"] == {"city": "Tiranë", "region": "Tiranë", "remote": False, "remote_type": "none"}
        assert job["slug"] == "zhvillues-python"

    @pytest.mark.asyncio
    async def test_paid_job_waits_for_payment(self, client, employer, job_payload):
        response = await client.post("/api/v1/jobs", json=job_payload, headers=auth_headers(employer))

        assert response.status_code == 201
        job = response.json()["data"]["job"]
        assert job["status"] == "pending_payment"
        assert job["payment_required"] == job["pricing"]["final_price"] > 0

    @pytest.mark.asyncio
    async def test_duplicate_titles_get_distinct_slugs(self, client, employer, job_payload):
        first = await client.post("/api/v1/jobs", json=job_payload, headers=auth_headers(employer))
        second = await client.post("/api/v1/jobs", json=job_payload, headers=auth_headers(employer))

        assert first.json()["data"]["job"]["slug"] == "zhvillues-python"
        assert second.json()["data"]["job"]["slug"] == "zhvillues-python-1"

    @pytest.mark.asyncio
    async def test_short_title_rejected(self, client, employer, job_payload):
        job_payload["title"] = "Dev"

        response = await client.post("/api/v1/jobs", json=job_payload, headers=auth_headers(employer))

        assert response.status_code == 400
        body = response.json()
        assert body["success"] is False
        assert [e["field"] for e in body["errors"]] == ["title"]

    @pytest.mark.asyncio
    async def test_unknown_city_rejected(self, client, employer, job_payload):
        job_payload["location"] = {"city": "Atlantis"}

        response = await client.post("/api/v1/jobs", json=job_payload, headers=auth_headers(employer))

        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == "location.city"

    @pytest.mark.asyncio
    async def test_too_many_tags_rejected(self, client, employer, job_payload):
        job_payload["tags"] = [f"tag{i}" for i in range(11)]

        response = await client.post("/api/v1/jobs", json=job_payload, headers=auth_headers(employer))

        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == "tags"

    @pytest.mark.asyncio
    async def test_requires_token(self, client, job_payload):
        response = await client.post("/api/v1/jobs", json=job_payload)
        assert response.status_code == 401
        assert response.json()["success"] is False

    @pytest.mark.asyncio
    async def test_unverified_employer_forbidden(self, client, session_factory, job_payload):
        employer = await create_user(session_factory, verified=False)
        response = await client.post("/api/v1/jobs", json=job_payload, headers=auth_headers(employer))
        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_jobseeker_forbidden(self, client, session_factory, job_payload):
        seeker = await create_user(session_factory, UserType.JOBSEEKER)
        response = await client.post("/api/v1/jobs", json=job_payload, headers=auth_headers(seeker))
        assert response.status_code == 403


class TestPricingQuote:
    """POST /api/v1/jobs/pricing/quote"""

    @pytest.mark.asyncio
    async def test_quote_returns_breakdown(self, client, employer):
        response = await client.post(
            "/api/v1/jobs/pricing/quote",
            json={"category": "Teknologji", "location": {"city": "Durrës"}},
            headers=auth_headers(employer),
        )

        assert response.status_code == 200
        pricing = response.json()["data"]["pricing"]
        assert pricing["final_price"] == pricing["base_price"]
        assert pricing["applied_rules"] == []
        assert pricing["campaign_applied"] is None


class TestSearchJobs:
    """GET /api/v1/jobs"""

    @pytest.mark.asyncio
    async def test_multi_city_filter(self, client, session_factory, employer):
        await create_job(session_factory, employer, city="Tiranë")
        await create_job(session_factory, employer, city="Durrës")
        await create_job(session_factory, employer, city="Vlorë")

        response = await client.get("/api/v1/jobs", params={"city": "Tiranë,Durrës"})

        assert response.status_code == 200
        jobs = response.json()["data"]["jobs"]
        assert sorted(j["location"]["city"] for j in jobs) == ["Durrës", "Tiranë"]

    @pytest.mark.asyncio
    async def test_only_live_jobs_listed(self, client, session_factory, employer):
        live = await create_job(session_factory, employer)
        await create_job(session_factory, employer, status=JobStatus.PAUSED)
        await create_job(session_factory, employer, is_deleted=True)
        await create_job(
            session_factory, employer,
            status=JobStatus.PENDING_PAYMENT, payment_status=PaymentStatus.PENDING,
        )
        await create_job(session_factory, employer, expires_at=datetime.utcnow() - timedelta(days=1))

        response = await client.get("/api/v1/jobs")

        assert [j["id"] for j in response.json()["data"]["jobs"]] == [str(live.id)]

    @pytest.mark.asyncio
    async def test_pagination_block(self, client, session_factory, employer):
        for _ in range(3):
            await create_job(session_factory, employer)

        response = await client.get("/api/v1/jobs", params={"page": 2, "limit": 2})

        data = response.json()["data"]
        assert len(data["jobs"]) == 1
        assert data["pagination"] == {
            "current_page": 2,
            "total_pages": 2,
            "total_jobs": 3,
            "has_next_page": False,
            "has_prev_page": True,
        }

    @pytest.mark.asyncio
    async def test_filters_combine(self, client, session_factory, employer):
        match = await create_job(
            session_factory, employer,
            job_type=JobType.PART_TIME,
            platform_categories=PlatformCategories(diaspora=True),
        )
        await create_job(session_factory, employer, job_type=JobType.PART_TIME)
        await create_job(
            session_factory, employer,
            category=JobCategory.MARKETING,
            platform_categories=PlatformCategories(diaspora=True),
        )

        response = await client.get(
            "/api/v1/jobs",
            params={"jobType": "part-time", "category": "Teknologji", "diaspora": "true"},
        )

        assert [j["id"] for j in response.json()["data"]["jobs"]] == [str(match.id)]

    @pytest.mark.asyncio
    async def test_text_search(self, client, session_factory, employer):
        match = await create_job(session_factory, employer, title="Inxhinier DevOps")
        await create_job(session_factory, employer, title="Kamarier")

        response = await client.get("/api/v1/jobs", params={"search": "devops"})

        assert [j["id"] for j in response.json()["data"]["jobs"]] == [str(match.id)]

    @pytest.mark.asyncio
    async def test_company_filter(self, client, session_factory, employer):
        other = await create_user(session_factory)
        mine = await create_job(session_factory, employer)
        await create_job(session_factory, other)

        response = await client.get("/api/v1/jobs", params={"company": str(employer.id)})

        assert [j["id"] for j in response.json()["data"]["jobs"]] == [str(mine.id)]

    @pytest.mark.asyncio
    async def test_invalid_company_returns_empty_page(self, client, session_factory, employer):
        await create_job(session_factory, employer)

        response = await client.get("/api/v1/jobs", params={"company": "not-a-uuid"})

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["jobs"] == []
        assert data["pagination"]["total_jobs"] == 0

    @pytest.mark.asyncio
    async def test_limit_over_maximum_rejected(self, client):
        response = await client.get("/api/v1/jobs", params={"limit": 1000})
        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == "limit"


class TestGetJob:
    """GET /api/v1/jobs/{job_id}"""

    @pytest.mark.asyncio
    async def test_visitor_view_is_counted(self, client, session_factory, employer):
        job = await create_job(session_factory, employer)

        response = await client.get(f"/api/v1/jobs/{job.id}")

        assert response.status_code == 200
        assert response.json()["data"]["job"]["view_count"] == 1
        assert (await load_job(session_factory, job.id)).view_count == 1

    @pytest.mark.asyncio
    async def test_owner_view_not_counted(self, client, session_factory, employer):
        job = await create_job(session_factory, employer)

        response = await client.get(f"/api/v1/jobs/{job.id}", headers=auth_headers(employer))

        assert response.status_code == 200
        assert (await load_job(session_factory, job.id)).view_count == 0

    @pytest.mark.asyncio
    async def test_owner_sees_unpublished_job(self, client, session_factory, employer):
        job = await create_job(
            session_factory, employer,
            status=JobStatus.PENDING_PAYMENT, payment_status=PaymentStatus.PENDING,
        )

        visitor = await client.get(f"/api/v1/jobs/{job.id}")
        owner = await client.get(f"/api/v1/jobs/{job.id}", headers=auth_headers(employer))

        assert visitor.status_code == 404
        assert owner.status_code == 200

    @pytest.mark.asyncio
    async def test_unknown_job(self, client):
        response = await client.get(f"/api/v1/jobs/{uuid4()}")
        assert response.status_code == 404
        assert response.json()["success"] is False

    @pytest.mark.asyncio
    async def test_malformed_id(self, client):
        response = await client.get("/api/v1/jobs/abc")
        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == "job_id"


class TestSimilarJobs:
    """GET /api/v1/jobs/{job_id}/similar"""

    @pytest.mark.asyncio
    async def test_similar_jobs_ranked(self, client, session_factory, employer):
        reference = await create_job(session_factory, employer, title="Zhvillues Python")
        close = await create_job(session_factory, employer, title="Zhvillues Python Senior")
        same_city = await create_job(
            session_factory, employer, title="Kontabilist", category=JobCategory.FINANCE
        )
        await create_job(
            session_factory, employer, title="Shofer", city="Vlorë", category=JobCategory.TRANSPORT
        )

        response = await client.get(f"/api/v1/jobs/{reference.id}/similar")

        assert response.status_code == 200
        similar = response.json()["data"]["similar_jobs"]
        assert [s["job"]["id"] for s in similar] == [str(close.id), str(same_city.id)]
        assert similar[0]["similarity_score"] > similar[1]["similarity_score"]

    @pytest.mark.asyncio
    async def test_unknown_job(self, client):
        response = await client.get(f"/api/v1/jobs/{uuid4()}/similar")
        assert response.status_code == 404

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status", [JobStatus.PENDING_PAYMENT, JobStatus.PAUSED, JobStatus.DRAFT])
    async def test_unpublished_job_hidden_like_detail(self, client, session_factory, employer, status):
        job = await create_job(session_factory, employer, status=status, payment_status=PaymentStatus.PENDING)
        await create_job(session_factory, employer)
        stranger = await create_user(session_factory)

        anonymous = await client.get(f"/api/v1/jobs/{job.id}/similar")
        other_employer = await client.get(f"/api/v1/jobs/{job.id}/similar", headers=auth_headers(stranger))
        owner = await client.get(f"/api/v1/jobs/{job.id}/similar", headers=auth_headers(employer))

        assert anonymous.status_code == 404
        assert other_employer.status_code == 404
        assert owner.status_code == 200
        assert len(owner.json()["data"]["similar_jobs"]) == 1

    @pytest.mark.asyncio
    async def test_expired_job_hidden(self, client, session_factory, employer):
        job = await create_job(session_factory, employer, expires_at=datetime.utcnow() - timedelta(days=1))
        response = await client.get(f"/api/v1/jobs/{job.id}/similar")
        assert response.status_code == 404


class TestManageJobs:
    """Employer edits, status changes and deletion"""

    @pytest.mark.asyncio
    async def test_my_jobs_lists_only_own(self, client, session_factory, employer):
        other = await create_user(session_factory)
        mine = await create_job(session_factory, employer, status=JobStatus.PAUSED)
        await create_job(session_factory, other)

        response = await client.get("/api/v1/jobs/employer/my-jobs", headers=auth_headers(employer))

        data = response.json()["data"]
        assert [j["id"] for j in data["jobs"]] == [str(mine.id)]
        assert data["pagination"]["total_jobs"] == 1

    @pytest.mark.asyncio
    async def test_update_job(self, client, session_factory, employer):
        job = await create_job(session_factory, employer)

        response = await client.put(
            f"/api/v1/jobs/{job.id}",
            json={"title": "Zhvillues Python i Lartë", "location": {"city": "Kamëz"}},
            headers=auth_headers(employer),
        )

        assert response.status_code == 200
        updated = response.json()["data"]["job"]
        assert updated["title"] == "Zhvillues Python i Lartë"
        assert updated["location"]["region"] == "Tiranë"
        assert updated["pricing"] == job.pricing.to_dict()
        assert updated["slug"] == job.slug

    @pytest.mark.asyncio
    async def test_delete_foreign_job_not_found(self, client, session_factory, employer):
        other = await create_user(session_factory)
        job = await create_job(session_factory, other)

        response = await client.delete(f"/api/v1/jobs/{job.id}", headers=auth_headers(employer))

        assert response.status_code == 404
        stored = await load_job(session_factory, job.id)
        assert stored.is_deleted is False
        assert stored.status == JobStatus.ACTIVE

    @pytest.mark.asyncio
    async def test_delete_own_job(self, client, session_factory, employer):
        job = await create_job(session_factory, employer)

        response = await client.delete(f"/api/v1/jobs/{job.id}", headers=auth_headers(employer))

        assert response.status_code == 200
        stored = await load_job(session_factory, job.id)
        assert stored.is_deleted is True
        assert stored.status == JobStatus.CLOSED
        assert (await client.get(f"/api/v1/jobs/{job.id}")).status_code == 404

    @pytest.mark.asyncio
    async def test_pause_then_activate(self, client, session_factory, employer):
        job = await create_job(session_factory, employer)
        url = f"/api/v1/jobs/{job.id}/status"

        paused = await client.patch(url, json={"status": "paused"}, headers=auth_headers(employer))
        resumed = await client.patch(url, json={"status": "active"}, headers=auth_headers(employer))

        assert paused.json()["data"]["job"]["status"] == "paused"
        assert resumed.json()["data"]["job"]["status"] == "active"

    @pytest.mark.asyncio
    async def test_closed_job_cannot_reopen(self, client, session_factory, employer):
        job = await create_job(session_factory, employer, status=JobStatus.CLOSED)

        response = await client.patch(
            f"/api/v1/jobs/{job.id}/status", json={"status": "active"}, headers=auth_headers(employer)
        )

        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == "status"

    @pytest.mark.asyncio
    async def test_unpaid_job_cannot_activate(self, client, session_factory, employer):
        job = await create_job(
            session_factory, employer,
            status=JobStatus.PENDING_PAYMENT, payment_status=PaymentStatus.PENDING,
        )

        response = await client.patch(
            f"/api/v1/jobs/{job.id}/status", json={"status": "active"}, headers=auth_headers(employer)
        )

        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == "payment_status"

    @pytest.mark.asyncio
    async def test_employer_cannot_request_expired_status(self, client, session_factory, employer):
        job = await create_job(session_factory, employer)

        response = await client.patch(
            f"/api/v1/jobs/{job.id}/status", json={"status": "expired"}, headers=auth_headers(employer)
        )

        assert response.status_code == 400
