"""
Job Posting Endpoints
Public job board plus employer management of their postings
"""
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from core.config import settings
from domain.entities import User
from domain.value_objects import JobStatus
from application.services.jobs import IJobService, build_search_criteria
from presentation.api.v1.container import get_job_service
from presentation.api.v1.dependencies import (
    get_optional_user,
    require_employer,
    require_verified_employer,
)
from presentation.api.v1.schemas.job import (
    JobCreateRequest,
    JobResponse,
    JobStatusUpdateRequest,
    JobUpdateRequest,
    PricingQuoteRequest,
    SimilarJobResponse,
)


router = APIRouter()


@router.get("/jobs")
async def search_jobs(
    search: Optional[str] = Query(None, max_length=200),
    city: Optional[str] = Query(None, description="Comma separated cities"),
    job_type: Optional[str] = Query(None, alias="jobType", description="Comma separated job types"),
    category: Optional[str] = Query(None),
    min_salary: Optional[float] = Query(None, alias="minSalary", ge=0),
    max_salary: Optional[float] = Query(None, alias="maxSalary", ge=0),
    company: Optional[str] = Query(None, description="Employer id"),
    diaspora: Optional[str] = Query(None),
    nga_shtepia: Optional[str] = Query(None, alias="ngaShtepia"),
    part_time: Optional[str] = Query(None, alias="partTime"),
    administrata: Optional[str] = Query(None),
    sezonale: Optional[str] = Query(None),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=settings.JOBS_PAGE_SIZE_MAX),
    sort_by: str = Query("posted_at", alias="sortBy"),
    sort_order: str = Query("desc", alias="sortOrder", pattern="^(asc|desc)$"),
    job_service: IJobService = Depends(get_job_service)
):
    """
    Search active job postings

    city and jobType accept comma separated lists (OR within the list).
    Platform category flags filter only when set to 'true'.
    """
    criteria = build_search_criteria(
        search=search,
        city=city,
        job_type=job_type,
        category=category,
        min_salary=min_salary,
        max_salary=max_salary,
        company=company,
        flags={
            "diaspora": diaspora,
            "nga_shtepia": nga_shtepia,
            "part_time": part_time,
            "administrata": administrata,
            "sezonale": sezonale,
        },
        page=page,
        limit=limit,
        sort_by=sort_by,
        sort_order=sort_order,
    )
    jobs, pagination = await job_service.search_jobs(criteria)

    return {
        "success": True,
        "data": {
            "jobs": [JobResponse.from_entity(j) for j in jobs],
            "pagination": pagination.to_dict(),
        },
    }


@router.post("/jobs", status_code=status.HTTP_201_CREATED)
async def create_job(
    request: JobCreateRequest,
    employer: User = Depends(require_verified_employer),
    job_service: IJobService = Depends(get_job_service)
):
    """Create a job posting; free postings go live immediately"""
    job = await job_service.create_job(employer, request)

    if job.status == JobStatus.ACTIVE:
        message = "Job posted successfully"
    else:
        message = "Job created, payment required to publish"

    return {
        "success": True,
        "message": message,
        "data": {"job": JobResponse.from_entity(job)},
    }


@router.post("/jobs/pricing/quote")
async def quote_pricing(
    request: PricingQuoteRequest,
    employer: User = Depends(require_employer),
    job_service: IJobService = Depends(get_job_service)
):
    """Preview what posting a job would cost"""
    pricing = await job_service.quote_pricing(employer, request)
    return {"success": True, "data": {"pricing": pricing.to_dict()}}


@router.get("/jobs/employer/my-jobs")
async def list_my_jobs(
    status_filter: Optional[JobStatus] = Query(None, alias="status"),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=settings.JOBS_PAGE_SIZE_MAX),
    employer: User = Depends(require_employer),
    job_service: IJobService = Depends(get_job_service)
):
    """Jobs posted by the current employer"""
    jobs, pagination = await job_service.list_employer_jobs(employer, status_filter, page, limit)
    return {
        "success": True,
        "data": {
            "jobs": [JobResponse.from_entity(j) for j in jobs],
            "pagination": pagination.to_dict(),
        },
    }


@router.get("/jobs/{job_id}")
async def get_job(
    job_id: UUID,
    viewer: Optional[User] = Depends(get_optional_user),
    job_service: IJobService = Depends(get_job_service)
):
    """Job detail"""
    job = await job_service.get_job(job_id, viewer)
    return {"success": True, "data": {"job": JobResponse.from_entity(job)}}


@router.get("/jobs/{job_id}/similar")
async def get_similar_jobs(
    job_id: UUID,
    limit: int = Query(settings.SIMILAR_JOBS_LIMIT, ge=1, le=20),
    viewer: Optional[User] = Depends(get_optional_user),
    job_service: IJobService = Depends(get_job_service)
):
    """Jobs similar to the given one, best match first"""
    scored = await job_service.get_similar_jobs(job_id, limit, viewer)
    return {
        "success": True,
        "data": {
            "similar_jobs": [
                SimilarJobResponse(job=JobResponse.from_entity(s.job), similarity_score=s.score.value)
                for s in scored
            ],
        },
    }


@router.put("/jobs/{job_id}")
async def update_job(
    job_id: UUID,
    request: JobUpdateRequest,
    employer: User = Depends(require_employer),
    job_service: IJobService = Depends(get_job_service)
):
    """Edit a job posting"""
    job = await job_service.update_job(employer, job_id, request)
    return {
        "success": True,
        "message": "Job updated successfully",
        "data": {"job": JobResponse.from_entity(job)},
    }


@router.delete("/jobs/{job_id}")
async def delete_job(
    job_id: UUID,
    employer: User = Depends(require_employer),
    job_service: IJobService = Depends(get_job_service)
):
    """Soft delete a job posting"""
    await job_service.delete_job(employer, job_id)
    return {"success": True, "message": "Job deleted successfully"}


@router.patch("/jobs/{job_id}/status")
async def update_job_status(
    job_id: UUID,
    request: JobStatusUpdateRequest,
    employer: User = Depends(require_employer),
    job_service: IJobService = Depends(get_job_service)
):
    """Pause, reactivate or close a job posting"""
    job = await job_service.update_status(employer, job_id, request.status)
    return {
        "success": True,
        "message": f"Job status changed to {job.status.value}",
        "data": {"job": JobResponse.from_entity(job)},
    }
