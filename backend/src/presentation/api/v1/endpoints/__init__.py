"""
API V1 Endpoints Package
Exports routers used by main app
"""
from .jobs import router as jobs_router
from .business_control import router as business_control_router

__all__ = [
    "jobs_router",
    "business_control_router",
]
