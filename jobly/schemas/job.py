from pydantic import Field
from typing import List, Optional

from jobly.schemas.base import CamelModel, RequestModel


class JobNewRequest(RequestModel):
    """Schema for creating a job"""
    title: str = Field(..., min_length=1)
    salary: Optional[int] = Field(None, ge=0)
    equity: Optional[float] = Field(None, ge=0, le=1)
    company_handle: str = Field(..., min_length=1, max_length=25)


class JobUpdateRequest(RequestModel):
    """Schema for a partial job update; id and company cannot change"""
    title: str = Field(None, min_length=1)
    salary: Optional[int] = Field(None, ge=0)
    equity: Optional[float] = Field(None, ge=0, le=1)


class JobResponse(CamelModel):
    """Schema for job response"""
    id: int
    title: str
    salary: Optional[int] = None
    equity: Optional[float] = None
    company_handle: str


class JobEnvelope(CamelModel):
    job: JobResponse


class JobListEnvelope(CamelModel):
    jobs: List[JobResponse]
