"""
Pydantic schemas for companies.
"""

from typing import List, Optional
from pydantic import Field

from jobly.schemas.base import CamelModel, HttpUrlStr, RequestModel


class CompanyNewRequest(RequestModel):
    """Schema for creating a company"""
    handle: str = Field(..., min_length=1, max_length=25)
    name: str = Field(..., min_length=1)
    description: Optional[str] = None
    num_employees: Optional[int] = Field(None, ge=0)
    logo_url: Optional[HttpUrlStr] = None


class CompanyUpdateRequest(RequestModel):
    """Schema for a partial company update; the handle cannot change"""
    name: str = Field(None, min_length=1)
    description: Optional[str] = None
    num_employees: Optional[int] = Field(None, ge=0)
    logo_url: Optional[HttpUrlStr] = None


class CompanyJob(CamelModel):
    """Job summary embedded in a company detail"""
    id: int
    title: str
    salary: Optional[int] = None
    equity: Optional[float] = None


class CompanyResponse(CamelModel):
    """Schema for company response"""
    handle: str
    name: str
    description: Optional[str] = None
    num_employees: Optional[int] = None
    logo_url: Optional[str] = None


class CompanyDetailResponse(CompanyResponse):
    jobs: List[CompanyJob] = []


class CompanyEnvelope(CamelModel):
    company: CompanyResponse


class CompanyDetailEnvelope(CamelModel):
    company: CompanyDetailResponse


class CompanyListEnvelope(CamelModel):
    companies: List[CompanyResponse]
