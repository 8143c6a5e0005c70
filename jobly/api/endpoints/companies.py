import logging
from typing import Optional
from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.orm import Session

from jobly.core.database import get_db
from jobly.core.deps import ensure_admin
from jobly.core.exceptions import BadRequestError
from jobly.crud import company as company_crud
from jobly.schemas.company import (
    CompanyDetailEnvelope,
    CompanyEnvelope,
    CompanyListEnvelope,
    CompanyNewRequest,
    CompanyUpdateRequest,
)

router = APIRouter(prefix="/companies", tags=["Companies"])
logger = logging.getLogger(__name__)

SEARCH_FILTERS = {"name", "minEmployees", "maxEmployees"}


@router.post("/", status_code=status.HTTP_201_CREATED, response_model=CompanyEnvelope,
             dependencies=[Depends(ensure_admin)])
def create_company(
    request: CompanyNewRequest,
    db: Session = Depends(get_db)
):
    """
    Create a company.

    Authorization required: admin
    """
    company = company_crud.create(db, request.changes())
    logger.info(f"Created company {company['handle']}")
    return {"company": company}


@router.get("/", response_model=CompanyListEnvelope)
def list_companies(
    request: Request,
    name: Optional[str] = None,
    min_employees: Optional[int] = Query(None, alias="minEmployees", ge=0),
    max_employees: Optional[int] = Query(None, alias="maxEmployees", ge=0),
    db: Session = Depends(get_db)
):
    """
    List companies, optionally filtered.

    Filters:
    - name: case-insensitive, matches any part of the name
    - minEmployees / maxEmployees: inclusive bounds

    Any other query parameter is rejected.

    Authorization required: none
    """
    for key in request.query_params.keys():
        if key not in SEARCH_FILTERS:
            raise BadRequestError(f"Invalid field: {key}")

    companies = company_crud.find_all(
        db,
        name=name,
        min_employees=min_employees,
        max_employees=max_employees,
    )
    return {"companies": companies}


@router.get("/{handle}", response_model=CompanyDetailEnvelope)
def get_company(handle: str, db: Session = Depends(get_db)):
    """
    Get a company and its jobs.

    Authorization required: none
    """
    return {"company": company_crud.get(db, handle)}


@router.patch("/{handle}", response_model=CompanyEnvelope, dependencies=[Depends(ensure_admin)])
def update_company(
    handle: str,
    request: CompanyUpdateRequest,
    db: Session = Depends(get_db)
):
    """
    Update a company. Fields: { name, description, numEmployees, logoUrl }

    Authorization required: admin
    """
    company = company_crud.update(db, handle, request.changes())
    logger.info(f"Updated company {handle}")
    return {"company": company}


@router.delete("/{handle}", dependencies=[Depends(ensure_admin)])
def delete_company(handle: str, db: Session = Depends(get_db)):
    """
    Delete a company and its jobs.

    Authorization required: admin
    """
    company_crud.remove(db, handle)
    logger.info(f"Deleted company {handle}")
    return {"deleted": handle}
