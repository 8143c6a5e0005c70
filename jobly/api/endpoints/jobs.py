import logging
from typing import Optional
from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.orm import Session

from jobly.core.database import get_db
from jobly.core.deps import ensure_admin
from jobly.core.exceptions import BadRequestError
from jobly.crud import job as job_crud
from jobly.schemas.job import JobEnvelope, JobListEnvelope, JobNewRequest, JobUpdateRequest

router = APIRouter(prefix="/jobs", tags=["Jobs"])
logger = logging.getLogger(__name__)

SEARCH_FILTERS = {"title", "minSalary", "hasEquity"}


@router.post("/", status_code=status.HTTP_201_CREATED, response_model=JobEnvelope,
             dependencies=[Depends(ensure_admin)])
def create_job(
    request: JobNewRequest,
    db: Session = Depends(get_db)
):
    """
    Create a job at an existing company.

    Authorization required: admin
    """
    job = job_crud.create(db, request.changes())
    logger.info(f"Created job {job['id']}: {job['title']} at {job['companyHandle']}")
    return {"job": job}


@router.get("/", response_model=JobListEnvelope)
def list_jobs(
    request: Request,
    title: Optional[str] = None,
    min_salary: Optional[int] = Query(None, alias="minSalary", ge=0),
    has_equity: Optional[str] = Query(None, alias="hasEquity"),
    db: Session = Depends(get_db)
):
    """
    List jobs, optionally filtered.

    Filters:
    - title: case-insensitive, matches any part of the title
    - minSalary: inclusive lower bound
    - hasEquity: exactly "true" returns only jobs with non-zero equity;
      any other value means no equity filter

    Any other query parameter is rejected.

    Authorization required: none
    """
    for key in request.query_params.keys():
        if key not in SEARCH_FILTERS:
            raise BadRequestError(f"Invalid field: {key}")

    jobs = job_crud.find_all(
        db,
        title=title,
        min_salary=min_salary,
        has_equity=has_equity == "true",
    )
    return {"jobs": jobs}


@router.get("/{job_id}", response_model=JobEnvelope)
def get_job(job_id: int, db: Session = Depends(get_db)):
    """
    Retrieve a job by ID.

    Authorization required: none
    """
    return {"job": job_crud.get(db, job_id)}


@router.patch("/{job_id}", response_model=JobEnvelope, dependencies=[Depends(ensure_admin)])
def update_job(
    job_id: int,
    request: JobUpdateRequest,
    db: Session = Depends(get_db)
):
    """
    Update a job. Fields: { title, salary, equity }

    Authorization required: admin
    """
    job = job_crud.update(db, job_id, request.changes())
    logger.info(f"Updated job {job_id}")
    return {"job": job}


@router.delete("/{job_id}", dependencies=[Depends(ensure_admin)])
def delete_job(job_id: int, db: Session = Depends(get_db)):
    """
    Delete a job by ID.

    Authorization required: admin
    """
    job_crud.remove(db, job_id)
    logger.info(f"Deleted job {job_id}")
    return {"deleted": job_id}
