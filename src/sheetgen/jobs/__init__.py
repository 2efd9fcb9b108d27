from .types import Job
from .load import load_jobs, load_job_document, job_from_dict
from .schema import validate_job_dict

__all__ = [
    "Job",
    "load_jobs",
    "load_job_document",
    "job_from_dict",
    "validate_job_dict",
]
