"""Job posting records as stored in the document store."""

from pydantic import BaseModel, Field


class JobPosting(BaseModel):
    """A job posting before its embedding is attached.

    Field names follow the stored document keys (camelCase).
    """
    model_config = {"populate_by_name": True}

    job_id: int | str = Field(alias="jobId")
    job_title: str = Field(default="", alias="jobTitle")
    job_description: str = Field(default="", alias="jobDescription")
    location: str = ""
    job_type: str = Field(default="", alias="jobType")
    company: str = ""

    def to_document(self) -> dict:
        return self.model_dump(by_alias=True)
