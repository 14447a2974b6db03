from pydantic import BaseModel, Field


class QueryRecommendRequest(BaseModel):
    query: str = Field(..., min_length=1, max_length=500, description="Short free-text job query")


class ResumeTextRecommendRequest(BaseModel):
    resume_text: str = Field(..., max_length=50000, description="Plain text resume content")
