from pathlib import Path

from fastapi import APIRouter, Depends, File, HTTPException, Request, UploadFile
from slowapi import Limiter
from slowapi.util import get_remote_address

from api.dependencies import get_recommender
from config import settings
from models.requests import QueryRecommendRequest, ResumeTextRecommendRequest
from models.responses import RecommendationResponse
from services.recommender import Recommender

router = APIRouter()
limiter = Limiter(key_func=get_remote_address)

_UPLOAD_SUFFIXES = {".pdf", ".docx"}


@router.get("/health")
def health(recommender: Recommender = Depends(get_recommender)):
    return {
        "status": "ok",
        "store_connected": recommender.store.is_open,
    }


@router.post("/recommend/query", response_model=RecommendationResponse)
@limiter.limit("10/minute")
def recommend_query(
    request: Request,
    body: QueryRecommendRequest,
    recommender: Recommender = Depends(get_recommender),
):
    return recommender.recommend_for_query(body.query)


@router.post("/recommend/resume", response_model=RecommendationResponse)
@limiter.limit("10/minute")
def recommend_resume(
    request: Request,
    resume_file: UploadFile = File(...),
    recommender: Recommender = Depends(get_recommender),
):
    # Validate file type
    suffix = Path(resume_file.filename or "").suffix.lower()
    if suffix not in _UPLOAD_SUFFIXES:
        raise HTTPException(status_code=400, detail="Only PDF or DOCX files are accepted")

    # Read and validate size
    content = resume_file.file.read()
    max_bytes = settings.max_upload_size_mb * 1024 * 1024
    if len(content) > max_bytes:
        raise HTTPException(
            status_code=400,
            detail=f"File too large. Max size: {settings.max_upload_size_mb}MB",
        )

    return recommender.recommend_for_resume_bytes(content, suffix)


@router.post("/recommend/resume/text", response_model=RecommendationResponse)
@limiter.limit("10/minute")
def recommend_resume_text(
    request: Request,
    body: ResumeTextRecommendRequest,
    recommender: Recommender = Depends(get_recommender),
):
    return recommender.recommend_for_resume_text(body.resume_text)
