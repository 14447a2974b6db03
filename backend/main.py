from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from api.router import limiter, router
from config import settings
from services.embedding_gateway import EmbeddingGateway
from services.job_store import JobStore
from services.recommender import Recommender


@asynccontextmanager
async def lifespan(app: FastAPI):
    # One store handle per process, connected before the first request.
    # StoreConnectionError aborts startup.
    store = JobStore.from_settings(settings).open()
    app.state.recommender = Recommender(store, EmbeddingGateway.from_settings(settings))
    try:
        yield
    finally:
        store.close()


app = FastAPI(
    title="Job Recommender API",
    description="Job recommendations from free-text queries and resumes via vector search",
    version="1.0.0",
    lifespan=lifespan,
)
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(router)
