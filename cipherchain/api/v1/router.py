from fastapi import APIRouter

from cipherchain.api.v1.endpoints import aes, algorithms, analysis, pipeline

api_router = APIRouter()

api_router.include_router(
    algorithms.router,
    prefix="/algorithms",
    tags=["Algorithms"],
)

api_router.include_router(
    pipeline.router,
    prefix="/pipeline",
    tags=["Pipeline"],
)

api_router.include_router(
    aes.router,
    prefix="/aes",
    tags=["AES"],
)

api_router.include_router(
    analysis.router,
    prefix="/analysis",
    tags=["Analysis"],
)
