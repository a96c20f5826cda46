import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from garagescout.api.routes.recommendations import router as recommendations_router
from garagescout.config import settings

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(
    title="Garage Scout API",
    description="Decodes AI mechanic recommendations into render-ready cards",
    version="0.1.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_origin_regex=r"http://localhost:\d+",
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(recommendations_router)


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "healthy"}
