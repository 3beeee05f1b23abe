from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from kidcare.api.routes import insights, logs, profiles, stats
from kidcare.core.config import settings
import logging

logging.basicConfig(
    level=logging.DEBUG if settings.APP_ENV == "development" else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
app = FastAPI(
    title="KidCare API",
    description="Backend API for the KidCare illness tracker",
    version="0.1.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(profiles.router)
app.include_router(logs.router)
app.include_router(stats.router)
app.include_router(insights.router)


@app.get("/health")
async def health_check():
    return {"status": "ok", "service": "kidcare-api"}
