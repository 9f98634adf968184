import logging

from fastapi import FastAPI

from .db import Base, engine
from .settings import settings
from .routers import health, game
from . import models  # noqa: F401  (registers tables on Base.metadata)

logging.basicConfig(
	level=getattr(logging, settings.log_level.upper(), logging.INFO),
	format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(title="Little Learners API")
app.include_router(health.router)
app.include_router(game.router)


@app.get("/info")
def root():
	return {"status": "ok", "gemini_configured": bool(settings.gemini_api_key)}


@app.on_event("startup")
async def startup_event():
	# Initialize DB schema
	Base.metadata.create_all(bind=engine)
