from fastapi import FastAPI

from loops.routers import game_routers
from loops.core.database import Base, engine
from utils.logger_config import configure_logging
from loops import models  # noqa: F401  (registers the tables on Base)

configure_logging()

# Create database tables
Base.metadata.create_all(bind=engine)

# create FastAPI
app = FastAPI(title="Loops API", version="1.0")

# get routers
app.include_router(game_routers.router, prefix="/games", tags=["Games"])


# Landing page
@app.get("/")
async def index():
    return {"name": "Loops", "games": "/games"}
