import time

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import OperationalError
from starlette.exceptions import HTTPException as StarletteHTTPException

from treegraph.api.routes import router
from treegraph.config import (
    API_HOST,
    API_PORT,
    CORS_ORIGINS,
    DB_CONNECT_RETRIES,
    DB_CONNECT_DELAY,
    SEED_ON_STARTUP,
    SEED_DATA_PATH,
)
from treegraph.db.models import Base
from treegraph.db.session import engine, SessionLocal
from treegraph.db.store import GraphStore, load_seed_rows, seed_graph

app = FastAPI(
    title="Tree Graph Service",
    version="0.1.0",
)

# Middleware FIRST
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routes AFTER middleware
app.include_router(router)


@app.exception_handler(StarletteHTTPException)
async def not_found(request: Request, exc: StarletteHTTPException):
    if exc.status_code == 404:
        return JSONResponse(status_code=404, content={"message": "Not Found"})
    return JSONResponse(status_code=exc.status_code, content={"message": str(exc.detail)})


def seed_sample_data() -> bool:
    db = SessionLocal()
    try:
        return seed_graph(GraphStore(db), load_seed_rows(SEED_DATA_PATH))
    except Exception as e:
        db.rollback()
        print(f"[Startup] Seeding failed: {e}")
        return False
    finally:
        db.close()


@app.on_event("startup")
def startup():
    for attempt in range(DB_CONNECT_RETRIES):
        try:
            Base.metadata.create_all(bind=engine)
            print("[Startup] Database connected")
            break
        except OperationalError:
            print(f"[Startup] Waiting for database... ({attempt + 1}/{DB_CONNECT_RETRIES})")
            time.sleep(DB_CONNECT_DELAY)
    else:
        # Do not crash the app
        print("[Startup] Database not ready, running without persistence")
        return

    if SEED_ON_STARTUP:
        seed_sample_data()


if __name__ == "__main__":
    uvicorn.run("treegraph.main:app", host=API_HOST, port=API_PORT)
