# schedcheck/main.py
from fastapi import FastAPI
from schedcheck.database import Base, engine
from schedcheck.routers import conflicts

import time
import logging
from fastapi import Request
from schedcheck.logging_config import setup_logging

# register every table on Base.metadata
from schedcheck.models import schedule  # noqa: F401


setup_logging()
logger = logging.getLogger("schedcheck")


# 建立資料表（若不存在）
Base.metadata.create_all(bind=engine)

app = FastAPI(title="Schedule Conflict Backend", version="1.0.0")


@app.middleware("http")
async def log_requests(request: Request, call_next):
    start = time.time()
    try:
        response = await call_next(request)
        ms = int((time.time() - start) * 1000)
        logger.info("%s %s -> %s (%dms)", request.method, request.url.path, response.status_code, ms)
        return response
    except Exception:
        ms = int((time.time() - start) * 1000)
        logger.exception("Unhandled error %s %s (%dms)", request.method, request.url.path, ms)
        raise


# Routers
app.include_router(conflicts.router)

@app.get("/")
def root():
    return {"message": "Schedule conflict backend is running!"}
