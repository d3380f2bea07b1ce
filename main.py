import uvicorn
import time
import logging
from fastapi import FastAPI, Request
from starlette.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware

from strikelog.api.bugs import router as bugs_router
from strikelog.api.dashboard import router as dashboard_router
from strikelog.core.config import (
    CORS_ORIGINS, ENABLE_FILE_LOGGING, HOST, LOG_DIR, LOG_LEVEL, PORT,
)
from strikelog.utils.logging_config import setup_logging

setup_logging(
    level=LOG_LEVEL,
    log_dir=LOG_DIR,
    file_logging=ENABLE_FILE_LOGGING,
)
logger = logging.getLogger("main")

app = FastAPI(title="StrikeLog Bug Tracker API")

# ---------------------------------------------------------------------------
# Logging Middleware
# ---------------------------------------------------------------------------
class LoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        start_time = time.time()
        client_host = request.client.host if request.client else "unknown"
        logger.info(f"Incoming: {request.method} {request.url.path} from {client_host}")

        try:
            response = await call_next(request)
            process_time = (time.time() - start_time) * 1000
            logger.info(
                f"Outgoing: {request.method} {request.url.path} - "
                f"Status: {response.status_code} - "
                f"Time: {process_time:.2f}ms"
            )
            return response
        except Exception as e:
            logger.error(f"Request failed: {request.method} {request.url.path} - Error: {str(e)}")
            raise

app.add_middleware(LoggingMiddleware)

# ---------------------------------------------------------------------------
# CORS — allow the single-page client to call the backend
# ---------------------------------------------------------------------------
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Health endpoint
@app.get("/health")
async def health_check():
    return {"status": "ok"}

# Register routers
app.include_router(bugs_router)
app.include_router(dashboard_router)

if __name__ == "__main__":
    uvicorn.run("main:app", host=HOST, port=PORT, reload=True)
