import logging
import os
import subprocess
from datetime import datetime

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from community_api.config import APP_NAME, CORS_ORIGINS, configure_logging
from community_api.database import init_db
from community_api.errors import CommunityError
from community_api.routes import (
    accounts,
    admin_actions,
    appeals,
    audit_logs,
    auth,
    banned_words,
    categories,
    comments,
    communities,
    community_rules,
    configurations,
    data_exports,
    external_integrations,
    memberships,
    posts,
    recent_communities,
    reports,
    search_logs,
    sessions,
    votes,
)

configure_logging()
logger = logging.getLogger(__name__)

app = FastAPI(title=APP_NAME)


# Get build info
def get_build_info():
    """Get git commit hash or build timestamp"""
    try:
        result = subprocess.run(
            ["git", "rev-parse", "--short", "HEAD"],
            cwd=os.path.dirname(os.path.dirname(__file__)),
            capture_output=True,
            text=True,
            timeout=2,
        )
        if result.returncode == 0:
            return result.stdout.strip()
    except (OSError, subprocess.SubprocessError):
        pass

    # Fallback to build timestamp
    return datetime.now().strftime("%Y%m%d-%H%M%S")


BUILD_HASH = get_build_info()

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(CommunityError)
async def community_error_handler(request: Request, exc: CommunityError):
    """Render domain errors raised by the services layer."""
    return JSONResponse(status_code=exc.status_code, content={"detail": str(exc)})


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(status_code=500, content={"detail": "Internal Server Error"})


# Include routers
app.include_router(auth.router, prefix="/api", tags=["auth"])
app.include_router(sessions.router, prefix="/api", tags=["sessions"])
app.include_router(accounts.router, prefix="/api", tags=["accounts"])
app.include_router(categories.router, prefix="/api", tags=["categories"])
app.include_router(communities.router, prefix="/api", tags=["communities"])
app.include_router(community_rules.router, prefix="/api", tags=["community-rules"])
app.include_router(memberships.router, prefix="/api", tags=["memberships"])
app.include_router(recent_communities.router, prefix="/api", tags=["recent-communities"])
app.include_router(posts.router, prefix="/api", tags=["posts"])
app.include_router(comments.router, prefix="/api", tags=["comments"])
app.include_router(votes.router, prefix="/api", tags=["votes"])
app.include_router(reports.router, prefix="/api", tags=["reports"])

# Admin tooling
app.include_router(banned_words.router, prefix="/api", tags=["banned-words"])
app.include_router(configurations.router, prefix="/api", tags=["configurations"])
app.include_router(external_integrations.router, prefix="/api", tags=["external-integrations"])
app.include_router(admin_actions.router, prefix="/api", tags=["admin-actions"])
app.include_router(appeals.router, prefix="/api", tags=["appeals"])
app.include_router(audit_logs.router, prefix="/api", tags=["audit-logs"])
app.include_router(search_logs.router, prefix="/api", tags=["search-logs"])
app.include_router(data_exports.router, prefix="/api", tags=["data-exports"])


@app.on_event("startup")
def on_startup():
    init_db()  # imports models and creates tables
    route_count = sum(1 for r in app.routes if getattr(r, "path", None))
    logger.info("%s started: %d routes, build %s", APP_NAME, route_count, BUILD_HASH)


@app.get("/api/health")
def health_check():
    """Diagnostic endpoint to verify which code is running"""
    return {"app_name": APP_NAME, "build_hash": BUILD_HASH, "status": "healthy"}
