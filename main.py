"""
Academic Records API

Main FastAPI application for the academic records service.
Administrators save per-term grades and generate subject reports;
students read their own grades through the portal endpoints.
"""
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from config import settings, setup_logging
from database import init_db
from api import users_router, subjects_router, grades_router, reports_router, ErrorResponse

logger = setup_logging()


# --------------- Lifespan ---------------

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan handler – initialise DB on startup."""
    logger.info("Initializing database...")
    init_db()
    logger.info("Database initialized.")
    yield


# --------------- FastAPI app ---------------

app = FastAPI(
    title="Academic Records API",
    description="""
API for managing students' per-term grades.

## Features

### Grade management
- Subject rosters built from enrollments and stored grades
- Saving prelim, midterm, semifinal and final scores (0-100)

### Evaluation
- Per-student average, status (Excellent, Good, Passed, Failed) and comment
- Class statistics and insight
- Printable PDF report per subject

### Authorization Rules
- **Admins**: Can save grades, view rosters and generate reports
- **Students**: Can only view their own grades through the portal
    """,
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Exception handler
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Global exception handler."""
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=500,
        content=ErrorResponse(detail=str(exc), type=type(exc).__name__).model_dump()
    )


# Include routers
app.include_router(users_router)
app.include_router(subjects_router)
app.include_router(grades_router)
app.include_router(reports_router)


@app.get("/", tags=["Health"])
async def root():
    """Root endpoint - API health check."""
    return {
        "status": "online",
        "service": "Academic Records API",
        "version": "1.0.0"
    }


@app.get("/health", tags=["Health"])
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.debug,
    )
