from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.exceptions import RequestValidationError
from exam_service.core.config import settings
from exam_service.core.database import engine
from exam_service.core.exceptions import ExamServiceError
from exam_service.core.logging import configure_logging
from exam_service.endpoints import course, exam_paper, manual_assessment
from exam_service.middleware.exceptions import (
    exam_service_exception_handler,
    global_exception_handler,
    validation_exception_handler,
)
from exam_service.middleware.logging import RequestLoggingMiddleware
from exam_service.models.base import Base
import logging

logger = logging.getLogger("exam_service")

app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    openapi_url=f"{settings.API_V1_STR}/openapi.json"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)

app.add_middleware(GZipMiddleware, minimum_size=1000)
app.add_middleware(RequestLoggingMiddleware)

app.add_exception_handler(ExamServiceError, exam_service_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(Exception, global_exception_handler)

app.include_router(course.router, prefix="/courses", tags=["Courses"])
app.include_router(exam_paper.router, prefix="/exam-papers", tags=["Exam Papers"])
app.include_router(manual_assessment.router, prefix="/manual-assessments", tags=["Manual Assessments"])

@app.on_event("startup")
async def startup_event():
    configure_logging()
    if settings.CREATE_TABLES_ON_STARTUP:
        Base.metadata.create_all(bind=engine)
    logger.info(f"{settings.PROJECT_NAME} {settings.VERSION} started")

@app.get("/")
def health_check():
    return {
        "status": "ok",
        "service": settings.PROJECT_NAME,
        "version": settings.VERSION
    }

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
