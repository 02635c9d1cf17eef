# backend/wikihub/main.py
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from .database import engine
from . import models
from .api import projects
from .exceptions import WikiError, ValidationError, NotFoundError
from .utils.logging import api_logger

# Create all tables on startup
models.Base.metadata.create_all(bind=engine)

app = FastAPI(title="WikiHub API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # In production, specify your actual frontend URL
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(projects.router)


@app.exception_handler(WikiError)
async def wiki_error_handler(request: Request, exc: WikiError):
    if isinstance(exc, ValidationError):
        status_code = 400
    elif isinstance(exc, NotFoundError):
        status_code = 404
    else:
        status_code = 500

    api_logger.warning("Request failed", extra={
        "path": request.url.path,
        "code": exc.code,
        "error": exc.message
    })
    return JSONResponse(status_code=status_code, content=exc.to_dict())


@app.get("/")
async def root():
    return {"message": "WikiHub API is running"}
