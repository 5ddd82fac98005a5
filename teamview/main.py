# teamview/main.py

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import os
import logging

from teamview.api.auth import router as auth_router
from teamview.api.team import router as team_router
from teamview.api.user import router as user_router

from teamview.core.settings import settings
from teamview.core.exceptions import AuthError, NotFoundError, ValidationError
from teamview.team_store import init_team_store

# Логирование
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("uvicorn.error")

app = FastAPI(
    title="TeamView Web API",
    version="1.0.0",
    description="Teams of shared dashboard views for Jenkins",
)

# Middlewares
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Роутеры
app.include_router(auth_router)
app.include_router(team_router)
app.include_router(user_router)

# Health check & root
@app.get("/", tags=["Health"])
def root():
    return {"status": "TeamView Web API is running!"}

@app.get("/health", tags=["Health"])
def health():
    return {"ok": True}

@app.on_event("startup")
async def startup_event():
    logger.info("Starting TeamView Web API")
    init_team_store()

@app.on_event("shutdown")
async def shutdown_event():
    logger.info("Stopping TeamView Web API")

# Ошибки, которые роуты не перевели в HTTPException сами

@app.exception_handler(ValidationError)
async def validation_exception_handler(request: Request, exc: ValidationError):
    return JSONResponse(status_code=400, content={"detail": str(exc)})

@app.exception_handler(NotFoundError)
async def not_found_exception_handler(request: Request, exc: NotFoundError):
    return JSONResponse(status_code=404, content={"detail": str(exc)})

@app.exception_handler(AuthError)
async def auth_exception_handler(request: Request, exc: AuthError):
    return JSONResponse(status_code=403, content={"detail": str(exc)})

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "teamview.main:app",
        host="0.0.0.0",
        port=int(os.getenv("PORT", 8000)),
        reload=bool(os.getenv("DEBUG", False))
    )
