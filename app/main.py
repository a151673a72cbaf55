from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.sessions import SessionMiddleware
from app.core.config import settings
from app.core.database import Database
from app.core.exceptions import register_exception_handlers
from app.routes import api_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    database = Database(settings.DATABASE_URL, echo=settings.DATABASE_ECHO)
    await database.connect()
    if settings.AUTO_CREATE_TABLES:
        await database.create_all()
    app.state.database = database

    yield

    await database.disconnect()


app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.PROJECT_VERSION,
    description=settings.PROJECT_DESCRIPTION,
    openapi_url="/openapi.json",
    lifespan=lifespan
)

# Set all CORS enabled origins
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# required for Authlib OAuth state
app.add_middleware(
    SessionMiddleware,
    secret_key=settings.JWT_SECRET_KEY,  # reuse the JWT secret
    same_site="lax",
    https_only=settings.COOKIE_SECURE
)

register_exception_handlers(app)

# Include all API routes
app.include_router(api_router)

@app.get("/")
async def root():
    return {"message": "Welcome to StayLinker API"}

@app.get("/health")
async def health_check():
    return {"status": "healthy"}
