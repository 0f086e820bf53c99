import logging
from contextlib import asynccontextmanager
from pathlib import Path

from dotenv import load_dotenv
from fastapi import APIRouter, FastAPI
from fastapi.responses import HTMLResponse, JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError


# Load environment variables from .env file
PROJECT_ROOT = Path(__file__).parent.parent
ENV_FILE = PROJECT_ROOT / ".env"
load_dotenv(ENV_FILE)

from api.config import settings
from api.routers.api_v1.api import api_router
from api.utils.security import generate_api_key
from crowdfunding_ledger.connection import get_ledger_manager


logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Creates the ledger tables on startup and disposes the engine on shutdown.
    """
    manager = get_ledger_manager()

    # Startup
    print("\n" + "=" * 60)
    print(f"🚀 Starting {settings.api_title} v{settings.api_version}")
    print("=" * 60)
    print(f"Environment: {settings.environment}")
    print(f"Channel: {manager.settings.channel_name}")
    print(f"Chaincode: {manager.settings.chaincode_name}")
    print(f"API Key configured: {'Yes' if settings.api_key else 'No'}")

    try:
        manager.init_db()
        print("✅ Ledger database initialized")
    except SQLAlchemyError as e:
        print(f"❌ Ledger database initialization failed: {str(e)}")
        print("   LEDGER_DATABASE_URL environment variable must point to a reachable database")
        raise  # Fail fast if the database is not available

    print(f"\n📚 API Documentation: http://127.0.0.1:{settings.api_port}/docs")
    print("=" * 60 + "\n")

    yield  # Application runs here

    # Shutdown
    print("\n" + "=" * 60)
    print("🛑 Shutting down API")
    print("=" * 60)

    manager.close()
    print("✅ Ledger connections closed")

    print("=" * 60 + "\n")


app = FastAPI(
    title=settings.api_title,
    description=settings.api_description,
    version=settings.api_version,
    contact=settings.contact,
    lifespan=lifespan,
)

root_router = APIRouter()


@app.get("/")
async def root():
    """Basic HTML response."""
    body = (
        "<html>"
        "<body style='padding: 10px;'>"
        "<h1>Welcome to the Crowdfunding Ledger API</h1>"
        "<div>"
        "Check the docs: <a href='/docs'>here</a>"
        "</div>"
        "</body>"
        "</html>"
    )

    return HTMLResponse(content=body)


@app.get("/generate-api-key")
async def get_new_api_key():
    api_key = generate_api_key()

    return {"api_key": api_key}


@app.get("/health")
def health_check():
    """
    Health check endpoint that tests ledger database connectivity.

    Returns:
        - status: "healthy" if the ledger database is accessible
        - database: connection status and backend
        - api_version: API version
        - environment: Current environment
    """
    manager = get_ledger_manager()
    health_status = {
        "status": "healthy",
        "api_version": settings.api_version,
        "environment": settings.environment,
        "database": {
            "type": manager.get_engine().dialect.name,
            "connected": False,
        },
    }

    try:
        with manager.get_session() as session:
            session.exec(text("SELECT 1"))

        health_status["database"]["connected"] = True
        health_status["database"]["chaincode"] = manager.settings.chaincode_name

        return JSONResponse(content=health_status, status_code=200)

    except SQLAlchemyError as e:
        logger.error(f"Health check failed: {e}")
        health_status["status"] = "unhealthy"
        health_status["database"]["error"] = str(e)

        return JSONResponse(content=health_status, status_code=503)


app.include_router(root_router)
app.include_router(api_router, prefix=settings.API_V1_STR)
