from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
import logging

from inventory.config import get_settings
from inventory.database import engine, Base, SessionLocal
from inventory.api import auth, products, health
from inventory.api.errors import register_exception_handlers
from inventory.api.middleware import register_middleware
from inventory.seed import seed_products

settings = get_settings()

# Configure logging
logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for startup and shutdown events.
    """
    # Startup
    logger.info(f"Starting up application ({settings.ENVIRONMENT})...")

    # Create database tables
    logger.info("Creating database tables...")
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables created successfully")

    if settings.SEED_DEMO_DATA:
        db = SessionLocal()
        try:
            seed_products(db)
        finally:
            db.close()

    yield

    # Shutdown
    logger.info("Shutting down application...")


# Create FastAPI application
app = FastAPI(
    title="Inventory Manager API",
    description="""
    REST backend for a small inventory catalogue:

    - **Authentication**: `POST /auth/login` exchanges the admin credentials for a bearer token valid for one hour
    - **Product Management**: Full CRUD on products, every route protected by the bearer token
    - **Pagination**: `page`, `limit` and an `active` filter on the product listing

    ## Errors

    Every error response is `{"error": "..."}`; validation failures add a
    `details` list with one entry per violated rule.
    """,
    version="1.0.0",
    lifespan=lifespan
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_middleware(app, settings)
register_exception_handlers(app)

# Include API routers
app.include_router(health.router)
app.include_router(auth.router)
app.include_router(products.router)
