import logging
from fastapi import FastAPI
from starlette.middleware.sessions import SessionMiddleware

from taskactivity.core.config import settings
from taskactivity.core.database import init_db, SessionLocal
from taskactivity.core.exception_handlers import setup_exception_handlers
from taskactivity.core.logging_config import setup_logging
from taskactivity.core.rate_limit import RateLimitMiddleware
from taskactivity.models import Role
from taskactivity.repositories import UserRepository
from taskactivity.services import UserService
from taskactivity.controllers import (
    admin_query_controller,
    auth_controller,
    dropdown_controller,
    error_controller,
    health_controller,
    login_controller,
    user_profile_controller,
)

setup_logging()
logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(title=settings.APP_TITLE)

# Rate limiting runs inside the session layer
app.add_middleware(RateLimitMiddleware)
app.add_middleware(
    SessionMiddleware,
    secret_key=settings.SECRET_KEY,
    max_age=settings.SESSION_MAX_AGE,
    https_only=settings.SESSION_COOKIE_SECURE,
    same_site="lax",
)

setup_exception_handlers(app)


@app.on_event("startup")
def startup():
    """
    Initialize database and seed the admin account if configured
    """
    # Create all tables
    init_db()

    # Seed admin from environment variables
    if settings.ADMIN_USERNAME and settings.ADMIN_PASSWORD:
        with SessionLocal() as s:
            user_service = UserService(UserRepository(s))
            if user_service.get_user_by_username(settings.ADMIN_USERNAME) is None:
                user_service.create_user(
                    username=settings.ADMIN_USERNAME,
                    password=settings.ADMIN_PASSWORD,
                    lastname=settings.ADMIN_LASTNAME,
                    role=Role.ADMIN,
                )
                logger.info(f"Seeded admin account: {settings.ADMIN_USERNAME}")


# Include routers
app.include_router(health_controller.router)  # Liveness (public)
app.include_router(login_controller.router)  # Form login / logout (public)
app.include_router(auth_controller.router)  # JWT authentication endpoints (public)
app.include_router(error_controller.router)
app.include_router(dropdown_controller.router)
app.include_router(user_profile_controller.router)
app.include_router(admin_query_controller.router)  # ADMIN only
