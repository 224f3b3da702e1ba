from ..infrastructure.app_factory import create_application
from ..infrastructure.config.settings import get_settings
from .api import router as api_router

settings = get_settings()

app = create_application(
    router=api_router,
    settings=settings,
    summary="REST API for a shared library catalog",
    description="""
    # Library Catalog API

    * 🔐 **Accounts**: register with a username and password, log in for a bearer token
    * 📚 **Books**: create, list, read, replace and delete catalog entries

    ## Authentication

    `POST /auth/login` returns a JWT valid for one hour. Send it as
    `Authorization: Bearer <token>` on every `/books` request.
    """,
)
