"""FastAPI dependencies shared across feature routers."""

from .auth import AdminDep, AdminPrincipal, require_admin, verify_cron_secret
from .database import DatabaseDep, SessionDep, get_database, get_db_session
from .services import HttpClientDep, NotifierDep, get_http_client, get_notifier

__all__ = [
    "AdminDep",
    "AdminPrincipal",
    "DatabaseDep",
    "HttpClientDep",
    "NotifierDep",
    "SessionDep",
    "get_database",
    "get_db_session",
    "get_http_client",
    "get_notifier",
    "require_admin",
    "verify_cron_secret",
]
