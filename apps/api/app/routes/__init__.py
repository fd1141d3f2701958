"""Route modules."""

from .auth import router as auth_router
from .contact import form_router as contact_form_router
from .contact import router as contact_router
from .experiences import router as experiences_router
from .health import router as health_router
from .projects import router as projects_router
from .skills import router as skills_router
from .uploads import router as uploads_router

__all__ = [
    "auth_router",
    "contact_form_router",
    "contact_router",
    "experiences_router",
    "health_router",
    "projects_router",
    "skills_router",
    "uploads_router",
]
