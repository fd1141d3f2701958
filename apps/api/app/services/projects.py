"""Project service layer."""

from app.schemas.project import Project
from app.services.catalog import CatalogService


class ProjectService(CatalogService[Project]):
    table = "projects"
    label = "Project"
    record_model = Project
