"""Experience service layer."""

from app.schemas.experience import Experience
from app.services.catalog import CatalogService


class ExperienceService(CatalogService[Experience]):
    table = "experiences"
    label = "Experience"
    record_model = Experience
