"""Skill service layer."""

from app.schemas.skill import Skill
from app.services.catalog import CatalogService


class SkillService(CatalogService[Skill]):
    table = "skills"
    label = "Skill"
    record_model = Skill
