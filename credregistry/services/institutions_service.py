from __future__ import annotations

import logging

from credregistry.core.clock import Clock, now
from credregistry.core.errors import NotFoundError, require_text
from credregistry.models.institution import Institution
from credregistry.repos.institution_repo import InstitutionRepo

logger = logging.getLogger(__name__)


def create_institution(
    repo: InstitutionRepo, *, name: str, address: str, clock: Clock = now
) -> Institution:
    name = require_text("name", name)
    address = require_text("address", address)

    institution = Institution.new(name=name, address=address, created_at=clock())
    repo.add(institution)
    logger.info("Created institution id=%s name=%s", institution.id, institution.name)
    return institution


def get_institution(repo: InstitutionRepo, institution_id: str) -> Institution:
    institution = repo.get_by_id(institution_id)
    if institution is None:
        raise NotFoundError("Institution", institution_id)
    return institution


def list_institutions(repo: InstitutionRepo) -> list[Institution]:
    institutions = repo.list_all()
    if not institutions:
        raise NotFoundError("institutions")
    return institutions
