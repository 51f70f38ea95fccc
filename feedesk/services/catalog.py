"""Catalog store: branches, semesters, sessions and organisation settings."""
import logging
from datetime import datetime
from typing import Type

from beanie import Document
from pymongo.errors import DuplicateKeyError

from feedesk.errors import DuplicateError, NotFoundError, ValidationError
from feedesk.models.catalog import AcademicSession, Branch, OrgSettings, OrgSettingsUpdate, Semester
from feedesk.models.types import to_object_id

logger = logging.getLogger(__name__)

CATALOG_MODELS: dict[str, Type[Document]] = {
    "branches": Branch,
    "semesters": Semester,
    "sessions": AcademicSession,
}


def _model_for(kind: str) -> Type[Document]:
    model = CATALOG_MODELS.get(kind)
    if model is None:
        raise NotFoundError(f"Unknown catalog {kind!r}")
    return model


async def list_catalog(kind: str) -> list[dict]:
    model = _model_for(kind)
    entries = await model.find_all().sort("created_at").to_list()
    return [{"id": str(e.id), "name": e.name} for e in entries]


async def create_catalog_entry(kind: str, name: str) -> str:
    model = _model_for(kind)
    name = (name or "").strip()
    if not name:
        raise ValidationError("Name is required")
    if await model.find_one({"name": name}):
        raise DuplicateError(f"{name!r} already exists")
    entry = model(name=name)
    try:
        await entry.insert()
    except DuplicateKeyError:
        raise DuplicateError(f"{name!r} already exists")
    logger.info("Created %s entry %s (%s)", kind, entry.id, name)
    return str(entry.id)


async def delete_catalog_entry(kind: str, entry_id: str) -> None:
    """Students still pointing at the entry keep the id; their name lookups resolve to None."""
    model = _model_for(kind)
    oid = to_object_id(entry_id)
    entry = await model.get(oid) if oid else None
    if not entry:
        raise NotFoundError(f"{kind} entry not found")
    await entry.delete()
    logger.info("Deleted %s entry %s", kind, entry_id)


async def name_map(model: Type[Document]) -> dict[str, str]:
    """id -> name for every document of a catalog model."""
    entries = await model.find_all().to_list()
    return {str(e.id): e.name for e in entries}


async def exists(model: Type[Document], entry_id: str) -> bool:
    oid = to_object_id(entry_id)
    return bool(oid and await model.get(oid))


async def get_org_settings() -> OrgSettings:
    org = await OrgSettings.find_one()
    return org or OrgSettings()


async def upsert_org_settings(data: OrgSettingsUpdate) -> OrgSettings:
    org = await OrgSettings.find_one()
    if not org:
        org = OrgSettings(**data.model_dump(exclude_unset=True, exclude_none=True))
        await org.insert()
        return org
    for key, value in data.model_dump(exclude_unset=True).items():
        setattr(org, key, value)
    org.updated_at = datetime.utcnow()
    await org.save()
    return org
