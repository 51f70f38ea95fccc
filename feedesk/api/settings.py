"""Organisation settings, catalog lists and staff accounts."""
from fastapi import APIRouter

from feedesk.api.deps import AdminOnly, CurrentStaff
from feedesk.models.catalog import CatalogEntryCreate, OrgSettingsUpdate
from feedesk.models.staff import StaffCreate, StaffUpdate
from feedesk.services import catalog, staff as staff_service

router = APIRouter()


def _org_to_dict(org) -> dict:
    return {"name": org.name, "logo": org.logo, "address": org.address, "phone": org.phone}


@router.get("")
async def get_settings(user: CurrentStaff):
    """Everything the settings screen needs in one call."""
    org = await catalog.get_org_settings()
    return {
        "settings": _org_to_dict(org),
        "semesters": await catalog.list_catalog("semesters"),
        "sessions": await catalog.list_catalog("sessions"),
        "branches": await catalog.list_catalog("branches"),
        "staff": await staff_service.list_staff(),
    }


@router.put("/org")
async def update_org(data: OrgSettingsUpdate, admin: AdminOnly):
    org = await catalog.upsert_org_settings(data)
    return _org_to_dict(org)


@router.post("/staff", status_code=201)
async def create_staff(data: StaffCreate, admin: AdminOnly):
    return {"id": await staff_service.create_staff(data)}


@router.put("/staff/{staff_pk}")
async def update_staff(staff_pk: str, data: StaffUpdate, admin: AdminOnly):
    return await staff_service.update_staff(staff_pk, data)


@router.delete("/staff/{staff_pk}", status_code=204)
async def delete_staff(staff_pk: str, admin: AdminOnly):
    await staff_service.delete_staff(staff_pk)


@router.get("/{kind}")
async def list_entries(kind: str, user: CurrentStaff):
    return await catalog.list_catalog(kind)


@router.post("/{kind}", status_code=201)
async def create_entry(kind: str, data: CatalogEntryCreate, admin: AdminOnly):
    return {"id": await catalog.create_catalog_entry(kind, data.name)}


@router.delete("/{kind}/{entry_id}", status_code=204)
async def delete_entry(kind: str, entry_id: str, admin: AdminOnly):
    await catalog.delete_catalog_entry(kind, entry_id)
