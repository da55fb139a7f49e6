from pydantic import Field, field_validator
from typing import Any, Callable, Dict, Optional
from datetime import datetime

from schemas.base import CamelModel


# Identity fields plus every sub-collection of a project.
# Sub-collections are pass-through payload: the API does not look inside them.
class ProjectFields(CamelModel):
    code: Optional[str] = None
    location: Optional[str] = None
    contractor: Optional[str] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    contract_period: Optional[str] = None
    project_manager: Optional[str] = None
    supervisor: Optional[str] = None
    consultant_name: Optional[str] = None
    client_name: Optional[str] = None
    logo: Optional[str] = None
    engineer: Optional[str] = None
    contract_no: Optional[str] = None
    last_synced: Optional[str] = None
    spreadsheet_id: Optional[str] = None

    boq: Any = Field(default_factory=list)
    variation_orders: Any = Field(default_factory=list)
    contract_bills: Any = Field(default_factory=list)
    subcontractor_bills: Any = Field(default_factory=list)
    subcontractor_payments: Any = Field(default_factory=list)
    measurement_sheets: Any = Field(default_factory=list)
    accounting_integrations: Any = Field(default_factory=list)
    accounting_transactions: Any = Field(default_factory=list)

    rfis: Any = Field(default_factory=list)
    lab_tests: Any = Field(default_factory=list)
    ncrs: Any = Field(default_factory=list)
    checklists: Any = Field(default_factory=list)
    defects: Any = Field(default_factory=list)
    compliance_workflows: Any = Field(default_factory=list)

    schedule: Any = Field(default_factory=list)
    milestones: Any = Field(default_factory=list)
    structures: Any = Field(default_factory=list)
    structure_templates: Any = Field(default_factory=list)
    linear_works: Any = Field(default_factory=list)
    daily_reports: Any = Field(default_factory=list)
    pre_construction: Any = Field(default_factory=list)
    pre_construction_tasks: Any = Field(default_factory=list)
    hindrances: Any = Field(default_factory=list)
    land_parcels: Any = Field(default_factory=list)
    map_overlays: Any = Field(default_factory=list)
    kml_data: Any = Field(default_factory=list)
    site_photos: Any = Field(default_factory=list)
    documents: Any = Field(default_factory=list)
    comments: Any = Field(default_factory=list)
    audit_logs: Any = Field(default_factory=list)

    agencies: Any = Field(default_factory=list)
    agency_payments: Any = Field(default_factory=list)
    agency_materials: Any = Field(default_factory=list)
    agency_bills: Any = Field(default_factory=list)
    materials: Any = Field(default_factory=list)
    inventory: Any = Field(default_factory=list)
    purchase_orders: Any = Field(default_factory=list)
    inventory_transactions: Any = Field(default_factory=list)

    resources: Any = Field(default_factory=list)
    resource_allocations: Any = Field(default_factory=list)
    personnel: Any = Field(default_factory=list)
    staff_locations: Any = Field(default_factory=list)
    vehicles: Any = Field(default_factory=list)
    vehicle_logs: Any = Field(default_factory=list)
    fleet: Any = Field(default_factory=list)

    environment_registry: Any = Field(default_factory=dict)
    weather: Any = Field(default_factory=dict)
    settings: Any = Field(default_factory=dict)

    # Date inputs left empty on the form arrive as ""
    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def _blank_date_is_null(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value


# Sub-collection name -> factory producing its empty default ([] or {})
SUB_COLLECTIONS: Dict[str, Callable[[], Any]] = {
    name: field.default_factory
    for name, field in ProjectFields.model_fields.items()
    if field.default_factory is not None
}


def fill_sub_collection_defaults(changes: Dict[str, Any]) -> Dict[str, Any]:
    """Replace null sub-collections with their empty default; a project never stores null there."""
    return {
        key: SUB_COLLECTIONS[key]() if value is None and key in SUB_COLLECTIONS else value
        for key, value in changes.items()
    }


# Schema for creating a project (POST /projects)
class ProjectCreate(ProjectFields):
    id: Optional[str] = Field(None, min_length=1)
    name: str = Field(..., min_length=1)
    client: str = Field(..., min_length=1)


# Partial update (PUT /projects/{id}): only the keys sent are applied
class ProjectUpdate(ProjectFields):
    name: Optional[str] = Field(None, min_length=1)
    client: Optional[str] = Field(None, min_length=1)

    @field_validator("name", "client")
    @classmethod
    def _not_null(cls, value: Optional[str]) -> str:
        if value is None:
            raise ValueError("must not be null")
        return value


class ProjectResponse(ProjectFields):
    id: str
    name: str
    client: str
    version: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
