# backend/models/project.py
from sqlalchemy import Column, Integer, String, DateTime, JSON, func
from database import Base


def _list_column():
    return Column(JSON, nullable=False, default=list)


def _object_column():
    return Column(JSON, nullable=False, default=dict)


# Model Project
# One row per construction project. Identity and contact details are plain
# columns; every sub-collection (BOQ, RFIs, lab tests, fleet, ...) is kept as
# an opaque JSON payload that lives and dies with the project row.
class Project(Base):
    __tablename__ = "projects"

    id = Column(String, primary_key=True, index=True)
    name = Column(String, nullable=False)
    client = Column(String, nullable=False)

    code = Column(String)
    location = Column(String)
    contractor = Column(String)
    start_date = Column(DateTime(timezone=True))
    end_date = Column(DateTime(timezone=True))
    contract_period = Column(String)
    project_manager = Column(String)
    supervisor = Column(String)
    consultant_name = Column(String)
    client_name = Column(String)
    logo = Column(String)
    engineer = Column(String)
    contract_no = Column(String)
    last_synced = Column(String)
    spreadsheet_id = Column(String)

    # Commercial
    boq = _list_column()
    variation_orders = _list_column()
    contract_bills = _list_column()
    subcontractor_bills = _list_column()
    subcontractor_payments = _list_column()
    measurement_sheets = _list_column()
    accounting_integrations = _list_column()
    accounting_transactions = _list_column()

    # Quality
    rfis = _list_column()
    lab_tests = _list_column()
    ncrs = _list_column()
    checklists = _list_column()
    defects = _list_column()
    compliance_workflows = _list_column()

    # Planning and site work
    schedule = _list_column()
    milestones = _list_column()
    structures = _list_column()
    structure_templates = _list_column()
    linear_works = _list_column()
    daily_reports = _list_column()
    pre_construction = _list_column()
    pre_construction_tasks = _list_column()
    hindrances = _list_column()
    land_parcels = _list_column()
    map_overlays = _list_column()
    kml_data = _list_column()
    site_photos = _list_column()
    documents = _list_column()
    comments = _list_column()
    audit_logs = _list_column()

    # Agencies, materials and inventory
    agencies = _list_column()
    agency_payments = _list_column()
    agency_materials = _list_column()
    agency_bills = _list_column()
    materials = _list_column()
    inventory = _list_column()
    purchase_orders = _list_column()
    inventory_transactions = _list_column()

    # Resources, people and equipment
    resources = _list_column()
    resource_allocations = _list_column()
    personnel = _list_column()
    staff_locations = _list_column()
    vehicles = _list_column()
    vehicle_logs = _list_column()
    fleet = _list_column()

    # Singleton payloads
    environment_registry = _object_column()
    weather = _object_column()
    settings = _object_column()

    # Optimistic concurrency counter, bumped by SQLAlchemy on every UPDATE
    version = Column(Integer, nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    __mapper_args__ = {"version_id_col": version}
