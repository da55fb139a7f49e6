# backend/routes/projects.py
from typing import List, Optional
from fastapi import APIRouter, Depends, Header, HTTPException, Request, Response, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from database import get_db
from models.project import Project
from models.users import User
from schemas.project import ProjectCreate, ProjectResponse, ProjectUpdate, fill_sub_collection_defaults
from utils.audit import client_ip, write_log
from utils.errors import store_errors
from utils.identifiers import new_id
from utils.repository import Repository
from utils.tokenJWT import get_optional_user

router = APIRouter(prefix="/projects", tags=["Projects"])


# ---- HELPERS ----
def _etag(project: Project) -> str:
    return f'"{project.version}"'


def _etag_matches(if_match: str, project: Project) -> bool:
    if if_match.strip() == "*":
        return True
    candidates = [tag.strip() for tag in if_match.split(",")]
    return any(tag.removeprefix("W/").strip('"') == str(project.version) for tag in candidates)


def _get_or_404(projects: Repository, project_id: str) -> Project:
    project = projects.find_by_id(project_id)
    if project is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Project not found")
    return project


# =========================
# LIST / CREATE
# =========================
@router.get("", response_model=List[ProjectResponse])
def list_projects(db: Session = Depends(get_db)):
    with store_errors("Failed to fetch projects"):
        return Repository(db, Project).find_all()


@router.post("", response_model=ProjectResponse, status_code=status.HTTP_201_CREATED)
def create_project(
    payload: ProjectCreate,
    request: Request,
    response: Response,
    db: Session = Depends(get_db),
    current_user: Optional[User] = Depends(get_optional_user),
):
    projects = Repository(db, Project)
    data = fill_sub_collection_defaults(payload.model_dump())
    data["id"] = data.get("id") or new_id("project")

    with store_errors("Failed to create project"):
        if projects.find_by_id(data["id"]) is not None:
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Project already exists")
        project = Project(**data)
        try:
            projects.insert(project)
        except IntegrityError:
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Project already exists")

    write_log(
        db,
        user_id=current_user.id if current_user else None,
        action="PROJECT_CREATE",
        resource="projects",
        ip=client_ip(request),
        meta={"project_id": project.id, "name": project.name},
    )
    response.headers["ETag"] = _etag(project)
    return project


# =========================
# SINGLE PROJECT
# =========================
@router.get("/{project_id}", response_model=ProjectResponse)
def get_project(project_id: str, response: Response, db: Session = Depends(get_db)):
    with store_errors("Failed to fetch project"):
        project = _get_or_404(Repository(db, Project), project_id)
        response.headers["ETag"] = _etag(project)
        return project


@router.put("/{project_id}", response_model=ProjectResponse)
def update_project(
    project_id: str,
    payload: ProjectUpdate,
    request: Request,
    response: Response,
    if_match: Optional[str] = Header(None),
    db: Session = Depends(get_db),
    current_user: Optional[User] = Depends(get_optional_user),
):
    """Merge the fields present in the body into the project.

    Sub-collections are replaced as a whole, never merged item by item.
    Sending ``If-Match`` with the ETag from a previous read turns the update
    into a conditional one (412 when the project changed in between).
    """
    changes = fill_sub_collection_defaults(payload.model_dump(exclude_unset=True))
    projects = Repository(db, Project)

    with store_errors("Failed to update project"):
        project = _get_or_404(projects, project_id)
        if if_match and not _etag_matches(if_match, project):
            raise HTTPException(
                status_code=status.HTTP_412_PRECONDITION_FAILED,
                detail="Project was modified by another request",
            )
        try:
            project = projects.update_by_id(project_id, changes)
        except StaleDataError:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="Project was modified by another request",
            )

    write_log(
        db,
        user_id=current_user.id if current_user else None,
        action="PROJECT_UPDATE",
        resource="projects",
        ip=client_ip(request),
        meta={"project_id": project_id, "fields": sorted(changes)},
    )
    response.headers["ETag"] = _etag(project)
    return project


@router.delete("/{project_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_project(
    project_id: str,
    request: Request,
    db: Session = Depends(get_db),
    current_user: Optional[User] = Depends(get_optional_user),
):
    with store_errors("Failed to delete project"):
        if not Repository(db, Project).delete_by_id(project_id):
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Project not found")

    write_log(
        db,
        user_id=current_user.id if current_user else None,
        action="PROJECT_DELETE",
        resource="projects",
        ip=client_ip(request),
        meta={"project_id": project_id},
    )
    return Response(status_code=status.HTTP_204_NO_CONTENT)
