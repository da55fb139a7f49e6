"""Seeds a development database with demo users and one demo project.

Run from the ``backend`` directory:  ``python populate_db.py``
Existing rows (matched by id or email) are left untouched, so the script can
be run repeatedly.
"""
from datetime import datetime, timezone

from database import SessionLocal, init_db
from models.project import Project
from models.users import User
from schemas.project import ProjectCreate
from utils.identifiers import avatar_url
from utils.repository import Repository

# Configuration
DEMO_USERS = [
    {"id": "u1", "name": "Admin User", "email": "admin@roadmaster.com", "phone": "9779800000001", "role": "Admin"},
    {"id": "u2", "name": "Er. Dharma Dhoj Kunwar", "email": "pm@roadmaster.com", "phone": "9779802877286", "role": "Project Manager"},
    {"id": "u3", "name": "John Doe", "email": "site@roadmaster.com", "phone": "9779812345678", "role": "Site Engineer"},
    {"id": "u4", "name": "Sarah Lee", "email": "lab@roadmaster.com", "phone": "9779809876543", "role": "Lab Technician"},
    {"id": "u5", "name": "Vikram Singh", "email": "supervisor@roadmaster.com", "phone": "9779865432109", "role": "Supervisor"},
]

DEMO_PROJECT = {
    "id": "proj-001",
    "name": "Kathmandu Ring Road Upgrade",
    "code": "KRR-2024",
    "location": "Kathmandu Valley",
    "contractor": "Himalayan Builders Pvt. Ltd.",
    "client": "Department of Roads",
    "engineer": "Er. Dharma Dhoj Kunwar",
    "start_date": datetime(2024, 1, 15, tzinfo=timezone.utc),
    "end_date": datetime(2026, 7, 14, tzinfo=timezone.utc),
    "boq": [
        {"id": "boq-001", "itemNo": "1.1", "description": "Clearing and grubbing of trees and vegetation",
         "unit": "sq.m", "quantity": 15000, "rate": 45, "completedQuantity": 0},
        {"id": "boq-002", "itemNo": "2.1", "description": "Excavation in ordinary soil",
         "unit": "cu.m", "quantity": 8200, "rate": 320, "completedQuantity": 0},
    ],
    "settings": {"currency": "NPR", "vatRate": 13},
}
# End Configuration


def seed_users(session) -> int:
    users = Repository(session, User)
    created = 0
    for data in DEMO_USERS:
        if users.find_by_id(data["id"]) or users.find_one_by("email", data["email"], case_insensitive=True):
            continue
        users.insert(User(avatar=avatar_url(data["name"]), **data))
        created += 1
    return created


def seed_project(session) -> bool:
    projects = Repository(session, Project)
    if projects.find_by_id(DEMO_PROJECT["id"]):
        return False
    projects.insert(Project(**ProjectCreate(**DEMO_PROJECT).model_dump()))
    return True


def main():
    init_db()
    session = SessionLocal()
    try:
        created_users = seed_users(session)
        created_project = seed_project(session)
    finally:
        session.close()

    print(f"Users created: {created_users}")
    print("Demo project created." if created_project else "Demo project already present.")


if __name__ == "__main__":
    main()
