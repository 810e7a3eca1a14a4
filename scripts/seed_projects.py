import sys
import os
from sqlmodel import Session, select

# Add current directory to path
sys.path.append(os.getcwd())

from pms_dash.db.session import engine, init_db
from pms_dash.models import Project, ProjectCategory, ProjectStatus
from pms_dash.schemas.project import ProjectCreate

SAMPLE_PROJECTS = [
    {
        "name": "GSLV Mark IV Prototype",
        "category": ProjectCategory.LAUNCH_VEHICLES,
        "totalBudget": 120000000,
        "expenditure": 45000000,
        "status": ProjectStatus.ON_TRACK,
        "description": "Development of the next generation heavy lift launch vehicle with reusable first stage.",
        "milestones": [
            {"id": "m1", "title": "Propulsion Design", "dueDate": "2024-03-01", "status": "Completed", "completedDate": "2024-02-25"},
            {"id": "m2", "title": "Static Fire Test", "dueDate": "2024-06-15", "status": "In Progress"},
            {"id": "m3", "title": "Avionics Integration", "dueDate": "2024-09-01", "status": "Pending"},
        ],
    },
    {
        "name": "Orbiter-7 Mesh Network",
        "category": ProjectCategory.SATELLITE_COMM,
        "totalBudget": 85000000,
        "expenditure": 78000000,
        "status": ProjectStatus.DELAYED,
        "description": "Low-latency global communication network utilizing 12 synchronized micro-satellites.",
        "delayRemarks": "Supply chain issues delayed the acquisition of radiation-hardened processors by 4 months.",
        "milestones": [
            {"id": "m4", "title": "Satellite Bus Assembly", "dueDate": "2023-11-20", "status": "Completed", "completedDate": "2023-12-10"},
            {"id": "m5", "title": "Transponder Testing", "dueDate": "2024-01-15", "status": "In Progress"},
        ],
    },
    {
        "name": "Deep Space Antenna Array",
        "category": ProjectCategory.INFRASTRUCTURE_RD,
        "totalBudget": 45000000,
        "expenditure": 12000000,
        "status": ProjectStatus.AT_RISK,
        "description": "Ground-based upgrade for the interplanetary communication network.",
        "milestones": [
            {"id": "m6", "title": "Site Selection", "dueDate": "2024-02-01", "status": "Completed"},
            {"id": "m7", "title": "Foundation Excavation", "dueDate": "2024-05-10", "status": "Pending"},
        ],
    },
    {
        "name": "Commsat-5 Commercial Lease",
        "category": ProjectCategory.USER_FUNDED,
        "totalBudget": 30000000,
        "expenditure": 28500000,
        "status": ProjectStatus.COMPLETED,
        "description": "Commercial payload delivery and operational support for regional telco.",
        "milestones": [
            {"id": "m8", "title": "Customer Handover", "dueDate": "2023-12-01", "status": "Completed"},
        ],
    },
    {
        "name": "Quantum Key Distribution Lab",
        "category": ProjectCategory.INFRASTRUCTURE_RD,
        "totalBudget": 15000000,
        "expenditure": 4000000,
        "status": ProjectStatus.ON_TRACK,
        "description": "Securing satellite communications using quantum cryptography protocols.",
        "milestones": [
            {"id": "m9", "title": "Fiber Link Install", "dueDate": "2024-04-10", "status": "In Progress"},
        ],
    },
]


def seed_projects():
    print("--- Sample Project Seeding ---")
    init_db()

    with Session(engine) as session:
        if session.exec(select(Project)).first() is not None:
            print("Projects already present, nothing to do.")
            return

        for raw in SAMPLE_PROJECTS:
            project_in = ProjectCreate.model_validate(raw)
            session.add(Project(**project_in.model_dump(mode="json")))
            print(f"  + {project_in.name} ({project_in.category.value})")
        session.commit()
        print(f"Seeded {len(SAMPLE_PROJECTS)} projects.")


if __name__ == "__main__":
    seed_projects()
