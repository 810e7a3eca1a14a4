import sys
import os
from datetime import datetime
from sqlmodel import Session, select

# Add current directory to path
sys.path.append(os.getcwd())

from pms_dash.db.session import engine, init_db
from pms_dash.models import RequestStatus, User, UserRole
from pms_dash.core.security import get_password_hash


def create_initial_user():
    print("--- Initial Admin Creation ---")

    employee_code = os.environ.get("PMS_ADMIN_CODE", "ADMIN001")
    password = os.environ.get("PMS_ADMIN_PASSWORD", "adminpassword")
    full_name = "System Administrator"

    init_db()

    with Session(engine) as session:
        # Check if user already exists
        statement = select(User).where(User.employee_code == employee_code)
        user = session.exec(statement).first()

        if user:
            print(f"User with employee code {employee_code} already exists.")
            return

        print(f"Creating admin {employee_code}...")
        # Admins cannot register themselves, so this account is approved directly
        db_user = User(
            employee_code=employee_code,
            password=get_password_hash(password),
            full_name=full_name,
            role=UserRole.ADMIN,
            approval_status=RequestStatus.APPROVED,
            approved_at=datetime.utcnow().isoformat(),
        )
        session.add(db_user)
        session.commit()
        print("Initial admin created successfully!")
        print(f"Employee code: {employee_code}")
        print(f"Password: {password}")


if __name__ == "__main__":
    create_initial_user()
