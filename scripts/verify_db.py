import sys
import os
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

# Add current directory to path so we can import pms_dash
sys.path.append(os.getcwd())

from pms_dash.db.session import engine, init_db
from pms_dash.models import Programme, Project, User


def verify_database():
    print("--- Database Verification ---")
    try:
        # This will create tables if they don't exist
        print("Attempting to create tables...")
        init_db()
        print("Table creation/verification successful.")

        with Session(engine) as session:
            users = len(session.exec(select(User)).all())
            projects = len(session.exec(select(Project)).all())
            programmes = len(session.exec(select(Programme)).all())
            print("Database connection test: SUCCESS")
            print(f"Users: {users}, Projects: {projects}, Programmes: {programmes}")

    except SQLAlchemyError as e:
        print("Database connection test: FAILED")
        print(f"Error: {e}")
        if "sshtunnel" in str(e).lower():
            print("\nTIP: Make sure your SSH credentials in .env are correct and you are not blocked by a firewall.")
        elif "mysql" in str(e).lower():
            print("\nTIP: Ensure the database server is running and the user has correct permissions.")
        sys.exit(1)


if __name__ == "__main__":
    verify_database()
