"""
Programme Model Module

Read-only reference data. Programmes are seeded on startup and used when an
administrator binds a Programme Director to the programme they will monitor.
"""
from typing import Optional
from sqlmodel import SQLModel, Field


PROGRAMME_CATALOGUE = [
    "GSLV",
    "PSLV",
    "SSLV",
    "GAGANYAAN",
    "COMMUNICATION SATELLITES",
    "EARTH OBSERVATION SATELLITES",
    "SCIENCE MISSIONS",
    "NAVIGATION SATELLITES",
    "SPACE EXPLORATION MISSIONS",
    "TECHNOLOGY DEMONSTRATION MISSIONS",
    "USER FUNDED SATTELITES",
]


class Programme(SQLModel, table=True):
    __tablename__ = "programmes"

    id: Optional[int] = Field(default=None, primary_key=True)
    programme_name: str = Field(nullable=False, unique=True)
    description: Optional[str] = None
