"""Initialize the database - creates all tables."""
import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from storyhub.config import settings
from storyhub.database import Base, build_engine
import storyhub.models  # noqa: F401 - registers all models


def init_db():
    print(f"Creating all database tables on {settings.DATABASE_URL} ...")
    engine = build_engine(settings.DATABASE_URL)
    Base.metadata.create_all(bind=engine)
    print("Database initialized successfully.")


if __name__ == "__main__":
    init_db()
