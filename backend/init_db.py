"""
Initialize the database.

Run this script once to create the tables:
    python init_db.py
"""

from linkshort.database import engine, Base
from linkshort import models  # noqa: F401  registers the Link table


def init_database():
    """Create all database tables"""
    print("Creating database tables...")
    Base.metadata.create_all(bind=engine)
    print("Database tables created successfully!")


if __name__ == "__main__":
    init_database()

    print("\nYou can now start the server with:")
    print("    uvicorn linkshort.main:app --reload")
