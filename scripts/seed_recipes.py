import sys
import os

# Add project root to sys.path
sys.path.append(os.path.join(os.path.dirname(__file__), "../"))

from recipebox.db import SessionLocal
from recipebox.routers.dev import seed_sample_recipes
from recipebox.settings import settings


def seed_recipes():
    print(f"Connecting to {settings.database_url}...")
    session = SessionLocal()()

    try:
        created, skipped = seed_sample_recipes(session)
        print(f"Seed complete: {created} created, {skipped} already present.")
    except Exception as e:
        session.rollback()
        print(f"Error: {e}")
        raise
    finally:
        session.close()


if __name__ == "__main__":
    seed_recipes()
