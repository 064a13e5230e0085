# reset_db.py
import argparse

from app.models import database  # Make sure this imports your Base
from app.models.database import SessionLocal, engine
from app.errors import ConflictError
from app.repositories.user_repository import SqlAlchemyUserRepository
from app.services.user_store import UserStore

DEMO_EMAIL = "test@clarity.com"
DEMO_PASSWORD = "password123"


def seed_demo_user():
    db = SessionLocal()
    try:
        UserStore(SqlAlchemyUserRepository(db)).create_user(DEMO_EMAIL, DEMO_PASSWORD, "Test", "User")
        print("✅ Test user created")
        print(f"   Email: {DEMO_EMAIL}")
        print(f"   Password: {DEMO_PASSWORD}")
    except ConflictError:
        print("ℹ️ Test user already exists")
    finally:
        db.close()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Drop and recreate the Clarity database tables")
    parser.add_argument("--seed", action="store_true", help="Create the demo account after reset")
    args = parser.parse_args()

    print("⚠️ Dropping all existing tables...")
    database.Base.metadata.drop_all(bind=engine)

    print("✅ Recreating tables from models...")
    database.init_db()

    if args.seed:
        seed_demo_user()

    print("✅ Database reset complete.")
