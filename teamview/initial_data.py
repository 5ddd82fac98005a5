# teamview/initial_data.py

import logging
from sqlalchemy.orm import Session
from teamview.database import SessionLocal, engine
from teamview.crud.user import create_user as crud_create_user, get_user_by_username
from teamview.core.settings import settings
from teamview.core.exceptions import UserValidationError
import teamview.models  # noqa: F401  регистрирует таблицы в Base.metadata
from teamview.models.base import Base

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("TeamView.InitialData")

def create_tables() -> None:
    logger.info("Creating database tables...")
    Base.metadata.create_all(bind=engine)

def create_initial_admin_user(db: Session) -> None:
    logger.info("Checking if initial admin user needs to be created...")
    superuser_username = settings.FIRST_SUPERUSER_USERNAME
    if not superuser_username or not settings.FIRST_SUPERUSER_PASSWORD:
        logger.info("FIRST_SUPERUSER_USERNAME/PASSWORD not set. Skipping admin user creation.")
        return

    admin_user = get_user_by_username(db, username=superuser_username)
    if not admin_user:
        logger.info(f"Admin user '{superuser_username}' not found. Creating...")
        user_data = {
            "username": superuser_username,
            "email": settings.FIRST_SUPERUSER_EMAIL or f"{superuser_username}@localhost",
            "password": settings.FIRST_SUPERUSER_PASSWORD,
            "full_name": "Admin User",
            "is_active": True,
            "is_superuser": True,
            "roles": ["admin", "superuser"],
        }
        try:
            crud_create_user(db=db, data=user_data)
            logger.info(f"Admin user '{superuser_username}' created successfully.")
        except UserValidationError as e:
            logger.error(f"Failed to create admin user: {e}")
    else:
        logger.info(f"Admin user '{superuser_username}' already exists. No action taken.")

def main() -> None:
    logger.info("Initializing initial data (tables, admin user)...")
    create_tables()
    db = SessionLocal()
    try:
        create_initial_admin_user(db)
    finally:
        db.close()
    logger.info("Finished initial data setup.")

if __name__ == "__main__":
    main()
