import sys
import psycopg2
from sqlalchemy import create_engine
from eventquote.core.security import hash_password
from eventquote.core.config import settings
from eventquote.models.base import Base
import eventquote.models.audit  # noqa: F401
import eventquote.models.employee_type  # noqa: F401
import eventquote.models.global_parameters  # noqa: F401
import eventquote.models.global_settings  # noqa: F401
import eventquote.models.operational_cost_concept  # noqa: F401
import eventquote.models.quotation  # noqa: F401
import eventquote.models.user  # noqa: F401
from urllib.parse import urlparse


def _sync_url() -> str:
    return settings.DATABASE_URL.replace("postgresql+asyncpg://", "postgresql://")


def init_schema() -> None:
    """Create any missing tables (idempotent)."""
    engine = create_engine(_sync_url().replace("postgresql://", "postgresql+psycopg2://"))
    Base.metadata.create_all(bind=engine)
    engine.dispose()


def create_admin_user(email: str, password: str, name: str = None) -> bool:
    try:
        init_schema()
        db_url = urlparse(_sync_url())

        conn = psycopg2.connect(
            host=db_url.hostname or "localhost",
            port=db_url.port or 5432,
            user=db_url.username or "postgres",
            password=db_url.password or "postgres",
            database=db_url.path.lstrip("/") or "postgres"
        )

        cursor = conn.cursor()

        email = email.strip().lower()
        cursor.execute("SELECT id FROM users WHERE email = %s", (email,))
        existing_user = cursor.fetchone()

        if existing_user:
            print(f"Error: User '{email}' already exists")
            cursor.close()
            conn.close()
            return False

        hashed_password = hash_password(password)

        cursor.execute(
            "INSERT INTO users (email, name, password_hash, role) VALUES (%s, %s, %s, %s) RETURNING id",
            (email, name, hashed_password, "ADMIN")
        )

        user_id = cursor.fetchone()[0]
        conn.commit()

        print(f"Admin user '{email}' created successfully")
        print(f"User ID: {user_id}")
        print("Role: admin")

        cursor.close()
        conn.close()
        return True

    except Exception as e:
        print(f"Error creating admin user: {str(e)}")
        return False


def main():
    if len(sys.argv) < 3:
        print("Usage: python create_admin.py <email> <password> [name]")
        sys.exit(1)

    email = sys.argv[1]
    password = sys.argv[2]
    name = sys.argv[3] if len(sys.argv) > 3 else None

    if not email or not password:
        print("Error: email and password cannot be empty")
        sys.exit(1)

    success = create_admin_user(email, password, name)
    sys.exit(0 if success else 1)


if __name__ == "__main__":
    main()
