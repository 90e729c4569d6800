
import sys
import os

# Add parent dir to path
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from teamtasker.infrastructure.database import Base, engine

# Register every table on Base.metadata
from teamtasker.domain.models.user import User  # noqa: F401
from teamtasker.domain.models.team import Team  # noqa: F401
from teamtasker.domain.models.team_member import TeamMember  # noqa: F401
from teamtasker.domain.models.task import Task  # noqa: F401
from teamtasker.domain.models.user_session import UserSession  # noqa: F401


def migrate():
    print("Starting database migrations...")
    try:
        Base.metadata.create_all(bind=engine)
    except Exception as e:
        print(f"Migration failed: {e}")
        sys.exit(1)

    for table in Base.metadata.sorted_tables:
        print(f"✓ {table.name} table ready")
    print("Database migrations completed successfully!")


if __name__ == "__main__":
    migrate()
