
import sys
import os
from datetime import datetime, timedelta, timezone

# Add parent dir to path
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from teamtasker.application.services.auth_service import hash_password
from teamtasker.infrastructure.database import Base, SessionLocal, engine
from teamtasker.domain.models.user import User
from teamtasker.domain.models.team import Team
from teamtasker.domain.models.team_member import TeamMember
from teamtasker.domain.models.task import Task
from teamtasker.domain.models.user_session import UserSession  # noqa: F401

SAMPLE_PASSWORD = "password123"

SAMPLE_USERS = [
    ("John Doe", "john@example.com"),
    ("Jane Smith", "jane@example.com"),
    ("Mike Johnson", "mike@example.com"),
]

# team name -> (owner email, member emails)
SAMPLE_TEAMS = {
    "Development Team": ("john@example.com", ["jane@example.com"]),
    "Marketing Team": ("jane@example.com", ["john@example.com", "mike@example.com"]),
    "Design Team": ("mike@example.com", ["john@example.com", "jane@example.com"]),
}

# (title, description, status, assignee email, team name, due in days)
SAMPLE_TASKS = [
    ("Set up CI pipeline", "Run tests on every push", "in-progress", "john@example.com", "Development Team", 3),
    ("Fix login redirect", "Users land on a blank page after login", "todo", "jane@example.com", "Development Team", 1),
    ("Write launch post", None, "todo", "mike@example.com", "Marketing Team", 7),
    ("Plan Q3 campaign", "Budget and channels", "completed", "jane@example.com", "Marketing Team", None),
    ("Refresh style guide", "Update colors and type scale", "todo", None, "Design Team", 14),
]


def seed():
    print("Seeding database...")
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        users = {}
        for name, email in SAMPLE_USERS:
            user = db.query(User).filter(User.email == email).first()
            if user is None:
                user = User(name=name, email=email, password=hash_password(SAMPLE_PASSWORD))
                db.add(user)
                db.flush()
            users[email] = user
        print("✓ Sample users created")

        teams = {}
        for team_name, (owner_email, member_emails) in SAMPLE_TEAMS.items():
            owner = users[owner_email]
            team = db.query(Team).filter(Team.name == team_name, Team.owner_id == owner.id).first()
            if team is None:
                team = Team(name=team_name, owner_id=owner.id)
                db.add(team)
                db.flush()
            teams[team_name] = team

            for email in member_emails:
                member = users[email]
                if db.get(TeamMember, {"user_id": member.id, "team_id": team.id}) is None:
                    db.add(TeamMember(user_id=member.id, team_id=team.id))
        db.flush()
        print("✓ Sample teams and members created")

        now = datetime.now(timezone.utc)
        for title, description, status, assignee, team_name, due_in in SAMPLE_TASKS:
            team = teams[team_name]
            if db.query(Task).filter(Task.title == title, Task.team_id == team.id).first():
                continue
            db.add(Task(
                title=title,
                description=description,
                status=status,
                assigned_to=users[assignee].id if assignee else None,
                team_id=team.id,
                due_date=now + timedelta(days=due_in) if due_in is not None else None,
            ))
        db.commit()
        print("✓ Sample tasks created")
        print(f"Database seeded. Log in as any sample user with password '{SAMPLE_PASSWORD}'.")
    except Exception as e:
        print(f"Seeding failed: {e}")
        db.rollback()
        sys.exit(1)
    finally:
        db.close()


if __name__ == "__main__":
    seed()
