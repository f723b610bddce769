"""초기 데이터 시드 스크립트 — 관리자, 직원, 사용자, 샘플 민원 생성.

Seed script — Creates demo accounts and sample complaints covering every
lifecycle status. Run once against an empty database.

Usage:
    python -m complaint_portal.seed

Creates:
    - 1개 관리자 계정: admin@portal.com / Admin123! (1 admin)
    - 12개 직원 계정 (Plumbing, Electrical, Facility, IT, Cleaning, Security): Staff123!
    - 3개 사용자 계정: User123!
    - 샘플 민원 10건 (Open, Assigned, In-progress, Resolved with and without feedback)
"""

import asyncio
from datetime import datetime, timedelta

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from complaint_portal.database import Base, async_session, engine
from complaint_portal.models.complaint import Complaint
from complaint_portal.models.enums import (
    ComplaintCategory,
    ComplaintPriority,
    ComplaintStatus,
    Role,
)
from complaint_portal.models.user import User
from complaint_portal.services.complaint_lifecycle import compute_deadline
from complaint_portal.utils.password import BCRYPT_ROUNDS, hash_password
from complaint_portal.utils.time import utc_now

ADMIN_PASSWORD = "Admin123!"
STAFF_PASSWORD = "Staff123!"
USER_PASSWORD = "User123!"

# (이름, 이메일, 부서) — Staff roster
STAFF: list[tuple[str, str, str]] = [
    ("Robert Johnson", "robert.johnson@portal.com", "Plumbing"),
    ("Sarah Williams", "sarah.williams@portal.com", "Plumbing"),
    ("Michael Brown", "michael.brown@portal.com", "Electrical"),
    ("Emily Davis", "emily.davis@portal.com", "Electrical"),
    ("James Wilson", "james.wilson@portal.com", "Electrical"),
    ("David Martinez", "david.martinez@portal.com", "Facility"),
    ("Lisa Anderson", "lisa.anderson@portal.com", "Facility"),
    ("Kevin Thompson", "kevin.thompson@portal.com", "IT"),
    ("Anna Garcia", "anna.garcia@portal.com", "IT"),
    ("Maria Santos", "maria.santos@portal.com", "Cleaning"),
    ("Carlos Rivera", "carlos.rivera@portal.com", "Cleaning"),
    ("James Miller", "james.miller@portal.com", "Security"),
]

USERS: list[tuple[str, str]] = [
    ("John Smith", "john.smith@example.com"),
    ("Emma Watson", "emma.watson@example.com"),
    ("Oliver Robinson", "oliver.robinson@example.com"),
]

# 샘플 민원 — 접수 후 경과 시간(hours_ago)과 처리 시간(hours_worked) 기준
SAMPLE_COMPLAINTS: list[dict] = [
    {
        "submitter": "john.smith@example.com",
        "assignee": "robert.johnson@portal.com",
        "title": "Leaking faucet in bathroom",
        "description": "The bathroom faucet on the second floor drips constantly, even when fully closed.",
        "category": ComplaintCategory.PLUMBING,
        "priority": ComplaintPriority.MEDIUM,
        "location": "Block A, 2nd floor washroom",
        "status": ComplaintStatus.RESOLVED,
        "hours_ago": 240,
        "hours_worked": 20,
        "resolution_notes": "Replaced the worn washer and cartridge.",
        "feedback": "Fixed quickly and the plumber was very polite.",
        "feedback_rating": 5,
    },
    {
        "submitter": "emma.watson@example.com",
        "assignee": "david.martinez@portal.com",
        "title": "Broken window lock",
        "description": "The window lock in room 204 is broken and the window cannot be secured.",
        "category": ComplaintCategory.FACILITY,
        "priority": ComplaintPriority.HIGH,
        "location": "Block B, Room 204",
        "status": ComplaintStatus.RESOLVED,
        "hours_ago": 200,
        "hours_worked": 30,
        "resolution_notes": "Installed a new lock assembly.",
        "feedback": "Works now, but took a little longer than expected.",
        "feedback_rating": 4,
    },
    {
        "submitter": "oliver.robinson@example.com",
        "assignee": "maria.santos@portal.com",
        "title": "Spilled paint in corridor",
        "description": "Paint was spilled in the main corridor near the elevators and is spreading.",
        "category": ComplaintCategory.CLEANING,
        "priority": ComplaintPriority.LOW,
        "location": "Block C, ground floor corridor",
        "status": ComplaintStatus.RESOLVED,
        "hours_ago": 120,
        "hours_worked": 6,
        "resolution_notes": "Corridor cleaned and floor polished.",
    },
    {
        "submitter": "john.smith@example.com",
        "assignee": "kevin.thompson@portal.com",
        "title": "Computer running slow",
        "description": "The shared computer in the library takes several minutes to open any program.",
        "category": ComplaintCategory.OTHER,
        "priority": ComplaintPriority.LOW,
        "location": "Library, workstation 3",
        "status": ComplaintStatus.IN_PROGRESS,
        "hours_ago": 48,
        "hours_worked": 8,
        "resolution_notes": "Disk cleanup done, waiting for a memory upgrade.",
    },
    {
        "submitter": "emma.watson@example.com",
        "assignee": "sarah.williams@portal.com",
        "title": "Water heater not working",
        "description": "There has been no hot water in the hostel showers since yesterday morning.",
        "category": ComplaintCategory.PLUMBING,
        "priority": ComplaintPriority.CRITICAL,
        "location": "Hostel 1, shower block",
        "status": ComplaintStatus.IN_PROGRESS,
        "hours_ago": 3,
        "hours_worked": 1,
    },
    {
        "submitter": "oliver.robinson@example.com",
        "assignee": "michael.brown@portal.com",
        "title": "Flickering lights in classroom",
        "description": "The tube lights in classroom 101 flicker all day and give students headaches.",
        "category": ComplaintCategory.ELECTRICAL,
        "priority": ComplaintPriority.MEDIUM,
        "location": "Block A, Room 101",
        "status": ComplaintStatus.ASSIGNED,
        "hours_ago": 20,
    },
    {
        "submitter": "john.smith@example.com",
        "assignee": "james.miller@portal.com",
        "title": "Main gate camera offline",
        "description": "The security camera at the main gate has shown a blank feed for two days.",
        "category": ComplaintCategory.SECURITY,
        "priority": ComplaintPriority.HIGH,
        "location": "Main gate",
        "status": ComplaintStatus.ASSIGNED,
        "hours_ago": 30,
    },
    {
        "submitter": "emma.watson@example.com",
        "title": "Power socket sparking",
        "description": "The wall socket next to the study table sparks whenever a charger is plugged in.",
        "category": ComplaintCategory.ELECTRICAL,
        "priority": ComplaintPriority.CRITICAL,
        "location": "Hostel 2, Room 12",
        "status": ComplaintStatus.OPEN,
        "hours_ago": 1,
    },
    {
        "submitter": "oliver.robinson@example.com",
        "title": "Broken chair in lecture hall",
        "description": "Several chairs in the back row of lecture hall 2 have broken backrests.",
        "category": ComplaintCategory.FACILITY,
        "priority": ComplaintPriority.LOW,
        "location": "Lecture hall 2",
        "status": ComplaintStatus.OPEN,
        "hours_ago": 10,
    },
    {
        "submitter": "john.smith@example.com",
        "title": "Overflowing dustbins",
        "description": "The dustbins outside the cafeteria have not been emptied for three days.",
        "category": ComplaintCategory.CLEANING,
        "priority": ComplaintPriority.MEDIUM,
        "location": "Cafeteria entrance",
        "status": ComplaintStatus.OPEN,
        "hours_ago": 90,
    },
]


def _build_complaint(spec: dict, users: dict[str, User], now: datetime) -> Complaint:
    created_at: datetime = now - timedelta(hours=spec["hours_ago"])
    updated_at: datetime = created_at + timedelta(hours=spec.get("hours_worked", 0))
    assignee: User | None = users[spec["assignee"]] if "assignee" in spec else None
    return Complaint(
        submitter_id=users[spec["submitter"]].id,
        assignee_id=assignee.id if assignee else None,
        title=spec["title"],
        description=spec["description"],
        category=spec["category"],
        priority=spec["priority"],
        location=spec["location"],
        status=spec["status"],
        resolution_notes=spec.get("resolution_notes"),
        feedback=spec.get("feedback"),
        feedback_rating=spec.get("feedback_rating"),
        deadline_at=compute_deadline(spec["priority"], created_at),
        created_at=created_at,
        updated_at=updated_at,
    )


async def seed(
    bind: AsyncEngine = engine,
    session_factory: async_sessionmaker[AsyncSession] = async_session,
    rounds: int = BCRYPT_ROUNDS,
) -> bool:
    """데이터베이스를 초기 데이터로 시드합니다.

    Seed the database with demo accounts and sample complaints.
    Creates tables if they don't exist.

    Idempotent: 사용자가 이미 있으면 건너뜁니다 (Skips when any user exists).

    Returns:
        bool: 시드 수행 여부 (True when data was inserted)
    """
    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with session_factory() as db:
        result = await db.execute(select(User.id).limit(1))
        if result.scalar_one_or_none() is not None:
            print("Already seeded. Skipping.")
            return False

        admin_hash = hash_password(ADMIN_PASSWORD, rounds=rounds)
        staff_hash = hash_password(STAFF_PASSWORD, rounds=rounds)
        user_hash = hash_password(USER_PASSWORD, rounds=rounds)

        accounts: list[User] = [
            User(name="Admin User", email="admin@portal.com", password_hash=admin_hash, role=Role.ADMIN),
        ]
        accounts += [
            User(name=name, email=email, password_hash=staff_hash, role=Role.STAFF, department=department)
            for name, email, department in STAFF
        ]
        accounts += [
            User(name=name, email=email, password_hash=user_hash, role=Role.USER)
            for name, email in USERS
        ]
        db.add_all(accounts)
        await db.flush()  # flush로 user.id 생성 (Flush to generate user ids)

        by_email: dict[str, User] = {user.email: user for user in accounts}
        now: datetime = utc_now()
        complaints: list[Complaint] = [_build_complaint(spec, by_email, now) for spec in SAMPLE_COMPLAINTS]
        db.add_all(complaints)
        await db.commit()

        print("Seed complete!")
        print(f"  Admin:      admin@portal.com / {ADMIN_PASSWORD}")
        print(f"  Staff:      {len(STAFF)} accounts / {STAFF_PASSWORD}")
        print(f"  Users:      {len(USERS)} accounts / {USER_PASSWORD}")
        print(f"  Complaints: {len(complaints)}")
        return True


if __name__ == "__main__":
    asyncio.run(seed())
