"""Seeding script: a supervisor account, default settings, teachers and evaluations."""

import argparse
import asyncio
import logging
import random
import sys
from datetime import date, datetime, timedelta, timezone
from pathlib import Path

# Add the project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from faker import Faker
from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession

from evalboard.auth.jwt import get_password_hash
from evalboard.core.database import async_session_maker, init_db
from evalboard.core.logging import setup_logging
from evalboard.models.enums import EvaluationStatus, SettingKey, UserRole
from evalboard.models.evaluation import Evaluation
from evalboard.models.teacher import Teacher
from evalboard.models.user import User
from evalboard.repositories.setting import SettingRepository
from evalboard.repositories.teacher import TeacherRepository
from evalboard.repositories.user import UserRepository
from evalboard.schemas.setting import GeneralSettings, NotificationSettings
from evalboard.utils.categories import active_categories, default_category_dicts, load_categories

logger = logging.getLogger("seed")

SUPERVISOR_EMAIL = "supervisor@school.example"
SUPERVISOR_PASSWORD = "@Password123"
TEACHER_PASSWORD = "@Teacher123"

DEPARTMENTS = {
    "Sciences": ["Physics", "Chemistry", "Biology"],
    "Mathematics": ["Mathematics", "Statistics"],
    "Languages": ["Arabic", "English"],
    "Humanities": ["History", "Geography"],
}


class DataSeeder:
    """Creates a small, realistic data set for local development."""

    def __init__(self, session: AsyncSession, teacher_count: int = 12, seed: int = 42):
        self.session = session
        self.user_repo = UserRepository(session)
        self.teacher_repo = TeacherRepository(session)
        self.setting_repo = SettingRepository(session)
        self.teacher_count = teacher_count
        self.fake = Faker("en_US")
        self.fake.seed_instance(seed)
        self.random = random.Random(seed)

    async def create_supervisor(self) -> User:
        existing = await self.user_repo.get_by_email(SUPERVISOR_EMAIL)
        if existing:
            logger.info(f"Supervisor {SUPERVISOR_EMAIL} already exists")
            return existing

        user = await self.user_repo.create(
            email=SUPERVISOR_EMAIL,
            hashed_password=get_password_hash(SUPERVISOR_PASSWORD),
            role=UserRole.SUPERVISOR,
            name="School Supervisor",
        )
        logger.info(f"Created supervisor: {user.email}")
        return user

    async def create_settings(self) -> None:
        await self.setting_repo.merge(SettingKey.GENERAL, GeneralSettings(school_name="Demo School").model_dump(mode="json"))
        await self.setting_repo.merge(SettingKey.EVALUATION, {"categories": default_category_dicts()})
        await self.setting_repo.merge(SettingKey.NOTIFICATIONS, NotificationSettings().model_dump(mode="json"))
        logger.info("Default settings stored")

    async def create_teachers(self) -> list:
        teachers = []
        hashed = get_password_hash(TEACHER_PASSWORD)
        for _ in range(self.teacher_count):
            department = self.random.choice(list(DEPARTMENTS))
            name = self.fake.name()
            email = f"{self.fake.unique.user_name()}@school.example"
            birth_date = self.fake.date_of_birth(minimum_age=25, maximum_age=60)
            join_date = self.fake.date_between(start_date=birth_date + timedelta(days=22 * 365), end_date=date.today())

            user = self.user_repo.add(email=email, hashed_password=hashed, role=UserRole.TEACHER, name=name)
            await self.session.flush()
            teacher = self.teacher_repo.add(user, {
                "name": name,
                "subject": self.random.choice(DEPARTMENTS[department]),
                "department": department,
                "phone": self.fake.phone_number()[:50],
                "join_date": join_date,
                "birth_date": birth_date,
                "experience": f"{date.today().year - join_date.year} years",
                "education": self.random.choice(["BSc", "BA", "MSc", "MA", "PhD"]),
                "bio": self.fake.sentence(nb_words=12),
            })
            teachers.append(teacher)

        await self.session.commit()
        logger.info(f"Created {len(teachers)} teachers")
        return teachers

    async def create_evaluations(self, teachers: list, evaluator: User) -> int:
        categories = active_categories(load_categories(None))
        now = datetime.now(timezone.utc)
        created = 0
        for teacher in teachers:
            # Each teacher has a base level so rankings differ
            level = self.random.randint(2, 5)
            for _ in range(self.random.randint(1, 4)):
                sections = {"classroom": {}, "student": {}, "professional": {}}
                for category in categories:
                    score = min(5, max(1, level + self.random.choice([-1, 0, 0, 1])))
                    sections[category.section][category.key] = {"score": score, "notes": ""}
                self.session.add(Evaluation(
                    teacher_id=teacher.id,
                    evaluator_id=evaluator.id,
                    status=EvaluationStatus.SUBMITTED if self.random.random() > 0.15 else EvaluationStatus.DRAFT,
                    sections=sections,
                    final_notes=self.fake.sentence(nb_words=8),
                    created_at=now - timedelta(days=self.random.randint(0, 330)),
                ))
                created += 1

        await self.session.commit()
        logger.info(f"Created {created} evaluations")
        return created

    async def seed(self) -> None:
        supervisor = await self.create_supervisor()
        await self.create_settings()
        teachers = await self.create_teachers()
        await self.create_evaluations(teachers, supervisor)

    async def clear(self) -> None:
        """Delete every row created by the seeder (and anything else)."""
        await self.session.execute(delete(Evaluation))
        await self.session.execute(delete(Teacher))
        await self.session.execute(delete(User))
        await self.session.commit()
        await self.setting_repo.delete_all()
        logger.info("All data cleared")


async def main() -> int:
    parser = argparse.ArgumentParser(description="Seed the evaluation dashboard database")
    parser.add_argument("action", choices=["up", "down"], help="up: create data, down: clear data")
    parser.add_argument("--teachers", type=int, default=12, help="Number of teachers to create")
    args = parser.parse_args()

    setup_logging(to_file=False)
    await init_db()

    async with async_session_maker() as session:
        seeder = DataSeeder(session, teacher_count=args.teachers)
        try:
            if args.action == "down":
                await seeder.clear()
            else:
                await seeder.seed()
        except Exception as e:
            await session.rollback()
            logger.error(f"Seeding failed: {e}")
            return 1

    logger.info("Done")
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
