#!/usr/bin/env python3
"""
Database seeding script for development and testing.
Creates demo users with roles, a project with its crew, scenes,
budget entries and a shoot day.
"""

import asyncio
import sys
from pathlib import Path
from datetime import date

# Add parent directory to path to import our modules
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from nova.database import async_engine, Base, AsyncSessionLocal
from nova.models import (
    BudgetEntry,
    DayScene,
    Profile,
    Project,
    ProjectMember,
    Scene,
    ShootDay,
    User,
)
from nova.schemas.roles import CrewRole
from nova.services.auth_service import AuthService

DEMO_PASSWORD = "nova-demo-123"


async def create_tables():
    """Create all database tables"""
    async with async_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    print("✓ Database tables created")


def _user(email: str, role: CrewRole):
    user = User(email=email, password_hash=AuthService.hash_password(DEMO_PASSWORD))
    user.profile = Profile(email=email, role=role.value)
    return user


async def seed_data():
    """Seed the database with sample data"""
    async with AsyncSessionLocal() as session:
        try:
            # Create users
            producer = _user("producer@nova.film", CrewRole.PRODUCER)
            dop = _user("dop@nova.film", CrewRole.DIRECTOR_OF_PHOTOGRAPHY)
            mixer = _user("sound@nova.film", CrewRole.PRODUCTION_SOUND_MIXER)
            session.add_all([producer, dop, mixer])
            await session.flush()
            print("✓ Created users")

            # Create project and crew
            project = Project(name="Harbor Lights", passkey="lighthouse", creator_id=producer.id)
            session.add(project)
            await session.flush()
            session.add_all([
                ProjectMember(project_id=project.id, user_id=producer.id, role=CrewRole.PRODUCER.value),
                ProjectMember(
                    project_id=project.id,
                    user_id=dop.id,
                    role=CrewRole.DIRECTOR_OF_PHOTOGRAPHY.value,
                ),
                ProjectMember(
                    project_id=project.id,
                    user_id=mixer.id,
                    role=CrewRole.PRODUCTION_SOUND_MIXER.value,
                ),
            ])
            print("✓ Created project")

            # Create scenes
            scene1 = Scene(
                project_id=project.id,
                scene_number=1,
                heading="EXT. HARBOR - DAWN",
                location_type="EXT",
                specific_location="Harbor pier",
                time_of_day="DAWN",
                characters_present="MAYA, OLD SAILOR",
                speaking_roles="MAYA",
                functional_props="Rope, lantern",
                camera_movement="Slow dolly in",
                lighting_mood="Cold blue",
                content="MAYA watches the boats come in.",
            )
            scene2 = Scene(
                project_id=project.id,
                scene_number=2,
                heading="INT. LIGHTHOUSE - NIGHT",
                location_type="INT",
                specific_location="Lighthouse lamp room",
                time_of_day="NIGHT",
                characters_present="MAYA, LEO",
                speaking_roles="MAYA, LEO",
                camera_movement="Handheld",
                lighting_mood="Warm, flickering",
                content="LEO repairs the lamp while MAYA reads the log.",
            )
            session.add_all([scene1, scene2])
            await session.flush()
            print("✓ Created scenes")

            # Create budget entries
            session.add_all([
                BudgetEntry(
                    project_id=project.id,
                    scene_id=scene1.id,
                    department="Camera",
                    submitted_by=dop.id,
                    estimated_cost=1200,
                    actual_cost=1350,
                    proof_reason="Extra crane hour",
                    is_finalized=True,
                ),
                BudgetEntry(
                    project_id=project.id,
                    scene_id=scene2.id,
                    department="Sound",
                    submitted_by=mixer.id,
                    estimated_cost=400,
                    actual_cost=0,
                ),
            ])
            print("✓ Created budget entries")

            # Create shoot day
            day = ShootDay(
                project_id=project.id,
                shoot_date=date(2026, 3, 2),
                notes="Tide is low until 08:00",
            )
            session.add(day)
            await session.flush()
            session.add(DayScene(shoot_day_id=day.id, scene_id=scene1.id, call_time="05:30"))
            print("✓ Created shoot day")

            await session.commit()
            print("\n✅ Database seeding completed successfully!")

            # Print summary
            print("\nSummary:")
            print("  - Users: 3 (password: %s)" % DEMO_PASSWORD)
            print("  - Projects: 1 (passkey: lighthouse)")
            print("  - Scenes: 2")
            print("  - Budget entries: 2")
            print("  - Shoot days: 1")

        except Exception as e:
            await session.rollback()
            print(f"❌ Error seeding database: {e}")
            raise


async def main():
    """Main function"""
    print("Starting database seeding...\n")

    # Optionally create tables first (useful for fresh databases)
    # Uncomment the next line if you want to create tables before seeding
    # await create_tables()

    await seed_data()


if __name__ == "__main__":
    asyncio.run(main())
