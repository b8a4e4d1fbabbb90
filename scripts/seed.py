"""Fill a development database with users, events and comments."""
import argparse
import asyncio
import random
import time
from datetime import datetime, timedelta, timezone

from ewm.database import Base, async_session, engine
from ewm.models import Comment, Event, EventState, User

TOPICS = ["jazz night", "board games", "city walk", "photo tour", "hackathon",
          "book club", "wine tasting", "yoga in the park", "film screening"]

PHRASES = ["Great event, count me in!", "Is there parking nearby?",
           "Had a great time last year.", "Can I bring a friend?",
           "What time does it end?", "Looks great, see you there."]


async def seed(small: bool = False):
    num_users = 10 if small else 200
    num_events = 30 if small else 2000
    max_comments = 3 if small else 10

    print(f"Seeding: {num_users} users, {num_events} events, up to {max_comments} comments per event")
    start = time.perf_counter()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)

    async with async_session() as session:
        users = [
            User(name=f"User {i}", email=f"user_{i:04d}@example.com")
            for i in range(num_users)
        ]
        session.add_all(users)
        await session.flush()
        print(f"  Created {len(users)} users")

        events = []
        for i in range(num_events):
            created = datetime.now(timezone.utc) - timedelta(days=random.randint(0, 180))
            # 80% published, the rest pending or canceled
            roll = random.random()
            state = (
                EventState.PUBLISHED if roll < 0.8
                else EventState.PENDING if roll < 0.9
                else EventState.CANCELED
            )
            events.append(Event(
                title=f"{random.choice(TOPICS).title()} #{i}",
                annotation=f"Join us for a {random.choice(TOPICS)} with friends and neighbours.",
                state=state,
                created_on=created,
                published_on=created + timedelta(hours=1) if state == EventState.PUBLISHED else None,
                initiator_id=random.choice(users).id,
            ))
        session.add_all(events)
        await session.flush()
        print(f"  Created {len(events)} events")

        total_comments = 0
        for event in events:
            if event.state != EventState.PUBLISHED:
                continue
            for _ in range(random.randint(0, max_comments)):
                session.add(Comment(
                    message=random.choice(PHRASES),
                    author_id=random.choice(users).id,
                    event_id=event.id,
                ))
                total_comments += 1
        await session.commit()

    elapsed = time.perf_counter() - start
    print(f"\nSeeding complete in {elapsed:.1f}s ({total_comments} comments)")


def main():
    parser = argparse.ArgumentParser(description="Seed the ewm database")
    parser.add_argument("--small", action="store_true", help="Use a small dataset")
    args = parser.parse_args()
    asyncio.run(seed(small=args.small))


if __name__ == "__main__":
    main()
