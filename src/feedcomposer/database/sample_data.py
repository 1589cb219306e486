"""Deterministic demo content for a local feedcomposer database."""

from __future__ import annotations

import random
import uuid
from dataclasses import dataclass, field

from feedcomposer.database.models import (
    Comment,
    Company,
    Complaint,
    Reaction,
    Review,
    User,
    Vote,
    now_ms,
)
from feedcomposer.database.queries import (
    insert_comments_batch,
    insert_complaints_batch,
    insert_reactions_batch,
    insert_reviews_batch,
    insert_users_batch,
    insert_votes_batch,
)

_DAY_MS = 24 * 60 * 60 * 1000

_REVIEW_TITLES = [
    "Fast withdrawals, clunky app",
    "Support actually answered",
    "Fees are higher than advertised",
    "Solid for beginners",
    "Verification took a week",
    "Best spreads I have found",
    "Works, but nothing special",
]

_COMPLAINT_TITLES = [
    "Withdrawal stuck for 10 days",
    "Account frozen without notice",
    "Charged twice for one transfer",
    "No reply from support",
    "Card declined abroad",
    "Interest rate changed silently",
]

_CRITERIA = ["fees", "support", "usability", "reliability"]
_REACTIONS = ["like", "insightful", "funny"]


def _rng_id(rng: random.Random) -> str:
    return str(uuid.UUID(int=rng.getrandbits(128), version=4))


@dataclass
class SampleContent:
    """Records generated for one seed run, in insertion order."""

    users: list[User] = field(default_factory=list)
    reviews: list[Review] = field(default_factory=list)
    complaints: list[Complaint] = field(default_factory=list)
    comments: list[Comment] = field(default_factory=list)
    reactions: list[Reaction] = field(default_factory=list)
    votes: list[Vote] = field(default_factory=list)


def generate_sample_content(
    companies: list[Company],
    review_count: int = 40,
    complaint_count: int = 25,
    user_count: int = 8,
    seed: int | None = None,
    days: int = 90,
    now: int | None = None,
) -> SampleContent:
    """
    Generate users, reviews, complaints and engagement rows.

    The same ``seed`` and ``now`` always produce the same content.
    ``created_at`` values fall in the ``days`` before ``now`` (epoch ms).
    """
    if user_count < 1:
        raise ValueError("user_count must be >= 1")

    rng = random.Random(seed)
    if now is None:
        now = now_ms()
    content = SampleContent()
    tag = rng.randrange(16**6)

    for i in range(user_count):
        content.users.append(
            User(
                id=_rng_id(rng),
                email=f"user{i}-{tag:06x}@example.com",
                username=f"user{i}_{tag:06x}",
                verified=rng.random() < 0.3,
                reputation=rng.randint(0, 500),
                created_at=now - days * _DAY_MS,
            )
        )

    def pick_company() -> str | None:
        if not companies or rng.random() < 0.1:
            return None
        return rng.choice(companies).id

    def pick_time() -> int:
        return now - rng.randrange(days * _DAY_MS)

    for _ in range(review_count):
        scores = {criterion: float(rng.randint(1, 5)) for criterion in _CRITERIA}
        content.reviews.append(
            Review(
                id=_rng_id(rng),
                title=rng.choice(_REVIEW_TITLES),
                content="Sample review. " * rng.randint(1, 4),
                overall_score=round(sum(scores.values()) / len(scores), 2),
                criteria_scores=scores,
                status=rng.choices(["APPROVED", "PENDING", "REJECTED"], weights=[8, 1, 1])[0],
                author_id=rng.choice(content.users).id,
                company_id=pick_company(),
                created_at=pick_time(),
            )
        )

    for _ in range(complaint_count):
        content.complaints.append(
            Complaint(
                id=_rng_id(rng),
                title=rng.choice(_COMPLAINT_TITLES),
                content="Sample complaint. " * rng.randint(1, 4),
                status=rng.choice(["OPEN", "IN_PROGRESS", "RESOLVED", "CLOSED"]),
                author_id=rng.choice(content.users).id,
                company_id=pick_company(),
                created_at=pick_time(),
            )
        )

    targets = [("review_id", r.id, r.created_at) for r in content.reviews]
    targets += [("complaint_id", c.id, c.created_at) for c in content.complaints]
    tallies = {target_id: [0, 0] for _, target_id, _ in targets}

    for target_field, target_id, created_at in targets:
        voters = rng.sample(content.users, k=rng.randint(0, min(3, len(content.users))))
        for user in voters:
            vote_type = rng.choice(["UP", "UP", "DOWN"])
            tallies[target_id][0 if vote_type == "UP" else 1] += 1
            content.votes.append(
                Vote(
                    user_id=user.id,
                    vote_type=vote_type,
                    created_at=created_at + 1,
                    **{target_field: target_id},
                )
            )
            if rng.random() < 0.5:
                content.reactions.append(
                    Reaction(
                        user_id=user.id,
                        reaction_type=rng.choice(_REACTIONS),
                        created_at=created_at + 1,
                        **{target_field: target_id},
                    )
                )
        for _ in range(rng.randint(0, 2)):
            content.comments.append(
                Comment(
                    id=_rng_id(rng),
                    content="Sample comment.",
                    author_id=rng.choice(content.users).id,
                    created_at=created_at + 1,
                    **{target_field: target_id},
                )
            )

    # Denormalized counters mirror the generated votes
    for record in [*content.reviews, *content.complaints]:
        record.helpful_count, record.down_vote_count = tallies[record.id]

    return content


def insert_sample_content(content: SampleContent) -> None:
    """Insert generated content, parents before the rows that reference them."""
    insert_users_batch(content.users)
    insert_reviews_batch(content.reviews)
    insert_complaints_batch(content.complaints)
    insert_comments_batch(content.comments)
    insert_reactions_batch(content.reactions)
    insert_votes_batch(content.votes)
