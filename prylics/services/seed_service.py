"""Demo content written on first start and the featured crowdfunding campaigns."""
from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone

from ..config import get_settings
from ..schemas import Funding, FundingCampaign, Post, UserProfile
from .entity_store import INITIAL_POSTS, KNOWN_USERS, EntityStore
from .user_directory import profile_url_for

logger = logging.getLogger(__name__)


def _author(uid: str, name: str, hint: str) -> UserProfile:
    return UserProfile(
        uid=uid,
        name=name,
        avatar_url=get_settings().placeholder_avatar_url,
        profile_url=profile_url_for(uid),
        data_ai_hint=hint,
    )


def build_demo_posts(now: datetime | None = None) -> list[Post]:
    now = now or datetime.now(timezone.utc)
    image = "https://placehold.co/600x400.png"
    reed = _author("evelyn-reed-author-id", "Dr. Evelyn Reed", "female scientist portrait")
    tanaka = _author("kenji-tanaka-author-id", "Dr. Kenji Tanaka", "male engineer portrait")
    ramirez = _author("sofia-ramirez-author-id", "Sofia Ramirez", "female student portrait")
    carter = _author("ben-carter-author-id", "Dr. Ben Carter", "male astronomer portrait")
    return [
        Post(
            id="1",
            author=reed,
            creator_id=reed.uid,
            type="research",
            timestamp="2 hours ago",
            created_at=now - timedelta(hours=2),
            content=(
                "Just published our findings on a new enzyme that breaks down plastics at room temperature. "
                "We're seeking funding to scale up production and run larger trials. This could be a huge step "
                "forward for recycling. Full paper linked in my bio! #Biotechnology #Sustainability"
            ),
            image_url=image,
            image_ai_hint="plastic bottles",
            tags=["Biotechnology", "Sustainability", "Recycling"],
            likes=302,
            funding=Funding(goal=50000, raised=12500),
        ),
        Post(
            id="2",
            author=tanaka,
            creator_id=tanaka.uid,
            type="idea",
            timestamp="1 day ago",
            created_at=now - timedelta(days=1),
            content=(
                "What if we used drone swarms for reforestation? They could plant seeds in hard-to-reach areas, "
                "like after a wildfire. Each drone could carry hundreds of seed pods and use mapping data to plant "
                "them in the best spots. #Drones #Reforestation"
            ),
            image_url=image,
            image_ai_hint="drone forest",
            tags=["Drones", "Reforestation", "ClimateAction"],
            likes=521,
        ),
        Post(
            id="3",
            author=ramirez,
            creator_id=ramirez.uid,
            type="question",
            timestamp="2 days ago",
            created_at=now - timedelta(days=2),
            content=(
                "I'm a grad student working with large language models. How do you all handle ethical issues like "
                "bias in training data? I'm looking for practical strategies to make sure my models are as fair as "
                "possible. Any advice or good papers to read? #AIethics #LLM #MachineLearning"
            ),
            image_url=image,
            image_ai_hint="abstract data",
            tags=["AIethics", "LLM", "MachineLearning"],
            likes=215,
        ),
        Post(
            id="4",
            author=carter,
            creator_id=carter.uid,
            type="research",
            timestamp="4 days ago",
            created_at=now - timedelta(days=4),
            content=(
                "The latest images from the Webb Telescope are stunning! We're seeing galaxies that are older than "
                "we thought possible. This picture shows a galaxy cluster whose light has traveled for over 13 "
                "billion years to reach us. #JWST #Space #Cosmology"
            ),
            image_url=image,
            image_ai_hint="galaxy cluster",
            tags=["JWST", "Space", "Cosmology"],
            likes=1200,
        ),
    ]


FEATURED_CAMPAIGNS: tuple[FundingCampaign, ...] = (
    FundingCampaign(
        id="1",
        title="Accelerating mRNA Vaccine Development",
        description=(
            "We are developing a new platform to rapidly create and test mRNA vaccines for emerging infectious "
            "diseases. Our goal is to reduce development time from months to weeks."
        ),
        image_url="https://placehold.co/600x400.png",
        image_ai_hint="dna helix lab",
        funding_goal=150000,
        funding_raised=85000,
        circle_name="AI in Medicine",
    ),
    FundingCampaign(
        id="2",
        title="Open-Source Carbon Capture Device",
        description=(
            "This project aims to design and build a low-cost, open-source direct air capture (DAC) device that "
            "can be built by individuals and communities to combat climate change."
        ),
        image_url="https://placehold.co/600x400.png",
        image_ai_hint="air filters industrial",
        funding_goal=75000,
        funding_raised=32000,
        circle_name="Sustainable Agriculture",
    ),
    FundingCampaign(
        id="3",
        title="Mapping the Brain's Neural Connections",
        description=(
            "By leveraging advanced imaging techniques and machine learning, we are creating the most detailed "
            "map of the human brain's neural pathways to date. This will unlock new insights into neurological "
            "disorders."
        ),
        image_url="https://placehold.co/600x400.png",
        image_ai_hint="brain mri scan",
        funding_goal=500000,
        funding_raised=450000,
        circle_name="Neuroscience Collective",
    ),
    FundingCampaign(
        id="4",
        title="Quantum Entanglement Communication",
        description=(
            "We are building a prototype for a secure communication system using the principles of quantum "
            "entanglement, making it virtually unhackable. This could revolutionize data security."
        ),
        image_url="https://placehold.co/600x400.png",
        image_ai_hint="quantum computer",
        funding_goal=200000,
        funding_raised=98000,
        circle_name="Quantum Computing",
    ),
)


def seed_initial_data(store: EntityStore) -> bool:
    """Write demo posts and their authors when those keys have never been written."""

    seeded = False
    posts = build_demo_posts()
    if not store.exists(INITIAL_POSTS.key):
        store.save(INITIAL_POSTS, posts)
        seeded = True
    if not store.exists(KNOWN_USERS.key):
        authors: dict[str, UserProfile] = {}
        for post in posts:
            authors.setdefault(post.author.uid, post.author)
        store.save(KNOWN_USERS, list(authors.values()))
        seeded = True
    if seeded:
        logger.info("Seeded demo data")
    return seeded


__all__ = ["FEATURED_CAMPAIGNS", "build_demo_posts", "seed_initial_data"]
