"""Simulated resume analysis.

Stands in for a real analyzer. Everything except ``analyzed_at`` is derived
from the uploaded filename: the score from the sum of its character codes,
and the skill picks from a ``random.Random`` seeded with the same sum, so
the same filename always yields the same analysis.
"""

import random
from datetime import datetime, timezone
from pathlib import PurePath

from careertrack.schemas.resume import Education, Experience, ResumeAnalysis, Skill

SKILL_POOL = (
    Skill(name="TypeScript", category="Technical", proficiency="Advanced"),
    Skill(name="React", category="Technical", proficiency="Advanced"),
    Skill(name="Node.js", category="Technical", proficiency="Intermediate"),
    Skill(name="REST APIs", category="Technical", proficiency="Intermediate"),
    Skill(name="Problem Solving", category="Soft", proficiency="Advanced"),
    Skill(name="Communication", category="Soft", proficiency="Intermediate"),
    Skill(name="Leadership", category="Soft", proficiency="Intermediate"),
)

MAX_SKILLS = 4
BASE_SCORE = 65
SCORE_SPREAD = 31  # scores fall in [65, 95]

SAMPLE_EXPERIENCE = Experience(
    company="Sample Company",
    position="Software Engineer",
    duration="2 years",
    description="Built and maintained web applications with a focus on performance and reliability.",
)

SAMPLE_EDUCATION = Education(
    institution="Sample University",
    degree="Bachelor of Technology",
    field="Computer Science",
    year="2023",
)

STRENGTHS = (
    "Clear role progression",
    "Skills align with common product engineering roles",
    "Strong technical stack coverage",
)

AREAS_FOR_IMPROVEMENT = (
    "Add quantified impact metrics in experience bullets",
    "Include notable projects with measurable outcomes",
    "Refine summary for target job role keywords",
)


def filename_seed(filename: str) -> int:
    return sum(ord(ch) for ch in filename)


def score_for(filename: str) -> int:
    return BASE_SCORE + filename_seed(filename) % SCORE_SPREAD


def pick_skills(seed: int) -> list[Skill]:
    """Pick up to four distinct skills from the pool."""
    rng = random.Random(seed)
    pool_size = len(SKILL_POOL)
    picked: list[Skill] = []
    used: set[int] = set()

    while len(picked) < MAX_SKILLS and len(used) < pool_size:
        index = (seed + rng.randrange(pool_size)) % pool_size
        if index not in used:
            used.add(index)
            picked.append(SKILL_POOL[index])

    return picked


def create_resume_analysis(filename: str, now: datetime | None = None) -> ResumeAnalysis:
    seed = filename_seed(filename)
    base_name = PurePath(filename).stem

    return ResumeAnalysis(
        skills=[skill.model_copy() for skill in pick_skills(seed)],
        experience=[SAMPLE_EXPERIENCE.model_copy()],
        education=[SAMPLE_EDUCATION.model_copy()],
        summary=f"{base_name} demonstrates relevant technical fundamentals and practical project experience.",
        strengths=list(STRENGTHS),
        areas_for_improvement=list(AREAS_FOR_IMPROVEMENT),
        overall_score=score_for(filename),
        analyzed_at=now or datetime.now(timezone.utc),
    )
