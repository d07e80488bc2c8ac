"""Skills: load SKILL.md playbooks and rank them against a task description."""
from skill_router.skills.loader import (
    ExtraDoc,
    Skill,
    SkillParseError,
    dedupe_skills,
    find_skill,
    load_bundled_skills,
    load_skills,
    load_skills_with_fallback,
    materialize_skills,
    parse_skill,
)
from skill_router.skills.matcher import (
    RankedSkill,
    SkillSignals,
    closest_names,
    compute_signals,
    explain,
    overlap,
    rank,
    similarity,
    total_score,
)
from skill_router.skills.tokens import STOPWORDS, tokenize


def pick_skill(query: str, skills: list[Skill]) -> Skill | None:
    """Return the top-ranked skill for the query, or None when nothing scores above zero."""
    ranked = rank(skills, query)
    if not ranked or ranked[0].score == 0:
        return None
    return ranked[0].skill


__all__ = [
    "ExtraDoc",
    "RankedSkill",
    "STOPWORDS",
    "Skill",
    "SkillParseError",
    "SkillSignals",
    "closest_names",
    "compute_signals",
    "dedupe_skills",
    "explain",
    "find_skill",
    "load_bundled_skills",
    "load_skills",
    "load_skills_with_fallback",
    "materialize_skills",
    "overlap",
    "parse_skill",
    "pick_skill",
    "rank",
    "similarity",
    "tokenize",
    "total_score",
]
