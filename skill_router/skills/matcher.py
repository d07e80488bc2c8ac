"""Rank skills against a free-text task: token overlap per field, gated Jaro-Winkler similarity, fixed weights."""
import math
from collections.abc import Sequence
from dataclasses import dataclass
from types import MappingProxyType
from typing import NamedTuple

from rapidfuzz.distance import JaroWinkler

from skill_router.logging_utils import get_logger
from skill_router.skills.loader import Skill
from skill_router.skills.tokens import tokenize

logger = get_logger(__name__)

PHRASE_BONUS = 10
# Similarity only counts with lexical support, or when the raw value clears these.
NAME_SIMILARITY_GATE = 0.92
SUMMARY_SIMILARITY_GATE = 0.94
NAME_SIMILARITY_SCALE = 10
SUMMARY_SIMILARITY_SCALE = 8

WEIGHTS = MappingProxyType(
    {
        "name_hits": 8,
        "summary_hits": 5,
        "tag_hits": 4,
        "body_hits": 1,
        "phrase_bonus": 1,
        "name_similarity": 2,
        "summary_similarity": 1,
    }
)


@dataclass(frozen=True)
class SkillSignals:
    """Per skill/query match signals; feeds the score and the --show explanation."""

    name_hits: int = 0
    summary_hits: int = 0
    tag_hits: int = 0
    body_hits: int = 0
    phrase_bonus: int = 0
    name_similarity: int = 0
    summary_similarity: int = 0

    @property
    def base_hits(self) -> int:
        return self.name_hits + self.summary_hits + self.tag_hits + self.body_hits

    def total_score(self) -> int:
        return total_score(self)


class RankedSkill(NamedTuple):
    score: int
    skill: Skill
    signals: SkillSignals


def overlap(query_tokens: Sequence[str], target_tokens: Sequence[str]) -> int:
    """Count query tokens (repeats included) present in the target token set."""
    target = set(target_tokens)
    return sum(1 for q in query_tokens if q in target)


def similarity(a: str, b: str) -> float:
    """Jaro-Winkler similarity in [0, 1]; 0.0 when either string is empty."""
    if not a or not b:
        return 0.0
    return JaroWinkler.similarity(a, b)


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def compute_signals(skill: Skill, query_tokens: Sequence[str], query_phrase: str) -> SkillSignals:
    """Match signals for one skill. query_phrase is the lowercased raw query."""
    name_hits = overlap(query_tokens, skill.name_tokens)
    summary_hits = overlap(query_tokens, skill.summary_tokens)
    tag_hits = overlap(query_tokens, skill.tag_tokens)
    body_hits = overlap(query_tokens, skill.body_tokens)
    base_hits = name_hits + summary_hits + tag_hits + body_hits

    name_lower = skill.name.lower()
    summary_lower = skill.summary.lower()
    phrase_bonus = 0
    if query_phrase and (query_phrase in name_lower or query_phrase in summary_lower):
        phrase_bonus = PHRASE_BONUS

    name_sim_raw = similarity(name_lower, query_phrase)
    summary_sim_raw = similarity(summary_lower, query_phrase)
    gate = (
        base_hits > 0
        or name_sim_raw >= NAME_SIMILARITY_GATE
        or summary_sim_raw >= SUMMARY_SIMILARITY_GATE
    )
    if gate:
        name_similarity = _round_half_up(name_sim_raw * NAME_SIMILARITY_SCALE)
        summary_similarity = _round_half_up(summary_sim_raw * SUMMARY_SIMILARITY_SCALE)
    else:
        name_similarity = 0
        summary_similarity = 0

    return SkillSignals(
        name_hits=name_hits,
        summary_hits=summary_hits,
        tag_hits=tag_hits,
        body_hits=body_hits,
        phrase_bonus=phrase_bonus,
        name_similarity=name_similarity,
        summary_similarity=summary_similarity,
    )


def total_score(signals: SkillSignals) -> int:
    """Fixed linear combination of the signals (see WEIGHTS)."""
    return sum(weight * getattr(signals, field) for field, weight in WEIGHTS.items())


def rank(skills: Sequence[Skill], query: str) -> list[RankedSkill]:
    """Score every skill against query, highest first.
    Equal scores keep the order of skills as given.
    """
    query_tokens = tokenize(query)
    query_phrase = (query or "").lower()
    ranked = []
    for skill in skills:
        signals = compute_signals(skill, query_tokens, query_phrase)
        ranked.append(RankedSkill(total_score(signals), skill, signals))
    ranked.sort(key=lambda r: -r.score)
    logger.debug(
        "skills_ranked",
        query=query,
        skill_count=len(ranked),
        top_score=ranked[0].score if ranked else None,
    )
    return ranked


def closest_names(skills: Sequence[Skill], query: str, limit: int) -> list[str]:
    """Names most similar to the whole query, for the no-match path. Zero-similarity names are dropped."""
    query_phrase = (query or "").lower()
    scored = [(similarity(s.name.lower(), query_phrase), s.name) for s in skills]
    scored = [(sim, name) for sim, name in scored if sim > 0.0]
    scored.sort(key=lambda pair: -pair[0])
    shortlist = [name for _, name in scored[: max(0, limit)]]
    logger.debug("fallback_shortlist", query=query, names=shortlist)
    return shortlist


def explain(signals: SkillSignals) -> str:
    """Human-readable signal breakdown for the top match."""
    return (
        f"name hits={signals.name_hits}, summary hits={signals.summary_hits}, "
        f"tag hits={signals.tag_hits}, body hits={signals.body_hits}, "
        f"phrase bonus={signals.phrase_bonus}, name similarity={signals.name_similarity}, "
        f"summary similarity={signals.summary_similarity}"
    )


rank_skills = rank
closest_skill_names = closest_names
