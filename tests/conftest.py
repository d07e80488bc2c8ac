"""Pytest configuration and shared fixtures."""
from pathlib import Path

import pytest
import structlog

from skill_router.skills import Skill
from tests.helpers import write_skill


@pytest.fixture(autouse=True)
def reset_structlog():
    """Undo configure_logging so no test writes to another test's captured stream."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def make_skill():
    """Factory for in-memory skills."""

    def _make(name: str, summary: str = "", keywords=(), body: str = "") -> Skill:
        return Skill(name=name, summary=summary, keywords=tuple(keywords), body=body)

    return _make


@pytest.fixture
def sample_skills(make_skill) -> list[Skill]:
    """Small corpus covering name, tag, summary and body-only matches."""
    return [
        make_skill(
            "brainstorming",
            "Refine rough ideas into a design through questions",
            ["ideas", "refine"],
            "Ask one question at a time and confirm each section.",
        ),
        make_skill(
            "frontend-design",
            "Build distinctive web pages and components",
            ["frontend", "interface", "css"],
            "Pick a visual direction and keep it consistent.",
        ),
        make_skill(
            "release-notes",
            "Summarize merged changes for a release",
            ["changelog"],
            "Mention frontend interface design changes under a separate heading.",
        ),
        make_skill(
            "ios-ux-design",
            "Review iPhone app screens against platform guidelines",
            ["ios", "ux", "mobile"],
            "Audit each screen and propose concrete fixes.",
        ),
        make_skill(
            "systematic-debugging",
            "Systematic debugging of failures before proposing a fix",
            ["debugging", "bugs"],
            "Reproduce, compare, hypothesize, then fix the root cause.",
        ),
    ]


@pytest.fixture
def skills_dir(tmp_path: Path) -> Path:
    """A skills directory with two skills, one carrying extra docs."""
    root = tmp_path / "skills"
    write_skill(
        root,
        "alpha",
        "alpha-skill",
        "First test skill",
        ["one", "two", "three"],
        body="Alpha body text.",
    )
    beta = write_skill(
        root,
        "nested/beta",
        "beta-skill",
        "Second test skill",
        ["four"],
        body="Beta body text.",
    )
    (beta.parent / "notes.md").write_text("# Notes\nBeta notes.\n", encoding="utf-8")
    (beta.parent / "refs").mkdir()
    (beta.parent / "refs" / "deep.md").write_text("Deep reference.\n", encoding="utf-8")
    return root
