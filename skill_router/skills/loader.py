"""Load skill folders (SKILL.md with YAML frontmatter + extra Markdown docs) from disk or the bundle."""
from collections.abc import Iterable
from dataclasses import dataclass, field
from importlib import resources
from importlib.resources.abc import Traversable
from pathlib import Path

import yaml

from skill_router.logging_utils import get_logger
from skill_router.skills.tokens import tokenize

logger = get_logger(__name__)

SKILL_FILE_NAME = "SKILL.md"
BUNDLED_PACKAGE = "skill_router"
BUNDLED_DIR = "bundled"

_EXPECTED_FRONTMATTER = """Expected format:
---
name: skill-name
description: Short description
tags:
- tag1
- tag2
---"""


class SkillParseError(ValueError):
    """A skill file cannot be decoded, or its frontmatter cannot be turned into a Skill."""


@dataclass(frozen=True)
class ExtraDoc:
    """Additional Markdown file shipped alongside a skill's SKILL.md."""

    name: str
    contents: str


@dataclass(frozen=True)
class Skill:
    """A single skill playbook. Token fields are derived once from the text fields."""

    name: str
    summary: str
    keywords: tuple[str, ...]
    body: str
    extra_docs: tuple[ExtraDoc, ...] = ()
    origin: str = ""
    name_tokens: tuple[str, ...] = field(init=False, repr=False, compare=False)
    summary_tokens: tuple[str, ...] = field(init=False, repr=False, compare=False)
    tag_tokens: tuple[str, ...] = field(init=False, repr=False, compare=False)
    body_tokens: tuple[str, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "keywords", tuple(self.keywords))
        object.__setattr__(self, "extra_docs", tuple(self.extra_docs))
        object.__setattr__(self, "name_tokens", tuple(tokenize(self.name)))
        object.__setattr__(self, "summary_tokens", tuple(tokenize(self.summary)))
        object.__setattr__(
            self, "tag_tokens", tuple(t for tag in self.keywords for t in tokenize(tag))
        )
        object.__setattr__(self, "body_tokens", tuple(tokenize(self.body)))


def _split_frontmatter(raw_text: str) -> tuple[str, str] | None:
    """Split into (frontmatter yaml, body). None if the text has no delimited frontmatter."""
    lines = raw_text.splitlines()
    if not lines or lines[0].strip() != "---":
        return None
    for idx in range(1, len(lines)):
        if lines[idx].strip() == "---":
            yaml_block = "\n".join(lines[1:idx])
            body = "\n".join(lines[idx + 1 :]).strip()
            return yaml_block, body
    return None


def parse_skill(raw_text: str, origin: str, extra_docs: Iterable[ExtraDoc] = ()) -> Skill | None:
    """Parse SKILL.md text. Returns None when the text carries no frontmatter block.
    Raises SkillParseError when the frontmatter exists but is not usable.
    """
    split = _split_frontmatter(raw_text)
    if split is None:
        logger.warning("skill_frontmatter_missing", origin=origin)
        return None
    yaml_block, body = split
    line_count = len(yaml_block.splitlines())
    try:
        meta = yaml.safe_load(yaml_block)
    except yaml.YAMLError as e:
        raise SkillParseError(
            f"Invalid YAML frontmatter in {origin} (lines 2-{line_count + 1}): {e}\n{_EXPECTED_FRONTMATTER}"
        ) from e
    if not isinstance(meta, dict):
        raise SkillParseError(f"Frontmatter in {origin} is not a mapping.\n{_EXPECTED_FRONTMATTER}")
    missing = [k for k in ("name", "description") if meta.get(k) is None]
    if missing:
        raise SkillParseError(
            f"Frontmatter in {origin} is missing: {', '.join(missing)}.\n{_EXPECTED_FRONTMATTER}"
        )
    tags = meta.get("tags")
    if tags is None:
        tags = []
    if not isinstance(tags, list):
        tags = [tags]
    return Skill(
        name=str(meta["name"]),
        summary=str(meta["description"]),
        keywords=tuple(str(t) for t in tags),
        body=body,
        extra_docs=tuple(extra_docs),
        origin=origin,
    )


def _is_skill_file(name: str) -> bool:
    return name.lower() == SKILL_FILE_NAME.lower()


def _read_text(source: Path | Traversable, origin: str) -> str:
    """Read a UTF-8 skill file; undecodable bytes are reported as SkillParseError."""
    try:
        return source.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise SkillParseError(f"Failed to read skill file {origin}: not valid UTF-8 ({e})") from e


def load_extra_docs(folder: Path, skill_path: Path) -> list[ExtraDoc]:
    """All *.md files under folder (recursive) except skill_path and nested SKILL.md files."""
    docs: list[ExtraDoc] = []
    for path in folder.rglob("*.md"):
        if path == skill_path or _is_skill_file(path.name) or not path.is_file():
            continue
        docs.append(
            ExtraDoc(
                name=path.relative_to(folder).as_posix(),
                contents=_read_text(path, str(path)),
            )
        )
    docs.sort(key=lambda d: d.name)
    return docs


def load_skill_md(path: Path) -> Skill | None:
    """Load a single skill from a SKILL.md path, with its sibling docs."""
    raw_text = _read_text(path, str(path))
    extra_docs = load_extra_docs(path.parent, path)
    return parse_skill(raw_text, str(path), extra_docs)


def load_skills(skills_dir: Path) -> list[Skill]:
    """Find SKILL.md files (case-insensitive name) anywhere under skills_dir and parse them.
    Returns [] if skills_dir does not exist or is not a directory.
    """
    directory = Path(skills_dir)
    if not directory.exists() or not directory.is_dir():
        return []
    skills: list[Skill] = []
    for path in sorted(p for p in directory.rglob("*") if p.is_file() and _is_skill_file(p.name)):
        skill = load_skill_md(path)
        if skill is not None:
            skills.append(skill)
    return skills


def _bundled_root() -> Traversable:
    return resources.files(BUNDLED_PACKAGE) / BUNDLED_DIR


def _walk_bundled(node: Traversable, prefix: str, skills: list[Skill]) -> None:
    skill_file: Traversable | None = None
    extras: list[ExtraDoc] = []
    children = sorted(node.iterdir(), key=lambda c: c.name)
    for child in children:
        if not child.is_file():
            continue
        if _is_skill_file(child.name):
            skill_file = child
        elif child.name.lower().endswith(".md"):
            extras.append(
                ExtraDoc(name=child.name, contents=_read_text(child, f"bundled:{prefix}{child.name}"))
            )
    if skill_file is not None:
        extras.sort(key=lambda d: d.name)
        origin = f"bundled:{prefix}{skill_file.name}"
        skill = parse_skill(_read_text(skill_file, origin), origin, extras)
        if skill is not None:
            skills.append(skill)
    for child in children:
        if child.is_dir() and not child.name.startswith("__"):
            _walk_bundled(child, f"{prefix}{child.name}/", skills)


def load_bundled_skills() -> list[Skill]:
    """Skills shipped inside the package (skill_router/bundled)."""
    skills: list[Skill] = []
    _walk_bundled(_bundled_root(), "", skills)
    return skills


def dedupe_skills(skills: list[Skill]) -> list[Skill]:
    """Keep the first skill for each case-insensitive name, preserving order."""
    seen: set[str] = set()
    unique: list[Skill] = []
    for skill in skills:
        key = skill.name.lower()
        if key in seen:
            logger.info("skill_duplicate_dropped", name=skill.name, origin=skill.origin)
            continue
        seen.add(key)
        unique.append(skill)
    return unique


def load_skills_with_fallback(skills_dir: Path) -> list[Skill]:
    """Skills from skills_dir, or the bundled skills when the directory yields none."""
    fs_skills = load_skills(skills_dir) if Path(skills_dir).exists() else []
    if fs_skills:
        source = "filesystem"
        skills = fs_skills
    else:
        source = "bundled"
        skills = load_bundled_skills()
    logger.debug("skills_source", source=source, skills_dir=str(skills_dir), count=len(skills))
    return dedupe_skills(skills)


def _write_tree(node: Traversable, target: Path, force: bool, written: list[Path]) -> None:
    for child in node.iterdir():
        if child.name.startswith("__"):
            continue
        dest = target / child.name
        if child.is_dir():
            _write_tree(child, dest, force, written)
            continue
        if dest.exists() and not force:
            continue
        dest.parent.mkdir(parents=True, exist_ok=True)
        dest.write_bytes(child.read_bytes())
        written.append(dest)


def materialize_skills(target_dir: Path, force: bool = False) -> list[Path]:
    """Copy the bundled skills into target_dir. Existing files are kept unless force."""
    target = Path(target_dir)
    target.mkdir(parents=True, exist_ok=True)
    written: list[Path] = []
    _write_tree(_bundled_root(), target, force, written)
    return sorted(written)


def find_skill(skills: list[Skill], name: str) -> Skill | None:
    """First skill whose name equals or contains name (case-insensitive)."""
    needle = name.lower()
    for skill in skills:
        lowered = skill.name.lower()
        if lowered == needle or needle in lowered:
            return skill
    return None
