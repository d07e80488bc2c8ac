"""Helpers shared by tests."""
from pathlib import Path


def write_skill(
    root: Path,
    folder: str,
    name: str,
    description: str,
    tags: list[str] | None = None,
    body: str = "Playbook body.",
    file_name: str = "SKILL.md",
) -> Path:
    """Write a SKILL.md under root/folder and return its path."""
    skill_dir = root / folder
    skill_dir.mkdir(parents=True, exist_ok=True)
    lines = ["---", f"name: {name}", f"description: {description}"]
    if tags:
        lines.append("tags:")
        lines.extend(f"  - {t}" for t in tags)
    lines.append("---")
    lines.append(body)
    path = skill_dir / file_name
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path
