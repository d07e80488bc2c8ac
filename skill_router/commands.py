"""Command implementations for the CLI. Each writes to `out` (stdout by default)."""
import json
import sys
from pathlib import Path
from typing import TextIO

from skill_router.config import FALLBACK_LIMIT
from skill_router.logging_utils import get_logger, log_pick
from skill_router.skills import Skill, closest_names, explain, find_skill, rank

logger = get_logger(__name__)


def separator() -> str:
    return "-" * 40


def clip_summary(text: str, limit: int) -> str:
    """Clip text to limit characters, marking the cut with '...'."""
    if len(text) <= limit:
        return text
    return text[:limit] + "..."


def _print_extra_docs(skill: Skill, out: TextIO) -> None:
    for extra in skill.extra_docs:
        print(f"\n{separator()} {extra.name}\n{extra.contents.strip()}\n", file=out)


def cmd_list(
    skills: list[Skill],
    brief: bool = False,
    verbose: bool = False,
    as_json: bool = False,
    clip: int = 80,
    out: TextIO | None = None,
) -> None:
    out = out or sys.stdout
    if as_json:
        print(json.dumps([s.name for s in skills]), file=out)
        return
    for skill in skills:
        if brief:
            print(f"- {skill.name}", file=out)
        elif verbose:
            print(f"- {skill.name} — {skill.summary}", file=out)
        else:
            print(f"- {skill.name} — {clip_summary(skill.summary, clip)}", file=out)


def cmd_pick(
    skills: list[Skill],
    query: str,
    top: int = 3,
    show: bool = False,
    out: TextIO | None = None,
) -> None:
    """Print the best matches for query, or a closest-name shortlist when nothing scores."""
    out = out or sys.stdout
    ranked = rank(skills, query)

    if ranked and ranked[0].score == 0:
        shortlist = closest_names(skills, query, FALLBACK_LIMIT)
        log_pick(logger, query, None, 0, fallback=True)
        names = ", ".join(shortlist) if shortlist else "(no close names found)"
        print(
            f"No good skill match for '{query}'. Try a broader or simpler description.\n"
            f"Closest skill names: {names}",
            file=out,
        )
        return

    if ranked:
        log_pick(logger, query, ranked[0].skill.name, ranked[0].score, fallback=False)

    shown = False
    for idx, (score, skill, signals) in enumerate(ranked[: max(0, top)]):
        print(f"{idx + 1}. {skill.name} (score: {score}) — {skill.summary}", file=out)
        if show and idx == 0:
            print(f"\n{separator()}\n{skill.body.strip()}\n", file=out)
            print(f"Top match reasoning: {explain(signals)}", file=out)
            _print_extra_docs(skill, out)
            shown = True

    if show and not shown:
        print("No matches to display; try a broader query.", file=out)


def cmd_show(skills: list[Skill], name: str, out: TextIO | None = None) -> bool:
    """Print a skill's playbook and extra docs. Returns False when no skill matches name."""
    out = out or sys.stdout
    skill = find_skill(skills, name)
    if skill is None:
        print(
            f"Skill '{name}' not found. Use `skill-router list` to see available entries.",
            file=out,
        )
        return False
    print(f"{separator()}\n{skill.body.strip()}\n", file=out)
    _print_extra_docs(skill, out)
    return True


def cmd_instructions(skills: list[Skill], skills_dir: Path, out: TextIO | None = None) -> None:
    out = out or sys.stdout
    print(
        f"STRICT INSTRUCTIONS FOR AGENTS\n{separator()}\n"
        f"Only use skill playbooks found in: {skills_dir}",
        file=out,
    )
    print(
        "1) The only allowed skills are listed below; do NOT invent new skills.\n"
        "2) Always pick the best-matching skill before acting; if none fit, say so.\n"
        "3) When using a skill, follow its playbook text verbatim; do not alter or remove steps.\n"
        "4) Cite the skill name when responding (e.g., 'Using skill: <name>').\n"
        "5) Do not read or write files outside the skills directory.",
        file=out,
    )
    print(f"{separator()}\nALLOWED SKILLS:", file=out)
    for skill in skills:
        print(f"- {skill.name} — {skill.summary}", file=out)


def validate_skill(skill: Skill) -> tuple[list[str], list[str]]:
    """Return (errors, warnings) for one skill."""
    errors: list[str] = []
    warnings: list[str] = []

    if not skill.name:
        errors.append("Missing name")
    elif " " in skill.name:
        warnings.append("Name contains spaces (consider using kebab-case)")

    if not skill.summary:
        errors.append("Missing description")
    elif len(skill.summary) > 200:
        warnings.append(f"Description is {len(skill.summary)} chars (recommended: <200)")

    if not skill.keywords:
        warnings.append("No tags defined (recommended: 3+)")
    elif len(skill.keywords) < 3:
        warnings.append(f"Only {len(skill.keywords)} tag(s) (recommended: 3+)")

    if not skill.body:
        errors.append("Empty skill body")
    elif len(skill.body) < 100:
        warnings.append("Very short skill body (<100 chars)")

    return errors, warnings


def cmd_validate(skills: list[Skill], strict: bool = False, out: TextIO | None = None) -> int:
    """Report problems per skill. Returns the process exit code."""
    out = out or sys.stdout
    error_count = 0
    warning_count = 0
    for skill in skills:
        errors, warnings = validate_skill(skill)
        if not errors and not warnings:
            continue
        print(f"\n{skill.name}", file=out)
        for err in errors:
            print(f"  ✗ ERROR: {err}", file=out)
        for warn in warnings:
            print(f"  ⚠ WARNING: {warn}", file=out)
        error_count += len(errors)
        warning_count += len(warnings)

    print(f"\n{len(skills)} skills validated", file=out)
    print(f"  {error_count} errors, {warning_count} warnings", file=out)

    if error_count > 0 or (strict and warning_count > 0):
        return 1
    return 0


def cmd_stats(skills: list[Skill], out: TextIO | None = None) -> None:
    out = out or sys.stdout
    print("Skill Statistics", file=out)
    print(separator(), file=out)
    print(f"Total skills: {len(skills)}", file=out)
    if not skills:
        return

    largest = max(skills, key=lambda s: len(s.body))
    print(
        f"Largest skill: {largest.name} ({len(largest.body)} chars, "
        f"{len(largest.extra_docs)} extra docs)",
        file=out,
    )
    smallest = min(skills, key=lambda s: len(s.body))
    print(f"Smallest skill: {smallest.name} ({len(smallest.body)} chars)", file=out)

    total_extra_docs = sum(len(s.extra_docs) for s in skills)
    print(f"Total extra docs: {total_extra_docs}", file=out)

    avg_size = sum(len(s.body) for s in skills) // len(skills)
    print(f"Average skill size: {avg_size} chars", file=out)

    with_tags = sum(1 for s in skills if s.keywords)
    print(f"Skills with tags: {with_tags}/{len(skills)}", file=out)

    all_tags = sorted({tag for s in skills for tag in s.keywords})
    print(f"Unique tags: {len(all_tags)}", file=out)
    if all_tags:
        print(f"\nTags: {', '.join(all_tags)}", file=out)


def _search_lines(text: str, needle: str) -> list[int]:
    return [i for i, line in enumerate(text.splitlines()) if needle in line.lower()]


def cmd_search(skills: list[Skill], query: str, context: int = 2, out: TextIO | None = None) -> int:
    """Case-insensitive line search over skill bodies and extra docs. Returns the match count."""
    out = out or sys.stdout
    needle = query.lower()
    total_matches = 0
    matched_skills = 0

    for skill in skills:
        # label is None for the main body
        sources: list[tuple[str | None, str]] = [(None, skill.body)]
        sources += [(extra.name, extra.contents) for extra in skill.extra_docs]
        matches = [
            (label, text, line_num)
            for label, text in sources
            for line_num in _search_lines(text, needle)
        ]
        if not matches:
            continue

        matched_skills += 1
        print(f"\n{skill.name} ({len(matches)} matches)", file=out)
        print(separator(), file=out)
        for label, text, line_num in matches:
            lines = text.splitlines()
            prefix = f"[{label}] " if label else ""
            print(f"  {prefix}L{line_num + 1}: {lines[line_num].strip()}", file=out)
            if context > 0:
                start = max(0, line_num - context)
                end = min(len(lines), line_num + context + 1)
                for i in range(start, end):
                    if i != line_num:
                        print(f"    L{i + 1}: {lines[i].strip()}", file=out)
        total_matches += len(matches)

    if total_matches == 0:
        print(f"No matches found for '{query}'", file=out)
    else:
        print(f"\n{total_matches} total matches across {matched_skills} skills", file=out)
    return total_matches
