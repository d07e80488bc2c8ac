"""Command-line entry: parse arguments, load skills, dispatch to a command."""
import argparse
import sys
from pathlib import Path

from skill_router import __version__
from skill_router.commands import (
    cmd_instructions,
    cmd_list,
    cmd_pick,
    cmd_search,
    cmd_show,
    cmd_stats,
    cmd_validate,
)
from skill_router.config import LOG_LEVEL, Config
from skill_router.logging_utils import configure_logging, get_logger, log_skills_loaded
from skill_router.skills import SkillParseError, load_skills_with_fallback, materialize_skills

logger = get_logger(__name__)

SKILLS_DIR_HELP = "Directory containing skill folders (each with SKILL.md). Default: skills"


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="skill-router",
        description="Route tasks to the right skill playbook.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--skills-dir", type=Path, default=None, help=SKILLS_DIR_HELP)
    # Also accepted after the subcommand; SUPPRESS keeps an earlier value when omitted there.
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--skills-dir", type=Path, default=argparse.SUPPRESS, help=SKILLS_DIR_HELP)
    sub = parser.add_subparsers(dest="command", required=True)

    p_list = sub.add_parser(
        "list", parents=[common], help="List all available skills with a short summary"
    )
    p_list.add_argument("--brief", action="store_true", help="Output only names")
    p_list.add_argument("--verbose", action="store_true", help="Output full summaries (no clipping)")
    p_list.add_argument("--json", action="store_true", help="Output JSON array of skill names")
    p_list.add_argument(
        "--clip", type=int, default=None, metavar="N", help="Maximum characters for clipped summaries"
    )

    p_pick = sub.add_parser(
        "pick", parents=[common], help="Suggest the best matching skills for a task description"
    )
    p_pick.add_argument("query", help="Free-form task description to match against skills")
    p_pick.add_argument("-t", "--top", type=int, default=None, help="Number of candidates to show")
    p_pick.add_argument(
        "--show", action="store_true", help="Immediately print the full playbook for the top result"
    )

    p_show = sub.add_parser("show", parents=[common], help="Open a specific skill by name")
    p_show.add_argument("name", help="Skill name (case-insensitive)")

    sub.add_parser(
        "instructions",
        parents=[common],
        help="Print strict agent instructions and the allowed skill list",
    )

    p_init = sub.add_parser(
        "init", parents=[common], help="Write bundled example skills into the skills directory"
    )
    p_init.add_argument("--force", action="store_true", help="Overwrite existing files")

    p_validate = sub.add_parser(
        "validate", parents=[common], help="Validate skill files for correctness"
    )
    p_validate.add_argument("--strict", action="store_true", help="Fail on warnings")

    sub.add_parser("stats", parents=[common], help="Show statistics about loaded skills")

    p_search = sub.add_parser("search", parents=[common], help="Search within skill content")
    p_search.add_argument("query", help="Text to search for in skill bodies")
    p_search.add_argument(
        "-c", "--context", type=int, default=2, help="Lines of context around matches"
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    configure_logging(LOG_LEVEL)
    args = create_parser().parse_args(argv)
    config = Config.load()
    skills_dir = args.skills_dir or config.get_skills_dir()

    if args.command == "init":
        written = materialize_skills(skills_dir, force=args.force)
        logger.info("skills_materialized", skills_dir=str(skills_dir), files=len(written))
        print(f"Bundled skills written to {skills_dir}")
        return 0

    try:
        skills = load_skills_with_fallback(skills_dir)
    except (SkillParseError, OSError) as e:
        logger.error("skills_load_failed", skills_dir=str(skills_dir), error=str(e))
        print(f"Error: {e}", file=sys.stderr)
        return 1
    log_skills_loaded(logger, str(skills_dir), len(skills))

    if not skills:
        print(f"No skills found in {skills_dir}. Add SKILL.md files to get started.")
        return 0

    if args.command == "list":
        clip = args.clip if args.clip is not None else config.get_clip_length()
        cmd_list(skills, brief=args.brief, verbose=args.verbose, as_json=args.json, clip=clip)
    elif args.command == "pick":
        top = args.top if args.top is not None else config.get_default_top()
        cmd_pick(skills, args.query, top=top, show=args.show)
    elif args.command == "show":
        cmd_show(skills, args.name)
    elif args.command == "instructions":
        cmd_instructions(skills, skills_dir)
    elif args.command == "validate":
        return cmd_validate(skills, strict=args.strict)
    elif args.command == "stats":
        cmd_stats(skills)
    elif args.command == "search":
        cmd_search(skills, args.query, context=args.context)
    return 0
