"""Load configuration from the environment and optional TOML config files."""
import os
import tomllib
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from skill_router.logging_utils import get_logger

load_dotenv()

logger = get_logger(__name__)


def _env_int(name: str, default: int) -> int:
    """Integer from the environment; a non-numeric value falls back to default."""
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


# Skills directory (folders with SKILL.md); bundled skills are used when it yields none
SKILLS_DIR = Path(os.getenv("SKILL_ROUTER_SKILLS_DIR", "skills"))

# pick / list defaults
DEFAULT_TOP = _env_int("SKILL_ROUTER_TOP", 3)
DEFAULT_CLIP = _env_int("SKILL_ROUTER_CLIP", 80)
FALLBACK_LIMIT = 5

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "WARNING").upper()

CONFIG_FILE_NAMES = (".skill-router.toml", "skill-router.toml")


def user_config_path() -> Path:
    """Config file in the user's home directory (~/.config/skill-router/config.toml)."""
    home = os.getenv("HOME")
    if home:
        return Path(home) / ".config" / "skill-router" / "config.toml"
    return Path(CONFIG_FILE_NAMES[0])


def default_config_paths() -> list[Path]:
    return [Path(name) for name in CONFIG_FILE_NAMES] + [user_config_path()]


@dataclass
class Config:
    """Options from a config file. Zero / missing values mean "use the default"."""

    default_top: int = 0
    clip_length: int = 0
    skills_dir: Path | None = None

    @classmethod
    def load(cls) -> "Config":
        return cls.load_from_paths(default_config_paths())

    @classmethod
    def load_from_paths(cls, paths: list[Path]) -> "Config":
        """Use the first path that exists and parses; unreadable or invalid files are skipped."""
        for path in paths:
            if not path.is_file():
                continue
            try:
                data = tomllib.loads(path.read_text(encoding="utf-8"))
            except (OSError, tomllib.TOMLDecodeError) as e:
                logger.warning("config_file_invalid", path=str(path), error=str(e))
                continue
            return cls.from_dict(data)
        return cls()

    @classmethod
    def from_dict(cls, data: dict) -> "Config":
        skills_dir = data.get("skills_dir")
        return cls(
            default_top=_as_int(data.get("default_top")),
            clip_length=_as_int(data.get("clip_length")),
            skills_dir=Path(skills_dir) if skills_dir else None,
        )

    def get_default_top(self) -> int:
        return self.default_top if self.default_top > 0 else DEFAULT_TOP

    def get_clip_length(self) -> int:
        return self.clip_length if self.clip_length > 0 else DEFAULT_CLIP

    def get_skills_dir(self) -> Path:
        return self.skills_dir or SKILLS_DIR


def _as_int(value: object) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        return 0
    return max(value, 0)
