"""Route module for the installed skills catalog."""

import re
from pathlib import Path

from fastapi import APIRouter

from ..config import SKILLS_DIR
from ..logging_config import get_logger
from ..types import SkillManifest

logger = get_logger(__name__, namespace='skills')

router = APIRouter(prefix="/api/skills", tags=["skills"])


def split_frontmatter(content: str) -> str | None:
    """Return the text between the leading `---` markers, if any."""
    if not content.startswith('---'):
        return None
    end = content.find('---', 3)
    if end == -1:
        return None
    return content[3:end].strip()


def parse_frontmatter(frontmatter: str) -> dict[str, str]:
    """Parse top-level `key: value` pairs from front-matter text."""
    values = {}
    for line in frontmatter.split('\n'):
        # Top-level keys are not indented and contain a colon
        if not line or line[0].isspace() or ':' not in line:
            continue
        key, _, value = line.partition(':')
        key = key.strip()
        value = value.strip()
        if key in values or not value:
            continue
        values[key] = re.sub(r'^["\']|["\']$', '', value)
    return values


def _parse_list(frontmatter: str, key: str) -> list[str]:
    match = re.search(rf'"{key}":\s*\[([^\]]+)\]', frontmatter)
    if not match:
        return []
    return [item.strip() for item in match.group(1).replace('"', '').split(',') if item.strip()]


def parse_skill_md(skill_file: Path) -> SkillManifest | None:
    """Read a SKILL.md manifest. Files without front-matter yield None."""
    try:
        content = skill_file.read_text(encoding='utf-8')
    except (OSError, UnicodeDecodeError) as e:
        logger.debug(f"Could not read {skill_file}: {e}")
        return None

    frontmatter = split_frontmatter(content)
    if frontmatter is None:
        return None

    values = parse_frontmatter(frontmatter)
    emoji_match = re.search(r'"emoji":\s*"([^"]+)"', frontmatter)

    return {
        'name': values.get('name'),
        'description': values.get('description'),
        'homepage': values.get('homepage'),
        'emoji': emoji_match.group(1) if emoji_match else None,
        'requires': {
            'bins': _parse_list(frontmatter, 'bins'),
            'anyBins': _parse_list(frontmatter, 'anyBins'),
            'config': _parse_list(frontmatter, 'config'),
        },
    }


def scan_skills_directory(base_path: Path) -> list[SkillManifest]:
    """Scan a skills directory for SKILL.md manifests, sorted by name."""
    skills = []

    if not base_path.is_dir():
        return skills

    for skill_dir in base_path.iterdir():
        skill_file = skill_dir / "SKILL.md"
        if not skill_file.is_file():
            continue
        skill = parse_skill_md(skill_file)
        if skill is not None:
            skills.append(skill)

    return sorted(skills, key=lambda s: s['name'] or '')


@router.get("")
def get_skills():
    """List installed skills with their declared requirements."""
    return scan_skills_directory(SKILLS_DIR)
