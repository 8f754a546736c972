"""Load prompt templates from Markdown files with YAML frontmatter."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

logger = logging.getLogger(__name__)

PROMPTS_DIR = Path(__file__).resolve().parent.parent / "prompts"


@dataclass
class PromptTemplate:
    """A parsed prompt from a markdown file."""

    name: str
    description: str
    system_prompt: str
    body: str
    placeholders: List[str] = field(default_factory=list)
    model_params: Dict[str, Any] = field(default_factory=dict)
    file_path: Optional[str] = None

    def render(self, **values: str) -> str:
        """Fill the body's `{placeholder}` slots."""
        missing = [p for p in self.placeholders if p not in values]
        if missing:
            raise KeyError(f"Prompt {self.name} missing values for: {', '.join(missing)}")
        return self.body.format(**values)


def load_prompt_file(path: Path) -> Optional[PromptTemplate]:
    """Parse a single prompt markdown file.

    Expected format:
        ---
        prompt_name: ...
        description: ...
        system: ...
        placeholders: [...]
        ---
        Prompt body with {placeholders}
    """
    text = path.read_text(encoding="utf-8")

    if not text.startswith("---"):
        logger.warning("Prompt file %s missing YAML frontmatter, skipping", path)
        return None

    parts = text.split("---", 2)
    if len(parts) < 3:
        logger.warning("Prompt file %s has malformed frontmatter, skipping", path)
        return None

    try:
        meta = yaml.safe_load(parts[1].strip())
    except yaml.YAMLError as exc:
        logger.warning("Failed to parse YAML in %s: %s", path, exc)
        return None

    if not isinstance(meta, dict):
        logger.warning("Frontmatter in %s is not a dict, skipping", path)
        return None

    return PromptTemplate(
        name=meta.get("prompt_name", path.stem),
        description=meta.get("description", ""),
        system_prompt=(meta.get("system") or "").strip(),
        body=parts[2].strip(),
        placeholders=list(meta.get("placeholders") or []),
        model_params=meta.get("model_params") or {},
        file_path=str(path),
    )


def load_prompt(name: str, prompts_dir: Optional[Path] = None) -> PromptTemplate:
    """Load a bundled prompt by name (file stem)."""
    path = (prompts_dir or PROMPTS_DIR) / f"{name}.md"
    if not path.is_file():
        raise FileNotFoundError(f"Prompt not found: {path}")
    prompt = load_prompt_file(path)
    if prompt is None:
        raise ValueError(f"Prompt file {path} could not be parsed")
    logger.debug("Loaded prompt: %s", prompt.name)
    return prompt
