"""
Name: Prompt Loader (Versioned Templates with Frontmatter)

Responsibilities:
  - Compose the editor policy with a versioned segmentation template
  - Read frontmatter metadata (type, version, lang, declared inputs)
  - Render the prompt by substituting only the `{text}` token
  - Fall back to v1 when the configured version has no template

Collaborators:
  - crosscutting.config.get_settings (prompt_version)
  - cardsmith/prompts/policy/*.md, cardsmith/prompts/segmentation/*.md
  - GoogleCardSplitter (consumer)
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field, fields
from functools import lru_cache
from pathlib import Path
from typing import Final, Optional

from ...crosscutting.logger import logger

PROMPTS_DIR: Final[Path] = Path(__file__).resolve().parents[2] / "prompts"

POLICY_DIR: Final[str] = "policy"
SEGMENTATION_DIR: Final[str] = "segmentation"
DEFAULT_POLICY_FILE: Final[str] = "editor_contract_en.md"
DEFAULT_LANG: Final[str] = "en"
FALLBACK_VERSION: Final[str] = "v1"

TOKEN_TEXT: Final[str] = "{text}"

_VERSION_RE: Final[re.Pattern] = re.compile(r"^v\d+$")
_FRONTMATTER_RE: Final[re.Pattern] = re.compile(r"\A---\s*\n(.*?)\n---\s*\n", re.DOTALL)
_LIST_ITEM_RE: Final[re.Pattern] = re.compile(r"^\s*-\s+(.+)$")
_KEY_VALUE_RE: Final[re.Pattern] = re.compile(r"^([A-Za-z_][\w-]*)\s*:\s*(.*)$")


@dataclass
class PromptMetadata:
    """Frontmatter of a prompt file."""

    type: str = ""
    version: str = ""
    lang: str = ""
    description: str = ""
    updated: str = ""
    inputs: list[str] = field(default_factory=list)


_SCALAR_FIELDS: Final[frozenset[str]] = frozenset(
    f.name for f in fields(PromptMetadata) if f.name != "inputs"
)


def parse_frontmatter(content: str) -> tuple[PromptMetadata, str]:
    """
    Split `content` into (metadata, body).

    Supports flat `key: value` pairs plus the `inputs:` list; unknown keys
    are ignored. Without frontmatter the whole content is the body.
    """
    match = _FRONTMATTER_RE.match(content)
    if match is None:
        return PromptMetadata(), content

    scalars: dict[str, str] = {}
    inputs: list[str] = []
    in_inputs = False

    for line in match.group(1).splitlines():
        if not line.strip() or line.lstrip().startswith("#"):
            continue

        item = _LIST_ITEM_RE.match(line)
        if item is not None:
            if in_inputs:
                inputs.append(item.group(1).strip())
            continue

        pair = _KEY_VALUE_RE.match(line.strip())
        if pair is None:
            continue
        key, value = pair.group(1), pair.group(2).strip().strip("\"'")
        in_inputs = key == "inputs"
        if key in _SCALAR_FIELDS and value:
            scalars[key] = value

    return PromptMetadata(**scalars, inputs=inputs), content[match.end() :]


class PromptLoader:
    """
    Versioned prompt for one capability (default: segmentation).

    The composed template (policy first, then the versioned body) is read
    once per instance.
    """

    def __init__(
        self,
        version: str = FALLBACK_VERSION,
        lang: str = DEFAULT_LANG,
        capability: str = SEGMENTATION_DIR,
        *,
        prompts_dir: Path = PROMPTS_DIR,
    ):
        version = (version or "").strip()
        if not _VERSION_RE.match(version):
            raise ValueError(f"Invalid prompt version '{version}'. Expected v1, v2, ...")

        self.version = version
        self.lang = lang
        self.capability = capability
        self._prompts_dir = prompts_dir
        self._metadata: Optional[PromptMetadata] = None
        self._template: Optional[str] = None

    @property
    def metadata(self) -> Optional[PromptMetadata]:
        """Template frontmatter (None until the template is loaded)."""
        return self._metadata

    def get_template(self) -> str:
        if self._template is None:
            policy = self._read_policy()
            body = self._read_template()
            self._template = f"{policy}\n\n{body}".strip()
        return self._template

    def format(self, text: str) -> str:
        """Render the prompt for `text` (only `{text}` is substituted)."""
        template = self.get_template()
        if TOKEN_TEXT not in template:
            raise ValueError(f"Prompt template missing required token: {TOKEN_TEXT}")

        undeclared = set(self._metadata.inputs if self._metadata else ()) - {"text"}
        if undeclared:
            logger.warning(
                "Prompt declares inputs other than text",
                extra={"missing": sorted(undeclared), "version": self.version},
            )
        return template.replace(TOKEN_TEXT, text)

    def _read_policy(self) -> str:
        path = self._prompts_dir / POLICY_DIR / DEFAULT_POLICY_FILE
        if not path.exists():
            logger.error("Editor policy file missing", extra={"path": str(path)})
            raise FileNotFoundError(f"Policy contract not found: {path}")
        _, body = parse_frontmatter(path.read_text(encoding="utf-8"))
        return body.strip()

    def _read_template(self) -> str:
        path = self._template_path(self.version)
        if not path.exists() and self.version != FALLBACK_VERSION:
            logger.warning(
                "Prompt version not packaged, using v1",
                extra={"requested_version": self.version},
            )
            path = self._template_path(FALLBACK_VERSION)
        if not path.exists():
            raise FileNotFoundError(f"Prompt template not found: {path}")

        self._metadata, body = parse_frontmatter(path.read_text(encoding="utf-8"))
        logger.debug(
            "Prompt template read",
            extra={"path": path.name, "chars": len(body), "inputs": self._metadata.inputs},
        )
        return body

    def _template_path(self, version: str) -> Path:
        return self._prompts_dir / self.capability / f"{version}_{self.lang}.md"


@lru_cache
def get_prompt_loader() -> PromptLoader:
    """Singleton PromptLoader configured by settings.prompt_version."""
    from ...crosscutting.config import get_settings

    return PromptLoader(version=get_settings().prompt_version)
