"""Reads phenotype rulesets from YAML and fingerprints their content."""

import hashlib
import logging
from pathlib import Path
from typing import Any

import yaml

from wellness.core.config import settings
from wellness.rules.models import PhenotypeRuleset, RulesetError

logger = logging.getLogger(__name__)


def compute_ruleset_hash(content: str) -> str:
    """SHA-256 hex digest of the raw ruleset text.

    Every stored assessment carries this digest, so a phenotype can be
    traced to the exact rule table that assigned it.
    """
    return hashlib.sha256(content.encode("utf-8")).hexdigest()


def load_ruleset(
    filename: str,
    rulesets_dir: Path | None = None,
) -> tuple[dict[str, Any], str]:
    """Read one ruleset file.

    Args:
        filename: File name inside the rulesets directory,
            e.g. "sleep-phenotype-v1.0.0.yaml"
        rulesets_dir: Directory to read from; settings.rulesets_dir if omitted

    Returns:
        The parsed YAML mapping and the content hash

    Raises:
        FileNotFoundError: If the file does not exist
        yaml.YAMLError: If the file is not valid YAML
        RulesetError: If the document is not a mapping
    """
    path = (rulesets_dir or settings.rulesets_dir) / filename
    if not path.is_file():
        raise FileNotFoundError(f"Ruleset not found: {path}")

    content = path.read_text(encoding="utf-8")
    data = yaml.safe_load(content)
    if not isinstance(data, dict):
        raise RulesetError(f"Ruleset {filename} must be a YAML mapping")

    return data, compute_ruleset_hash(content)


class RulesetLoader:
    """Parses rulesets into PhenotypeRuleset objects and caches them by file name."""

    def __init__(self, rulesets_dir: Path | None = None) -> None:
        self.rulesets_dir = rulesets_dir or settings.rulesets_dir
        self._cache: dict[str, PhenotypeRuleset] = {}

    def load(self, filename: str, use_cache: bool = True) -> PhenotypeRuleset:
        """Load and parse a ruleset with optional caching.

        Raises:
            RulesetError: If the ruleset content is malformed
        """
        if use_cache and filename in self._cache:
            return self._cache[filename]

        data, ruleset_hash = load_ruleset(filename, self.rulesets_dir)
        ruleset = PhenotypeRuleset.from_dict(data, content_hash=ruleset_hash)
        self._cache[filename] = ruleset

        logger.info(
            f"Loaded ruleset {ruleset.id} v{ruleset.version} "
            f"({len(ruleset.rules)} rules, hash={ruleset_hash[:12]})"
        )
        return ruleset

    def clear_cache(self) -> None:
        """Clear the ruleset cache."""
        self._cache.clear()

    def list_rulesets(self) -> list[str]:
        """List available ruleset files."""
        return sorted(f.name for f in self.rulesets_dir.glob("*.yaml"))


# Rulesets never change while the process runs; load each one once.
default_loader = RulesetLoader()
