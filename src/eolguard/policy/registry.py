"""Policy registry — config policies plus YAML policy files."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Optional

import yaml

from eolguard.config.loader import ConfigError
from eolguard.config.schema import EolGuardConfig
from eolguard.policy.models import EOLStyle, Policy
from eolguard.scanner.eol import EOLStat

POLICY_DIRNAME = ".eolguard-policies"


class PolicyRegistry:
    """Central store for all line-ending policies."""

    def __init__(self, *, case_sensitive: bool = False) -> None:
        self._policies: Dict[str, Policy] = {}
        self.case_sensitive = case_sensitive

    # ---- registration ----

    def register(self, policy: Policy) -> None:
        self._policies[policy.id] = policy

    def register_many(self, policies: list[Policy]) -> None:
        for p in policies:
            self.register(p)

    # ---- queries ----

    @property
    def all_policies(self) -> List[Policy]:
        return list(self._policies.values())

    def get(self, policy_id: str) -> Optional[Policy]:
        return self._policies.get(policy_id)

    def enabled_policies(self) -> List[Policy]:
        return [p for p in self._policies.values() if p.enabled]

    def violations(self, name: str, stat: EOLStat) -> List[Policy]:
        """Enabled policies that *name* with counters *stat* breaks."""
        return [
            p for p in self.enabled_policies()
            if p.violated_by(name, stat, case_sensitive=self.case_sensitive)
        ]

    def apply_config(self, config: EolGuardConfig) -> None:
        for policy_id in config.policies.disable:
            policy = self.get(policy_id)
            if policy is not None:
                policy.enabled = False

    # ---- policy files ----

    def load_policy_files(self, directory: Path) -> int:
        """Load ``*.yaml`` / ``*.yml`` policy files. Returns count loaded."""
        count = 0
        if not directory.is_dir():
            return 0
        for path in sorted(directory.iterdir()):
            if path.suffix in (".yaml", ".yml"):
                count += self._load_yaml_policies(path)
        return count

    def _load_yaml_policies(self, path: Path) -> int:
        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as exc:
            raise ConfigError(f"Failed to load policy file {path}: {exc}") from exc
        if data is None:
            return 0
        if not isinstance(data, list):
            data = [data]
        count = 0
        for entry in data:
            try:
                policy = Policy(
                    id=entry["id"],
                    style=entry["style"],
                    extensions=entry.get("extensions", []),
                    description=entry.get("description", ""),
                    enabled=entry.get("enabled", True),
                )
            except (KeyError, TypeError, ValueError) as exc:
                raise ConfigError(f"Invalid policy in {path}: {exc}") from exc
            self.register(policy)
            count += 1
        return count


def build_registry(config: EolGuardConfig, repo_root: Path) -> PolicyRegistry:
    """Create a fully populated, config-filtered policy registry."""
    registry = PolicyRegistry(case_sensitive=config.check.case_sensitive)

    for style, exts in (
        (EOLStyle.CRLF, config.policies.crlf),
        (EOLStyle.LF, config.policies.lf),
        (EOLStyle.CR, config.policies.cr),
    ):
        if exts:
            registry.register(Policy(
                id=style.value,
                style=style,
                extensions=exts,
                description=f"must use {style.name} line endings",
            ))

    registry.load_policy_files(repo_root / POLICY_DIRNAME)
    registry.apply_config(config)
    return registry
