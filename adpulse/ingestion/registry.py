"""Account configuration registry backed by YAML."""

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from ..exceptions import ConfigLoadError, UnknownAccountError
from ..models.account import AccountConfig


class AccountRegistry:
    """Static account configs: type, primary KPI and thresholds.

    Usage:
        registry = AccountRegistry(Path("adpulse/config/accounts.yaml"))
        config = registry.require("charlie-ralph-melbourne")
    """

    def __init__(self, config_path: Path):
        self.accounts = self._load_accounts(config_path)

    def _load_accounts(self, path: Path) -> list[AccountConfig]:
        """Load account configs from YAML."""
        try:
            with open(path) as f:
                raw: dict[str, Any] = yaml.safe_load(f) or {}
        except Exception as e:
            raise ConfigLoadError(f"Failed to load accounts from {path}: {e}") from e

        try:
            return [AccountConfig.model_validate(a) for a in raw.get("accounts", [])]
        except ValidationError as e:
            raise ConfigLoadError(f"Invalid account config in {path}: {e}") from e

    def get(self, account_id: str) -> AccountConfig | None:
        """Look up by id or slug."""
        for config in self.accounts:
            if account_id in (config.id, config.slug):
                return config
        return None

    def require(self, account_id: str) -> AccountConfig:
        config = self.get(account_id)
        if config is None:
            raise UnknownAccountError(account_id)
        return config

    def by_type(self, account_type: str = "all") -> list[AccountConfig]:
        if account_type == "all":
            return list(self.accounts)
        return [c for c in self.accounts if c.type == account_type]

    def all(self) -> list[AccountConfig]:
        return list(self.accounts)
