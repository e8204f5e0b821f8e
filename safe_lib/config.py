"""Settings for SafeStore, read from a YAML file.

Example ``data/config/safe.yml``::

    log_level: INFO
    data_dir: data/safe
    debounce_delay: 0.1
    quota_retry_delay: 0.7
    quota_max_retries: null
    quota_backoff: 2.0
    quota_max_delay: 10.0
    local_quota_bytes: 5242880
"""
from __future__ import annotations
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Optional

import yaml

from safe_lib.binding.debounce import STORE_DEBOUNCE_DELAY
from safe_lib.binding.retry import STORE_AFTER_QUOTA_ERROR_DELAY, RetryPolicy

DEFAULT_CONFIG_PATH = Path("data/config/safe.yml")


@dataclass
class SafeSettings:
    log_level: str = "WARNING"
    data_dir: str = "data/safe"
    debounce_delay: float = STORE_DEBOUNCE_DELAY
    quota_retry_delay: float = STORE_AFTER_QUOTA_ERROR_DELAY
    quota_max_retries: Optional[int] = None
    quota_backoff: float = 1.0
    quota_max_delay: Optional[float] = None
    local_quota_bytes: Optional[int] = None
    session_quota_bytes: Optional[int] = None

    def retry_policy(self) -> RetryPolicy:
        return RetryPolicy(
            delay=self.quota_retry_delay,
            max_retries=self.quota_max_retries,
            backoff=self.quota_backoff,
            max_delay=self.quota_max_delay,
        )


def load_settings(config_path: Optional[Path | str] = None) -> SafeSettings:
    """Load settings from YAML; a missing file yields the defaults.

    Raises ValueError when the file cannot be parsed or is not a mapping.
    Unknown keys are ignored.
    """
    path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH
    if not path.exists():
        return SafeSettings()
    with path.open("r", encoding="utf-8") as f:
        try:
            data: Any = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError("invalid config format: parse error") from e
    if data is None:
        return SafeSettings()
    if not isinstance(data, dict):
        raise ValueError("invalid config format: expected mapping")
    known = {f.name for f in fields(SafeSettings)}
    return SafeSettings(**{k: v for k, v in data.items() if k in known})
