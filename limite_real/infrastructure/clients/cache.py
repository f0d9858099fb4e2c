"""Local JSON-file cache of the last known profile"""

import logging
from pathlib import Path
from typing import Optional

from pydantic import ValidationError as SchemaValidationError

from limite_real.api.v1.schemas import ProfileSchema
from limite_real.domain.models import FinancialProfile
from limite_real.config import settings

logger = logging.getLogger(__name__)


class LocalProfileCache:
    """Best-effort copy of the profile in the persisted-state shape"""

    def __init__(self, path: str | Path | None = None):
        self.path = Path(path or settings.local_cache_path)

    def load(self) -> Optional[FinancialProfile]:
        """Cached profile, or None when missing or unreadable"""
        if not self.path.exists():
            return None
        try:
            return ProfileSchema.model_validate_json(self.path.read_text(encoding="utf-8")).to_domain()
        except (SchemaValidationError, OSError) as e:
            logger.warning(f"Ignoring corrupt profile cache at {self.path}: {e}")
            return None

    def save(self, profile: FinancialProfile) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(ProfileSchema.from_domain(profile).model_dump_json(indent=2), encoding="utf-8")

    def clear(self) -> None:
        self.path.unlink(missing_ok=True)
