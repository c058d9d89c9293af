"""Registry of available rating systems, looked up by id."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

from oppr.errors import DuplicateRatingSystemError, RatingSystemNotFoundError
from oppr.ratings.base import RatingSystem

if TYPE_CHECKING:
    from oppr.config import Settings

logger = logging.getLogger(__name__)


class RatingSystemRegistry:
    """
    In-memory registry for rating systems.

    The application owns one instance and passes it to whatever needs a
    rating system; there is no module-level singleton. Register systems
    during start-up, before any calculation runs.
    """

    def __init__(self) -> None:
        self._systems: dict[str, RatingSystem] = {}

    def register(self, system: RatingSystem) -> None:
        if system.id in self._systems:
            raise DuplicateRatingSystemError(system.id)
        self._systems[system.id] = system
        logger.debug("Registered rating system %s", system.id)

    def get(self, system_id: str) -> RatingSystem:
        try:
            return self._systems[system_id]
        except KeyError:
            raise RatingSystemNotFoundError(system_id, self.ids()) from None

    def has(self, system_id: str) -> bool:
        return system_id in self._systems

    def ids(self) -> list[str]:
        return list(self._systems)

    def unregister(self, system_id: str) -> bool:
        return self._systems.pop(system_id, None) is not None

    def clear(self) -> None:
        self._systems.clear()

    def __contains__(self, system_id: object) -> bool:
        return system_id in self._systems

    def __len__(self) -> int:
        return len(self._systems)


def build_default_registry(settings: Optional["Settings"] = None) -> RatingSystemRegistry:
    """
    Registry with the built-in Glicko system registered.

    When settings carry an opponents_range override it is applied to the
    Glicko configuration.
    """
    from oppr.ratings.glicko import GlickoConfig, GlickoRatingSystem

    glicko_config = GlickoConfig()
    if settings is not None and settings.opponents_range is not None:
        glicko_config = glicko_config.with_opponents_range(settings.opponents_range)

    registry = RatingSystemRegistry()
    registry.register(GlickoRatingSystem(glicko_config))
    return registry
