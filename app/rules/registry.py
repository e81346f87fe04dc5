from __future__ import annotations

import logging
import threading
from typing import Any, Callable

from app.core.config.scoring import clear_scoring_config_cache, get_scoring_config

from . import RuleCatalog, build_default_catalog

logger = logging.getLogger(__name__)

ConfigLoader = Callable[[], dict[str, Any]]


class RuleCatalogRegistry:
    """Holds the current catalog snapshot; reloads swap the whole snapshot at once."""

    def __init__(self, loader: ConfigLoader = get_scoring_config):
        self._loader = loader
        self._lock = threading.Lock()
        self._catalog: RuleCatalog | None = None

    def current(self) -> RuleCatalog:
        catalog = self._catalog
        if catalog is not None:
            return catalog
        with self._lock:
            if self._catalog is None:
                self._catalog = build_default_catalog(self._loader())
                logger.info(
                    "ats_rule_catalog_loaded version=%s rules=%s",
                    self._catalog.version,
                    len(self._catalog.rules),
                )
            return self._catalog

    def reload(self) -> RuleCatalog:
        clear_scoring_config_cache()
        # Build outside the lock; a failed build leaves the previous snapshot in place.
        catalog = build_default_catalog(self._loader())
        with self._lock:
            self._catalog = catalog
        logger.info("ats_rule_catalog_reloaded version=%s rules=%s", catalog.version, len(catalog.rules))
        return catalog
