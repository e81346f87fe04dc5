from contextlib import asynccontextmanager
import logging

from app.rules.registry import RuleCatalogRegistry

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app):
    # Catalog problems are configuration bugs: fail at startup, never per request.
    registry = RuleCatalogRegistry()
    catalog = registry.current()
    app.state.rule_catalogs = registry
    logger.info("ats_validator_ready catalog_version=%s rules=%s", catalog.version, len(catalog.rules))
    yield
