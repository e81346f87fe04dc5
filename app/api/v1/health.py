from fastapi import APIRouter, Request

router = APIRouter()


@router.get("/health", summary="Health Check", description="Check the health status of the application.")
async def health_check(request: Request):
    registry = getattr(request.app.state, "rule_catalogs", None)
    if registry is None:
        return {"status": "starting"}
    catalog = registry.current()
    return {"status": "healthy", "catalog_version": catalog.version, "rules": len(catalog.rules)}
