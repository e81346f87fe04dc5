import logging

from fastapi import APIRouter, Depends, HTTPException, Request, status

from app.core.config import settings
from app.core.rate_limit import rate_limit
from app.rules.registry import RuleCatalogRegistry
from app.schemas.ats import (
    BestPracticeGroup,
    CommonIssueGroup,
    ScoreAnalysis,
    ValidationRequest,
    ValidationResult,
)
from app.services.ats_validation_service import ATSValidationService

router = APIRouter()
logger = logging.getLogger(__name__)


def get_validation_service(request: Request) -> ATSValidationService:
    registry: RuleCatalogRegistry = request.app.state.rule_catalogs
    return ATSValidationService(registry.current())


@router.post("/ats-validation/validate", response_model=ValidationResult)
@rate_limit(settings.validate_rate_limit)
async def validate_cv(
    request: Request,
    payload: ValidationRequest,
    service: ATSValidationService = Depends(get_validation_service),
):
    _ = request
    return service.validate(payload.cv_data, payload.job_description)


@router.get("/ats-validation/analysis/{score}", response_model=ScoreAnalysis)
@rate_limit()
async def score_analysis(
    request: Request,
    score: str,
    service: ATSValidationService = Depends(get_validation_service),
):
    _ = request
    try:
        value = int(score)
    except ValueError:
        value = -1
    if not 0 <= value <= 100:
        logger.info("ats_score_analysis_rejected score=%r", score[:20])
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid score parameter")
    return service.analyze_score(value)


@router.get("/ats-validation/best-practices", response_model=dict[str, BestPracticeGroup])
@rate_limit()
async def best_practices(request: Request, service: ATSValidationService = Depends(get_validation_service)):
    _ = request
    return service.best_practices()


@router.get("/ats-validation/common-issues", response_model=dict[str, CommonIssueGroup])
@rate_limit()
async def common_issues(request: Request, service: ATSValidationService = Depends(get_validation_service)):
    _ = request
    return service.common_issues()
