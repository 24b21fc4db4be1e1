"""
Range Routes
============

FastAPI routes for quality rule range detail queries.
"""

from typing import List

from fastapi import APIRouter, Depends

from quality_range.api.caller import Caller, get_caller
from quality_range.api.dependencies import get_range_query_service
from quality_range.config.logging import get_logger
from quality_range.core.range_query import RangeQueryService
from quality_range.models.schemas import RangeDetailRequest, RulePipelineRange, RuleTemplateRange

logger = get_logger(__name__)

router = APIRouter(
    prefix="/api/v1/projects/{project_id}",
    tags=["Ranges"],
)


@router.post(
    "/pipelines/range-detail",
    response_model=List[RulePipelineRange],
    response_model_by_alias=True,
)
async def pipeline_range_detail(
    project_id: str,
    request: RangeDetailRequest,
    caller: Caller = Depends(get_caller),
    service: RangeQueryService = Depends(get_range_query_service),
) -> List[RulePipelineRange]:
    """Control-point coverage of the requested pipelines."""
    logger.info("Pipeline range detail requested", count=len(request.ids))
    return await service.pipeline_range_detail(
        project_id, request.ids, request.indicator_ids, request.control_point_type
    )


@router.post(
    "/templates/range-detail",
    response_model=List[RuleTemplateRange],
    response_model_by_alias=True,
)
async def template_range_detail(
    project_id: str,
    request: RangeDetailRequest,
    caller: Caller = Depends(get_caller),
    service: RangeQueryService = Depends(get_range_query_service),
) -> List[RuleTemplateRange]:
    """Control-point coverage of the requested templates."""
    logger.info("Template range detail requested", count=len(request.ids))
    return await service.template_range_detail(
        project_id, request.ids, request.indicator_ids, request.control_point_type
    )
