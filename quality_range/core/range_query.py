"""
Range Query Service
===================

Answers "which control-point elements does each pipeline/template contain,
and which required ones are missing" for quality rule ranges.

Required elements are the element types of the rule's indicators plus the
rule's control point. For each pipeline/template the actual task elements
are partitioned against them into existing descriptors and lacking types.
"""

from collections import OrderedDict
from typing import Any, Callable, Collection, Dict, List, Optional, Sequence, Set, Tuple

from quality_range.config.logging import get_logger
from quality_range.core.clients.process_client import ProcessClient
from quality_range.core.clients.quality_client import QualityClient
from quality_range.core.elements import (
    ASYNCHRONOUS_PARAM,
    ElementNameResolver,
    is_asynchronous,
    is_codecc_atom,
)
from quality_range.core.hash_ids import decode_id_to_long
from quality_range.models.schemas import (
    RangeExistElement,
    RulePipelineRange,
    RuleTemplateRange,
)

logger = get_logger(__name__)

# (element type, task parameters)
ElementEntry = Tuple[str, Dict[str, Any]]


def _or_empty(data: Optional[Dict]) -> Dict:
    """Absent upstream data counts as an empty result, not an error."""
    return data if data is not None else {}


class RangeQueryService:
    """Pipeline and template range detail queries."""

    def __init__(
        self,
        process_client: ProcessClient,
        quality_client: QualityClient,
        name_resolver: ElementNameResolver,
        is_special_family: Callable[[str], bool] = is_codecc_atom,
    ):
        self.process_client = process_client
        self.quality_client = quality_client
        self.name_resolver = name_resolver
        self.is_special_family = is_special_family
        self.logger = logger.bind(component="range_query")

    async def pipeline_range_detail(
        self,
        project_id: str,
        pipeline_ids: Collection[str],
        indicator_ids: Collection[str],
        control_point_type: Optional[str] = None,
    ) -> List[RulePipelineRange]:
        """
        Get control-point coverage for each pipeline.

        Pipelines without a resolvable name have been deleted and are left out.

        Args:
            project_id: Project identifier
            pipeline_ids: Pipelines to inspect
            indicator_ids: Hashed indicator IDs whose element types are required
            control_point_type: Optional control point element type, ignored when blank

        Returns:
            One RulePipelineRange per surviving pipeline
        """
        pipeline_ids = set(pipeline_ids)
        pipeline_tasks = _or_empty(
            await self.process_client.list_pipeline_tasks(project_id, pipeline_ids)
        )
        pipeline_names = _or_empty(
            await self.process_client.get_pipeline_names(project_id, pipeline_ids)
        )
        required_types = await self.required_element_types(indicator_ids, control_point_type)

        results = []
        for pipeline_id, tasks in pipeline_tasks.items():
            if pipeline_id not in pipeline_names:
                continue
            elements = [(task.atom_code, task.task_params) for task in tasks]
            existing, lacking = await self.partition_elements(project_id, required_types, elements)
            results.append(
                RulePipelineRange(
                    pipeline_id=pipeline_id,
                    pipeline_name=pipeline_names.get(pipeline_id) or "",
                    element_count=len(elements),
                    lack_point_element=await self._display_names(lacking, project_id),
                    exist_element=existing,
                )
            )

        self.logger.info(
            "Pipeline range detail resolved",
            project_id=project_id,
            requested=len(pipeline_ids),
            returned=len(results),
            required_types=len(required_types),
        )
        return results

    async def template_range_detail(
        self,
        project_id: str,
        template_ids: Collection[str],
        indicator_ids: Collection[str],
        control_point_type: Optional[str] = None,
    ) -> List[RuleTemplateRange]:
        """
        Get control-point coverage for each template.

        Same as ``pipeline_range_detail`` but reading the templates' stage
        trees. No listing call is made for an empty ID set, and templates the
        listing returns without being requested are dropped.
        """
        template_ids = set(template_ids)
        templates = {}
        if template_ids:
            template_list = await self.process_client.list_templates_by_id(template_ids)
            if template_list is not None:
                templates = _or_empty(template_list.templates)

        template_elements = {
            template.template_id: template.flatten_elements() for template in templates.values()
        }
        template_names = {
            template.template_id: template.name
            for template in templates.values()
            if template.name is not None
        }
        required_types = await self.required_element_types(indicator_ids, control_point_type)

        results = []
        for template_id, template_element_list in template_elements.items():
            if template_id not in template_names or template_id not in template_ids:
                continue
            elements = [
                (element.atom_code, element.task_params()) for element in template_element_list
            ]
            existing, lacking = await self.partition_elements(project_id, required_types, elements)
            results.append(
                RuleTemplateRange(
                    template_id=template_id,
                    template_name=template_names.get(template_id) or "",
                    element_count=len(elements),
                    lack_point_element=await self._display_names(lacking, project_id),
                    exist_element=existing,
                )
            )

        self.logger.info(
            "Template range detail resolved",
            project_id=project_id,
            requested=len(template_ids),
            returned=len(results),
            required_types=len(required_types),
        )
        return results

    async def required_element_types(
        self, indicator_ids: Collection[str], control_point_type: Optional[str] = None
    ) -> List[str]:
        """Element types of the indicators, plus the control point when it is not blank."""
        numeric_ids = [decode_id_to_long(indicator_id) for indicator_id in indicator_ids]
        indicators = await self.quality_client.list_indicators(numeric_ids) or []
        required = [indicator.element_type for indicator in indicators]
        if control_point_type and control_point_type.strip():
            required.append(control_point_type)
        return required

    async def partition_elements(
        self,
        project_id: str,
        required_types: Sequence[str],
        actual_elements: Sequence[ElementEntry],
    ) -> Tuple[List[RangeExistElement], List[str]]:
        """
        Split the required element types into existing and lacking.

        A required type is present when an actual element has the same type,
        or when both belong to the special (CodeCC) family. Existing elements
        are grouped by their exact type, so a type satisfied only through its
        family produces no descriptor of its own.

        Returns:
            (existing element descriptors, lacking element types in first-seen order)
        """
        lacking: List[str] = []
        for required in required_types:
            if required in lacking:
                continue
            if not any(self._matches(required, actual_type) for actual_type, _ in actual_elements):
                lacking.append(required)

        present: Set[str] = set(required_types) - set(lacking)
        groups: "OrderedDict[str, List[Dict[str, Any]]]" = OrderedDict()
        for element_type, params in actual_elements:
            if element_type in present:
                groups.setdefault(element_type, []).append(params or {})

        existing = []
        for element_type, group in groups.items():
            cn_name = await self.name_resolver.display_name(element_type, project_id)
            if self.is_special_family(element_type):
                existing.append(
                    RangeExistElement(
                        name=element_type,
                        cn_name=cn_name,
                        count=1,
                        params={ASYNCHRONOUS_PARAM: any(is_asynchronous(p) for p in group)},
                    )
                )
            else:
                existing.append(
                    RangeExistElement(name=element_type, cn_name=cn_name, count=len(group))
                )
        return existing, lacking

    def _matches(self, required_type: str, actual_type: str) -> bool:
        if required_type == actual_type:
            return True
        return self.is_special_family(required_type) and self.is_special_family(actual_type)

    async def _display_names(self, element_types: List[str], project_id: str) -> List[str]:
        return [
            await self.name_resolver.display_name(element_type, project_id)
            for element_type in element_types
        ]
