"""
Process Service Client
======================

Pipeline task listing, pipeline name lookup and template listing.
"""

from typing import Optional, Dict, List, Iterable

from quality_range.config.settings import get_settings
from quality_range.core.clients.base import ServiceClient
from quality_range.models.schemas import PipelineModelTask, OptionalTemplateList


class ProcessClient(ServiceClient):
    """Client for the process service."""

    service_name = "process"

    def __init__(self, service_url: Optional[str] = None, **kwargs):
        super().__init__(service_url or get_settings().process_service_url, **kwargs)

    async def list_pipeline_tasks(
        self, project_id: str, pipeline_ids: Iterable[str]
    ) -> Optional[Dict[str, List[PipelineModelTask]]]:
        """
        List the task steps of each pipeline.

        Returns:
            Mapping of pipeline ID to its tasks, or None when the service has no data
        """
        data = await self._post(
            f"/api/service/pipelineTasks/projects/{project_id}/list",
            json=sorted(pipeline_ids),
        )
        if data is None:
            return None
        return {
            pipeline_id: [PipelineModelTask.model_validate(task) for task in tasks or []]
            for pipeline_id, tasks in data.items()
        }

    async def get_pipeline_names(
        self, project_id: str, pipeline_ids: Iterable[str]
    ) -> Optional[Dict[str, str]]:
        """Resolve pipeline IDs to names. Deleted pipelines are absent from the result."""
        data = await self._post(
            f"/api/service/pipelines/projects/{project_id}/getPipelineNames",
            json=sorted(pipeline_ids),
        )
        if data is None:
            return None
        return {str(pipeline_id): name for pipeline_id, name in data.items()}

    async def list_templates_by_id(
        self, template_ids: Iterable[str], template_type: Optional[str] = None
    ) -> Optional[OptionalTemplateList]:
        """List templates, with their stage trees, by ID."""
        params = {"templateType": template_type} if template_type else None
        data = await self._post(
            "/api/service/templates/listTemplateById",
            json=sorted(template_ids),
            params=params,
        )
        if data is None:
            return None
        return OptionalTemplateList.model_validate(data)
