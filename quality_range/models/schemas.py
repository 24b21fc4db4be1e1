"""
Pydantic Models and Schemas
===========================

Data models for upstream service payloads, range detail results, and API
requests/responses. Wire names follow the platform's camelCase convention;
all models accept population by field name as well.
"""

from typing import Optional, List, Dict, Any, Literal
from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class CamelModel(BaseModel):
    """Base model for camelCase wire payloads."""

    model_config = ConfigDict(populate_by_name=True)


# Upstream envelope
class ServiceResult(CamelModel):
    """Standard response envelope returned by platform services."""

    status: int = Field(0, description="Zero on success")
    message: Optional[str] = Field(None, description="Error message when status is non-zero")
    data: Optional[Any] = Field(None, description="Response payload")

    @property
    def is_ok(self) -> bool:
        return self.status == 0


# Pipeline tasks
class PipelineModelTask(CamelModel):
    """A task step of a pipeline as listed by the process service."""

    project_id: Optional[str] = Field(None, alias="projectId")
    pipeline_id: str = Field(..., alias="pipelineId")
    stage_id: Optional[str] = Field(None, alias="stageId")
    container_id: Optional[str] = Field(None, alias="containerId")
    task_id: Optional[str] = Field(None, alias="taskId")
    task_seq: Optional[int] = Field(None, alias="taskSeq")
    task_name: Optional[str] = Field(None, alias="taskName")
    atom_code: str = Field(..., alias="atomCode")
    class_type: Optional[str] = Field(None, alias="classType")
    task_params: Dict[str, Any] = Field(default_factory=dict, alias="taskParams")

    @field_validator("task_params", mode="before")
    @classmethod
    def default_task_params(cls, v):
        return v if v is not None else {}


# Template model tree
class TemplateElement(CamelModel):
    """A task element inside a template container.

    Unknown keys are kept, since each element class carries its own fields.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    class_type: str = Field(..., alias="@type")
    id: Optional[str] = None
    name: Optional[str] = None
    atom_code_field: Optional[str] = Field(None, alias="atomCode")
    data: Optional[Dict[str, Any]] = None

    @property
    def atom_code(self) -> str:
        """Market atoms carry an explicit code; built-in elements use their class type."""
        return self.atom_code_field or self.class_type

    def task_params(self) -> Dict[str, Any]:
        """Flatten the element's parameters into one map.

        Market atom inputs under ``data.input`` take precedence over the
        element's own keys.
        """
        params: Dict[str, Any] = {}
        if self.id is not None:
            params["id"] = self.id
        if self.name is not None:
            params["name"] = self.name
        params.update(self.model_extra or {})
        if self.data:
            params["data"] = self.data
            atom_input = self.data.get("input")
            if isinstance(atom_input, dict):
                params.update(atom_input)
        return params


class TemplateContainer(CamelModel):
    """A job container holding ordered elements."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: Optional[str] = None
    name: Optional[str] = None
    elements: List[TemplateElement] = Field(default_factory=list)

    @field_validator("elements", mode="before")
    @classmethod
    def default_elements(cls, v):
        return v if v is not None else []


class TemplateStage(CamelModel):
    """A stage holding ordered containers."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: Optional[str] = None
    name: Optional[str] = None
    containers: List[TemplateContainer] = Field(default_factory=list)

    @field_validator("containers", mode="before")
    @classmethod
    def default_containers(cls, v):
        return v if v is not None else []


class OptionalTemplate(CamelModel):
    """A template summary including its stage tree."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    template_id: str = Field(..., alias="templateId")
    name: Optional[str] = None
    project_id: Optional[str] = Field(None, alias="projectId")
    version: Optional[int] = None
    version_name: Optional[str] = Field(None, alias="versionName")
    template_type: Optional[str] = Field(None, alias="templateType")
    stages: List[TemplateStage] = Field(default_factory=list)

    @field_validator("stages", mode="before")
    @classmethod
    def default_stages(cls, v):
        return v if v is not None else []

    def flatten_elements(self) -> List[TemplateElement]:
        """Flatten stages -> containers -> elements into one ordered list."""
        return [
            element
            for stage in self.stages
            for container in stage.containers
            for element in container.elements
        ]


class OptionalTemplateList(CamelModel):
    """Template listing page."""

    count: int = 0
    page: Optional[int] = None
    page_size: Optional[int] = Field(None, alias="pageSize")
    templates: Optional[Dict[str, OptionalTemplate]] = None


# Quality indicators
class QualityIndicator(CamelModel):
    """A quality indicator and the element type that produces it."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    hash_id: Optional[str] = Field(None, alias="hashId")
    element_type: str = Field(..., alias="elementType")
    element_name: Optional[str] = Field(None, alias="elementName")
    en_name: Optional[str] = Field(None, alias="enName")
    cn_name: Optional[str] = Field(None, alias="cnName")


# Range results
class RangeExistElement(CamelModel):
    """An element type found in a pipeline/template."""

    name: str = Field(..., description="Element type")
    cn_name: str = Field(..., alias="cnName", description="Localized display name")
    count: int = Field(..., ge=0, description="Number of occurrences")
    params: Optional[Dict[str, Any]] = Field(None, description="Parameter summary")


class RulePipelineRange(CamelModel):
    """Control-point coverage of one pipeline."""

    pipeline_id: str = Field(..., alias="pipelineId")
    pipeline_name: str = Field("", alias="pipelineName")
    element_count: int = Field(..., alias="elementCount")
    lack_point_element: List[str] = Field(default_factory=list, alias="lackPointElement")
    exist_element: List[RangeExistElement] = Field(default_factory=list, alias="existElement")


class RuleTemplateRange(CamelModel):
    """Control-point coverage of one template."""

    template_id: str = Field(..., alias="templateId")
    template_name: str = Field("", alias="templateName")
    element_count: int = Field(..., alias="elementCount")
    lack_point_element: List[str] = Field(default_factory=list, alias="lackPointElement")
    exist_element: List[RangeExistElement] = Field(default_factory=list, alias="existElement")


# API Request/Response Models
class RangeDetailRequest(CamelModel):
    """Request model for pipeline/template range detail queries."""

    ids: List[str] = Field(default_factory=list, description="Pipeline or template IDs")
    indicator_ids: List[str] = Field(
        default_factory=list, alias="indicatorIds", description="Hashed indicator IDs"
    )
    control_point_type: Optional[str] = Field(
        None, alias="controlPointType", description="Control point element type"
    )


class HealthStatus(BaseModel):
    """Health check status."""

    status: Literal["healthy", "unhealthy", "degraded"] = Field(..., description="Overall status")
    timestamp: datetime = Field(default_factory=_utcnow, description="Check timestamp")
    version: str = Field(..., description="Application version")
    upstreams: Dict[str, str] = Field(default_factory=dict, description="Configured upstream services")


class ErrorResponse(BaseModel):
    """Standard error response model."""

    error: str = Field(..., description="Error message")
    error_code: Optional[str] = Field(None, description="Error code")
    details: Optional[Dict[str, Any]] = Field(None, description="Additional error details")
    timestamp: datetime = Field(default_factory=_utcnow, description="Error timestamp")
    request_id: Optional[str] = Field(None, description="Request identifier for tracking")
