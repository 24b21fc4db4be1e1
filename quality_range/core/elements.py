"""
Element Utilities
=================

Element family classification and display name resolution.
"""

from typing import Any, Dict, Iterable, Mapping, Optional

from quality_range.config.logging import get_logger
from quality_range.config.settings import get_settings
from quality_range.core.clients.store_client import StoreClient

logger = get_logger(__name__)

ASYNCHRONOUS_PARAM = "asynchronous"


def is_codecc_atom(element_type: Optional[str], atom_codes: Optional[Iterable[str]] = None) -> bool:
    """Whether the element type belongs to the CodeCC code-check family."""
    if not element_type:
        return False
    codes = get_settings().codecc_atom_codes if atom_codes is None else atom_codes
    return element_type in codes


def is_asynchronous(params: Mapping[str, Any]) -> bool:
    value = params.get(ASYNCHRONOUS_PARAM)
    if isinstance(value, bool):
        return value
    return isinstance(value, str) and value.strip().lower() == "true"


class ElementNameResolver:
    """Resolves element types to the display names users see in a project."""

    def __init__(self, store_client: StoreClient, builtin_names: Optional[Dict[str, str]] = None):
        self.store_client = store_client
        self.builtin_names = (
            get_settings().element_names if builtin_names is None else builtin_names
        )
        self.logger = logger.bind(component="element_name_resolver")

    async def display_name(self, element_type: str, project_id: str) -> str:
        """
        Get the display name of an element type.

        Built-in names win; otherwise the store is asked, since projects may
        install custom plugins with their own names. Unknown types fall back
        to the element type itself.
        """
        name = self.builtin_names.get(element_type)
        if name:
            return name

        names = await self.store_client.get_atom_names(project_id, [element_type]) or {}
        name = names.get(element_type)
        if not name:
            self.logger.debug(
                "No display name for element", element_type=element_type, project_id=project_id
            )
            return element_type
        return name
