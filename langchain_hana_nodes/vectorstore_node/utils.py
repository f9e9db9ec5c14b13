from typing import Any, Dict, List, Sequence, Union

from langchain_hana_nodes.types import OperationMode
from langchain_hana_nodes.vectorstore_node.adapter import VectorStoreAdapter
from langchain_hana_nodes.vectorstore_node.constants import OPERATION_MODE_DESCRIPTIONS


def transform_description_for_operation_mode(
    fields: Sequence[Dict[str, Any]],
    mode: Union[str, List[str]],
) -> List[Dict[str, Any]]:
    """Copy fields so they are only shown for the given operation mode(s)."""
    modes = mode if isinstance(mode, list) else [mode]
    return [{**field, "display_options": {"show": {"mode": modes}}} for field in fields]


def is_update_supported(adapter: VectorStoreAdapter) -> bool:
    return OperationMode.UPDATE in adapter.meta.operation_modes


def get_operation_mode_options(adapter: VectorStoreAdapter) -> List[Dict[str, Any]]:
    """Options of the "Operation Mode" parameter for the modes the adapter enables."""
    enabled = {OperationMode(mode).value for mode in adapter.meta.operation_modes}
    return [
        {
            "name": option["name"],
            "value": option["value"],
            "description": option["description"],
            "action": option["action"],
        }
        for option in OPERATION_MODE_DESCRIPTIONS
        if option["value"] in enabled
    ]


def _version_matches(conditions: Sequence[Any], version: float) -> bool:
    exact = [c for c in conditions if not isinstance(c, dict)]
    if exact and version not in exact:
        return False

    for condition in conditions:
        if not isinstance(condition, dict):
            continue
        cnd = condition.get("_cnd", {})
        if "lte" in cnd and not version <= cnd["lte"]:
            return False
        if "gte" in cnd and not version >= cnd["gte"]:
            return False
    return True


def get_parameters_for_mode(
    properties: Sequence[Dict[str, Any]],
    mode: Union[str, OperationMode],
    version: float,
) -> List[Dict[str, Any]]:
    """
    Select the node parameters that exist for a mode and node version.

    Evaluates each property's ``display_options.show`` conditions on ``mode``
    and ``@version``; properties without conditions are always present.
    """
    mode = OperationMode(mode).value
    selected = []
    for prop in properties:
        show = prop.get("display_options", {}).get("show", {})
        modes = show.get("mode")
        if modes is not None and mode not in modes:
            continue
        versions = show.get("@version")
        if versions is not None and not _version_matches(versions, version):
            continue
        selected.append(prop)
    return selected
