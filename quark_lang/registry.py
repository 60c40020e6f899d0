from types import MappingProxyType
from typing import Dict, Mapping

from .models import MethodDefinition

MethodGroup = Mapping[str, MethodDefinition]


def compose_registry(*groups: MethodGroup) -> Mapping[str, MethodDefinition]:
    """Merge method groups in order into a read-only mapping.

    A later group overrides an earlier entry of the same name. The result
    is a fresh copy, so no two interpreters share registry state.
    """
    merged: Dict[str, MethodDefinition] = {}
    for group in groups:
        for name, method in group.items():
            if not isinstance(method, MethodDefinition):
                raise TypeError(f"Method '{name}' is not a MethodDefinition")
            merged[name] = method
    return MappingProxyType(merged)


def extend_registry(
    base: MethodGroup, *groups: MethodGroup
) -> Mapping[str, MethodDefinition]:
    return compose_registry(base, *groups)
