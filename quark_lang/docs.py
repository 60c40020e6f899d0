from typing import Mapping

from .models import MethodDefinition


def generate_docstring(name: str, method: MethodDefinition) -> str:
    params = method.documentation.params
    signature = " ".join([name] + [p.name for p in params])
    header = "Parameters:" if params else ""
    details = "\n".join(
        f"{p.name}: {p.description} [{p.type or 'any'}]" for p in params
    )
    return f"{signature}\n\n{method.documentation.summary}\n\n{header}\n\n{details}"


def list_methods(methods: Mapping[str, MethodDefinition]) -> str:
    lines = []
    for name, method in methods.items():
        params = " ".join(f"{p.name}: {p.type or 'any'}" for p in method.documentation.params)
        lines.append(f"{name} {params}")
    return "\n".join(lines)
