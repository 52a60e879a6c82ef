from __future__ import annotations

from typing import Any, Dict, Iterable


def format_diagnostics(diagnostics: Dict[str, Any]) -> str:
    lines = ["Configuration diagnostics:"]
    unknown = diagnostics.get("unknown_keys") or []
    retired = diagnostics.get("retired_keys") or {}
    adjusted = diagnostics.get("adjusted") or []
    warnings = diagnostics.get("warnings") or []

    def _format_block(title: str, values: Iterable[str]) -> None:
        values = list(values)
        if not values:
            lines.append(f"  - {title}: none")
        else:
            lines.append(f"  - {title} ({len(values)}):")
            lines.extend([f"      * {value}" for value in values])

    _format_block("unknown", unknown)
    _format_block("retired", [f"{key} -> {owner}" for key, owner in retired.items()])
    _format_block("adjusted", adjusted)
    _format_block("warnings", warnings)
    return "\n".join(lines)
