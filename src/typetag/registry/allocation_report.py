from dataclasses import dataclass, field
from enum import Enum
from typing import Optional
import json

from ..errors import ChangedIDWarning
from .registry import Assignment


class SeverityLevel(Enum):
    ERROR = "ERROR"
    WARN = "WARN"


@dataclass
class AllocationReport:
    """
    Output of one allocation run against one sidecar store: the ordered
    type id table, any change warnings, and at most one fatal error.
    """
    source: str
    assignments: list[Assignment] = field(default_factory=list)
    warnings: list[ChangedIDWarning] = field(default_factory=list)
    error: Optional[Exception] = None

    def is_valid(self) -> bool:
        return self.error is None

    def summary(self) -> str:
        errors = 0 if self.error is None else 1
        return f"{self.source}: {len(self.assignments)} type(s), {errors} error(s), {len(self.warnings)} warning(s)"

    def render_text_report(self) -> str:
        lines = [f"\n📦 {self.source}"]
        if self.error is not None:
            lines.append(f"  ❌ {self.error}")
        for w in self.warnings:
            lines.append(f"  ⚠️ {w}")
        return "\n".join(lines)

    def to_dict(self) -> dict:
        issues = []
        if self.error is not None:
            issues.append({
                "level": SeverityLevel.ERROR.value,
                "kind": type(self.error).__name__,
                "message": str(self.error),
            })
        for w in self.warnings:
            issues.append({
                "level": SeverityLevel.WARN.value,
                "kind": type(w).__name__,
                "message": str(w),
                "name": w.name,
                "old_id": w.old_id,
                "new_id": w.new_id,
            })
        return {
            "source": self.source,
            "types": [{"name": a.name, "id": a.tag_id} for a in self.assignments],
            "summary": {
                "error": 0 if self.error is None else 1,
                "warn": len(self.warnings),
            },
            "issues": issues,
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2)

    def exit_code(self) -> int:
        return 1 if self.error is not None else 0
