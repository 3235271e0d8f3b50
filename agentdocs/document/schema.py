"""Frontmatter schema — what an agent document may declare.

The keys mirror what OpenCode-style hosts read from an agent file.
Unknown keys are kept on the model so nothing an author wrote is lost
when a document is rendered back out.
"""

from __future__ import annotations

from typing import Any, Union

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    field_validator,
)

from agentdocs.config import settings
from agentdocs.types import AgentMode, PermissionAction

# A category maps to one action, or to an ordered {glob: action} table.
PatternMap = dict[str, PermissionAction]
PermissionRule = Union[PermissionAction, PatternMap]

# Permission categories the host understands
KNOWN_PERMISSIONS = (
    "edit", "bash", "webfetch", "read", "task",
    "external_directory", "doom_loop",
)

# Which tool flag gates each permission category
PERMISSION_TOOLS: dict[str, tuple[str, ...]] = {
    "bash": ("bash",),
    "edit": ("edit", "write", "patch"),
    "webfetch": ("webfetch",),
    "read": ("read",),
    "task": ("task",),
}

# Order used when writing frontmatter back out
FIELD_ORDER = (
    "name", "description", "mode", "model", "temperature", "top_p",
    "tools", "permission", "max_steps", "disable", "hidden", "color", "prompt",
)


def _normalize_keyword(value: Any) -> Any:
    if isinstance(value, str):
        return value.strip().lower()
    return value


class AgentConfig(BaseModel):
    """Configuration block of an agent definition document."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    name: str | None = None
    description: str = ""
    mode: AgentMode = Field(
        default_factory=lambda: AgentMode(settings.default_mode),
    )
    model: str | None = None
    temperature: float | None = Field(default=None, ge=0.0, le=2.0)
    top_p: float | None = Field(default=None, ge=0.0, le=1.0)

    tools: dict[str, StrictBool] = Field(
        default_factory=dict,
        description="Tool name (or glob) -> enabled. Unlisted tools are enabled.",
    )
    permission: dict[str, PermissionRule] = Field(
        default_factory=dict,
        description="Category -> action, or category -> {pattern: action}.",
    )

    max_steps: int | None = Field(
        default=None,
        ge=1,
        validation_alias=AliasChoices("max_steps", "maxSteps", "steps"),
    )
    disable: bool = False
    hidden: bool = False
    color: str | None = None
    prompt: str | None = None

    @field_validator("description", mode="before")
    @classmethod
    def _coerce_description(cls, value: Any) -> Any:
        if value is None:
            return ""
        if isinstance(value, str):
            return value.strip()
        return value

    @field_validator("mode", mode="before")
    @classmethod
    def _coerce_mode(cls, value: Any) -> Any:
        return _normalize_keyword(value)

    @field_validator("permission", mode="before")
    @classmethod
    def _coerce_permission(cls, value: Any) -> Any:
        if value is None:
            return {}
        if isinstance(value, str):
            # Shorthand: `permission: deny` applies to every category
            return {"*": _normalize_keyword(value)}
        if not isinstance(value, dict):
            return value
        normalized: dict[Any, Any] = {}
        for category, rule in value.items():
            if isinstance(rule, dict):
                normalized[category] = {
                    str(pattern): _normalize_keyword(action)
                    for pattern, action in rule.items()
                }
            else:
                normalized[category] = _normalize_keyword(rule)
        return normalized

    @field_validator("tools", mode="before")
    @classmethod
    def _coerce_tools(cls, value: Any) -> Any:
        return {} if value is None else value

    # ── Accessors ──

    @property
    def extra_fields(self) -> dict[str, Any]:
        return dict(self.model_extra or {})

    def rule_for(self, category: str) -> PermissionRule | None:
        """Rule configured for a category, falling back to the `*` category."""
        if category in self.permission:
            return self.permission[category]
        return self.permission.get("*")

    def to_frontmatter(self) -> dict[str, Any]:
        """Dump to a plain dict in frontmatter key order, dropping unset values."""
        data = self.model_dump(mode="json", exclude_none=True)
        out: dict[str, Any] = {}
        for key in FIELD_ORDER:
            if key not in data:
                continue
            value = data[key]
            if key in ("tools", "permission") and not value:
                continue
            if key in ("disable", "hidden") and not value:
                continue
            if key == "description" and not value:
                continue
            out["maxSteps" if key == "max_steps" else key] = value
        for key, value in self.extra_fields.items():
            out[key] = value
        return out
