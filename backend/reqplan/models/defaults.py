"""Provenance of pre-filled estimate and requirement values."""
from enum import Enum as PyEnum

from pydantic import BaseModel, model_validator

PRESET_PREFIX = "Preset: "


class DefaultSourceKind(str, PyEnum):
    LIST_DEFAULT = "list_default"
    KEYWORD_ANALYSIS = "keyword_analysis"
    LABELS_ANALYSIS = "labels_analysis"
    TITLE_ANALYSIS = "title_analysis"
    PRESET = "preset"
    STICKY_ESTIMATOR = "sticky_estimator"
    SYSTEM_DEFAULT = "system_default"


# Display labels as written by the form layer
_LABELS: dict[DefaultSourceKind, str] = {
    DefaultSourceKind.LIST_DEFAULT: "List Default",
    DefaultSourceKind.KEYWORD_ANALYSIS: "Keyword Analysis",
    DefaultSourceKind.LABELS_ANALYSIS: "Labels Analysis",
    DefaultSourceKind.TITLE_ANALYSIS: "Title Analysis",
    DefaultSourceKind.STICKY_ESTIMATOR: "Sticky/Estimator",
    DefaultSourceKind.SYSTEM_DEFAULT: "Default",
}


class DefaultSource(BaseModel):
    """Closed set of provenance tags; only presets carry a name."""

    kind: DefaultSourceKind
    preset_name: str | None = None

    class Config:
        frozen = True

    @model_validator(mode="after")
    def _preset_name_matches_kind(self) -> "DefaultSource":
        if self.kind == DefaultSourceKind.PRESET and not self.preset_name:
            raise ValueError("preset source requires preset_name")
        if self.kind != DefaultSourceKind.PRESET and self.preset_name is not None:
            raise ValueError("preset_name is only allowed for preset sources")
        return self

    @classmethod
    def preset(cls, name: str) -> "DefaultSource":
        return cls(kind=DefaultSourceKind.PRESET, preset_name=name)

    @classmethod
    def from_label(cls, label: str) -> "DefaultSource":
        """Parse a display label. Raises ValueError on an unknown label."""
        text = (label or "").strip()
        if text.startswith(PRESET_PREFIX) and text[len(PRESET_PREFIX):].strip():
            return cls.preset(text[len(PRESET_PREFIX):].strip())
        for kind, kind_label in _LABELS.items():
            if text.lower() == kind_label.lower():
                return cls(kind=kind)
        raise ValueError(f"Unknown default source: {label!r}")

    @property
    def label(self) -> str:
        if self.kind == DefaultSourceKind.PRESET:
            return f"{PRESET_PREFIX}{self.preset_name}"
        return _LABELS[self.kind]


class FieldDefault(BaseModel):
    """A pre-filled value for one field and whether the user overrode it."""

    field: str
    value: str | None = None
    source: DefaultSource
    is_overridden: bool = False

    class Config:
        frozen = True
