"""Default-source provenance tests."""
import pytest
from pydantic import ValidationError

from reqplan.models.defaults import DefaultSource, DefaultSourceKind, FieldDefault


class TestDefaultSource:

    def test_preset_round_trips_through_label(self):
        source = DefaultSource.preset("Simple Form")
        assert source.label == "Preset: Simple Form"
        assert DefaultSource.from_label("Preset: Simple Form") == source

    @pytest.mark.parametrize("label,kind", [
        ("List Default", DefaultSourceKind.LIST_DEFAULT),
        ("Keyword Analysis", DefaultSourceKind.KEYWORD_ANALYSIS),
        ("Labels Analysis", DefaultSourceKind.LABELS_ANALYSIS),
        ("Title Analysis", DefaultSourceKind.TITLE_ANALYSIS),
        ("Sticky/Estimator", DefaultSourceKind.STICKY_ESTIMATOR),
        ("Default", DefaultSourceKind.SYSTEM_DEFAULT),
        ("  keyword analysis ", DefaultSourceKind.KEYWORD_ANALYSIS),
    ])
    def test_from_label(self, label, kind):
        assert DefaultSource.from_label(label).kind == kind

    def test_unknown_label_raises(self):
        with pytest.raises(ValueError):
            DefaultSource.from_label("Guesswork")

    def test_empty_preset_name_is_unknown(self):
        with pytest.raises(ValueError):
            DefaultSource.from_label("Preset: ")

    def test_preset_requires_name(self):
        with pytest.raises(ValidationError):
            DefaultSource(kind=DefaultSourceKind.PRESET)

    def test_name_only_for_presets(self):
        with pytest.raises(ValidationError):
            DefaultSource(kind=DefaultSourceKind.SYSTEM_DEFAULT, preset_name="X")


def test_field_default_tracks_override():
    default = FieldDefault(
        field="priority",
        value="High",
        source=DefaultSource(kind=DefaultSourceKind.KEYWORD_ANALYSIS),
        is_overridden=True,
    )
    assert default.is_overridden
    assert default.source.label == "Keyword Analysis"
