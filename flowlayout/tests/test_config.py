"""Tests for layout configuration."""

import pytest
from pydantic import ValidationError

from flowlayout.engine import InvalidConfigError, LayoutConfig, create_layout_config, default_config


class TestDefaults:
    """Tests for default values."""

    def test_ring_defaults(self, config: LayoutConfig) -> None:
        """Test ring geometry defaults."""
        assert config.sizing.core_size == 120
        assert config.sizing.element_size == 80
        assert config.sizing.child_size == 50
        assert config.radial.base_radius == 180
        assert config.radial.ring_spacing == 140
        assert config.radial.start_angle == -90
        assert config.radial.child_orbit_radius == 60

    def test_canvas_defaults(self, config: LayoutConfig) -> None:
        """Test canvas defaults."""
        assert config.canvas.padding == 60
        assert (config.canvas.min_width, config.canvas.min_height) == (800, 600)

    def test_default_config_cached(self) -> None:
        """Test default_config() returns one shared instance."""
        assert default_config() is default_config()

    def test_type_presets(self, config: LayoutConfig) -> None:
        """Test type presets resolve to sizes and unknown types to None."""
        assert config.type_default_size("system").width == 240
        assert config.type_default_size("start").width == 96
        assert config.type_default_size("widget") is None


class TestCreateLayoutConfig:
    """Tests for create_layout_config()."""

    def test_nested_override_keeps_siblings(self) -> None:
        """Test overriding one field keeps the rest of its section."""
        config = create_layout_config({"radial": {"ring_spacing": 100}})
        assert config.radial.ring_spacing == 100
        assert config.radial.base_radius == 180

    def test_keyword_overrides(self) -> None:
        """Test keyword overrides apply after the mapping."""
        config = create_layout_config({"strategy": "grid"}, strategy="layered", child_layout="clustered")
        assert config.strategy == "layered"
        assert config.child_layout == "clustered"

    @pytest.mark.parametrize(
        "overrides",
        [
            {"strategy": "spiral"},
            {"child_layout": "scattered"},
            {"radial": {"child_orbit_radius": -5}},
            {"radial": {"arc_spread": 400}},
            {"grid": {"nodes_per_row": 0}},
            {"spacing": {"unknown_gap": 3}},
        ],
    )
    def test_invalid_values_rejected(self, overrides) -> None:
        """Test invalid overrides raise InvalidConfigError."""
        with pytest.raises(InvalidConfigError):
            create_layout_config(overrides)

    def test_invalid_config_is_value_error(self) -> None:
        """Test callers can catch configuration errors as ValueError."""
        with pytest.raises(ValueError):
            create_layout_config(canvas={"padding": -1})


class TestImmutability:
    """Tests for frozen configuration."""

    def test_assignment_rejected(self, config: LayoutConfig) -> None:
        """Test attributes cannot be reassigned."""
        with pytest.raises(ValidationError):
            config.strategy = "grid"
        with pytest.raises(ValidationError):
            config.radial.base_radius = 10
