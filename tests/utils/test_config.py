"""
Unit tests for configuration validation

Tests the configuration system including:
- Field constraints enforced by the model
- Playability warnings against a screen size
- Saving and loading JSON configuration files
"""

import json
import logging

import pytest
from pydantic import ValidationError

from trippin.utils.config import (
    TrippinConfig,
    load_config_from_file,
    trippin_config,
    validate_trippin_config,
)

PHONE_WIDTH = 390
PHONE_HEIGHT = 844


class TestTrippinConfigFields:
    """Test field defaults and constraints"""

    def test_defaults(self):
        config = TrippinConfig()

        assert config.GRAVITY == 1800
        assert config.FLAP_IMPULSE == -520
        assert config.SPEED == 260
        assert config.MAX_SPEED == 320
        assert config.SPEED_RAMP_PER_SEC == 4
        assert config.TERMINAL_VELOCITY == 900
        assert config.GAP_HEIGHT == 240
        assert config.MIN_GAP_HEIGHT == 200
        assert config.GAP_SHRINK_PER_SEC == 0
        assert config.PIPE_SPACING == 320
        assert config.PIPE_WIDTH == 72
        assert config.BIRD_SIZE == 72
        assert config.FLOOR_PADDING == 28
        assert config.STAMP_CHANCE == 0.35

    def test_config_is_frozen(self):
        """Test that a configuration cannot change under a running engine"""
        config = TrippinConfig()
        with pytest.raises(ValidationError):
            config.GRAVITY = 10  # type: ignore[misc]

    @pytest.mark.parametrize(
        "field,value",
        [
            ("GRAVITY", -1),
            ("TERMINAL_VELOCITY", 0),
            ("BIRD_SIZE", 0),
            ("SPEED", 0),
            ("PIPE_WIDTH", -72),
            ("STAMP_CHANCE", 1.5),
            ("STAMP_CHANCE", -0.1),
            ("FPS", 0),
            ("FLAP_IMPULSE", 0),
        ],
    )
    def test_invalid_values_rejected(self, field, value):
        with pytest.raises(ValidationError):
            TrippinConfig(**{field: value})

    def test_speed_above_max_rejected(self):
        with pytest.raises(ValidationError, match="MAX_SPEED"):
            TrippinConfig(SPEED=400, MAX_SPEED=320)

    def test_min_gap_above_gap_rejected(self):
        with pytest.raises(ValidationError, match="MIN_GAP_HEIGHT"):
            TrippinConfig(GAP_HEIGHT=150, MIN_GAP_HEIGHT=200)

    def test_zero_gravity_allowed(self):
        """Zero gravity is legal, it only produces a warning"""
        assert TrippinConfig(GRAVITY=0).GRAVITY == 0

    def test_impulse_is_always_upward(self):
        assert TrippinConfig(FLAP_IMPULSE=-520).impulse == -520
        assert TrippinConfig(FLAP_IMPULSE=520).impulse == -520

    def test_editable_fields(self):
        fields = TrippinConfig.get_editable_fields()

        assert "GRAVITY" in fields
        assert fields["GRAVITY"]["default"] == 1800
        assert fields["FPS"]["type"] is int
        assert fields["STAMP_CHANCE"]["description"]


class TestTrippinConfigValidation:
    """Test playability warnings"""

    def test_valid_default_config(self):
        """Test that default configuration is playable on a phone screen"""
        warnings = validate_trippin_config(TrippinConfig(), PHONE_WIDTH, PHONE_HEIGHT)

        assert warnings == []

    def test_non_positive_screen(self):
        warnings = validate_trippin_config(TrippinConfig(), 0, -10)

        assert warnings == ["Screen dimensions must be positive"]

    def test_flyer_larger_than_gap(self):
        config = TrippinConfig(BIRD_SIZE=210)
        warnings = validate_trippin_config(config, 1200, PHONE_HEIGHT)

        assert any("smallest gap" in w for w in warnings)

    def test_gap_taller_than_screen(self):
        config = TrippinConfig(GAP_HEIGHT=900)
        warnings = validate_trippin_config(config, PHONE_WIDTH, PHONE_HEIGHT)

        assert any("playable height" in w for w in warnings)

    def test_gap_band_leaves_screen(self):
        config = TrippinConfig(GAP_HEIGHT=400)
        warnings = validate_trippin_config(config, PHONE_WIDTH, 600)

        assert any("top of the screen" in w for w in warnings)
        assert any("below the floor" in w for w in warnings)

    def test_pipes_without_spacing(self):
        config = TrippinConfig(PIPE_SPACING=60)
        warnings = validate_trippin_config(config, PHONE_WIDTH, PHONE_HEIGHT)

        assert any("PIPE_SPACING" in w for w in warnings)

    def test_narrow_screen(self):
        warnings = validate_trippin_config(TrippinConfig(), 200, PHONE_HEIGHT)

        assert any("horizontal position" in w for w in warnings)

    def test_zero_gravity_warns(self):
        warnings = validate_trippin_config(TrippinConfig(GRAVITY=0), PHONE_WIDTH, PHONE_HEIGHT)

        assert warnings == ["GRAVITY is zero, the flyer will not fall"]

    def test_terminal_velocity_clips_flap(self):
        config = TrippinConfig(TERMINAL_VELOCITY=400)
        warnings = validate_trippin_config(config, PHONE_WIDTH, PHONE_HEIGHT)

        assert any("TERMINAL_VELOCITY" in w for w in warnings)


class TestConfigFiles:
    """Test JSON persistence of configurations"""

    def test_save_and_load(self, tmp_path):
        path = tmp_path / "trippin_config.json"
        config = TrippinConfig(GRAVITY=1500, STAMP_CHANCE=0.5)

        config.save_to_file(str(path))
        loaded = TrippinConfig.load_from_file(str(path))

        assert loaded == config
        assert json.loads(path.read_text())["GRAVITY"] == 1500

    def test_partial_file_keeps_defaults(self, tmp_path):
        path = tmp_path / "partial.json"
        path.write_text(json.dumps({"SPEED": 300}))

        loaded = TrippinConfig.load_from_file(str(path))

        assert loaded.SPEED == 300
        assert loaded.GRAVITY == 1800

    def test_load_missing_file_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            TrippinConfig.load_from_file(str(tmp_path / "missing.json"))

    def test_fallback_on_missing_file(self, tmp_path):
        assert load_config_from_file(str(tmp_path / "missing.json")) is trippin_config

    def test_fallback_on_invalid_file(self, tmp_path, caplog):
        path = tmp_path / "broken.json"
        path.write_text(json.dumps({"GRAVITY": -5}))

        with caplog.at_level(logging.WARNING, logger="trippin.utils.config"):
            config = load_config_from_file(str(path))

        assert config is trippin_config
        assert "Error loading config" in caplog.text

    def test_fallback_on_unreadable_path(self, tmp_path, caplog):
        """A directory given as config path falls back to the defaults"""
        with caplog.at_level(logging.WARNING, logger="trippin.utils.config"):
            config = load_config_from_file(str(tmp_path))

        assert config is trippin_config
        assert "Error loading config" in caplog.text


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
