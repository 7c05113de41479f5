import math

import pytest
from PySide6.QtCore import QSettings

from balloonspots.config import DemoConfig, EscapeParams


def test_defaults_are_the_tuned_values():
    config = DemoConfig()

    assert config.spring.strength == 1.4
    assert config.spring.radius == 600.0
    assert config.damping.resistance == 25.5
    assert config.damping.density == 0.006
    assert config.escape == EscapeParams()
    assert config.escape.gravity_direction == (0.0, -0.4)
    assert config.shuffle_interval == 5.0
    assert config.cleanup_delay == 12.0
    assert config.balloon_size == (60.0, 90.0)
    assert config.angles == pytest.approx([k * math.pi / 4 for k in range(8)])
    assert config.frame_interval == pytest.approx(1.0 / 60.0)


@pytest.mark.parametrize("field", ["shuffle_interval", "grace_period", "cleanup_delay", "frame_rate", "radius_divisor"])
def test_non_positive_timings_are_rejected(field):
    with pytest.raises(ValueError):
        DemoConfig(**{field: 0.0})


def test_invalid_layout_is_rejected():
    with pytest.raises(ValueError):
        DemoConfig(balloon_size=(0.0, 90.0))
    with pytest.raises(ValueError):
        DemoConfig(angles=())


def test_from_settings_reads_overrides(tmp_path):
    settings = QSettings(str(tmp_path / "demo.ini"), QSettings.Format.IniFormat)
    settings.setValue("demo/shuffle_interval", 2.5)
    settings.setValue("spring/strength", "2.0")
    settings.setValue("escape/vortex_strength", 0.1)
    settings.sync()

    config = DemoConfig.from_settings(QSettings(str(tmp_path / "demo.ini"), QSettings.Format.IniFormat))

    assert config.shuffle_interval == 2.5
    assert config.spring.strength == 2.0
    assert config.escape.vortex_strength == pytest.approx(0.1)
    # Untouched values keep their defaults
    assert config.cleanup_delay == 12.0
    assert config.damping.resistance == 25.5


def test_from_empty_settings_is_default(tmp_path):
    settings = QSettings(str(tmp_path / "empty.ini"), QSettings.Format.IniFormat)
    assert DemoConfig.from_settings(settings) == DemoConfig()
