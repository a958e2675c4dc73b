"""Tests for viewer configuration loading."""

import pytest

from minsurf.config import (
    MINSURF_CONFIG,
    ConfigError,
    ViewerConfig,
    load_config,
    user_config_path,
)
from minsurf.tessellate import Mesh, Wireframe
from minsurf.trackball import TrackballRotator


@pytest.fixture
def isolated_home(tmp_path, monkeypatch):
    """Point HOME at an empty directory and clear the env override."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.delenv(MINSURF_CONFIG, raising=False)
    return home


def write_yaml(path, text):
    path.write_text(text, encoding="utf-8")
    return path


class TestViewerConfig:

    def test_defaults(self):
        config = ViewerConfig()
        assert config.surface == "richmond"
        assert config.u_steps == 50
        assert config.v_steps == 50
        assert config.topology == "surface"
        assert config.view_distance is None
        assert config.view_direction == (0, 0, 10)

    def test_from_dict(self):
        config = ViewerConfig.from_dict({
            "surface": "sievert",
            "surface_params": {"c": 0.5},
            "u_steps": 8,
            "v_steps": "4",
            "view_direction": [1, 2, 3],
            "width": 640,
        })
        assert config.surface == "sievert"
        assert config.surface_params == {"c": 0.5}
        assert config.u_steps == 8
        assert config.v_steps == 4
        assert config.view_direction == (1.0, 2.0, 3.0)
        assert config.width == 640.0

    def test_empty_mapping(self):
        assert ViewerConfig.from_dict(None) == ViewerConfig()
        assert ViewerConfig.from_dict({}) == ViewerConfig()

    def test_unknown_key(self):
        with pytest.raises(ConfigError, match="unknown configuration keys"):
            ViewerConfig.from_dict({"surfce": "plane"})

    def test_not_a_mapping(self):
        with pytest.raises(ConfigError):
            ViewerConfig.from_dict([1, 2, 3])

    def test_bad_steps_fall_back(self):
        config = ViewerConfig.from_dict({"u_steps": 0, "v_steps": "lots"})
        assert config.u_steps == 50
        assert config.v_steps == 50

    @pytest.mark.parametrize("data", [
        {"view_direction": [1, 2]},
        {"view_up": "up"},
        {"view_direction": None},
        {"rotation_center": [0, True, 0]},
        {"view_distance": -1},
        {"view_distance": float("inf")},
        {"width": 0},
        {"topology": "points"},
        {"surface": ""},
        {"surface_params": [1]},
    ])
    def test_invalid_values(self, data):
        with pytest.raises(ConfigError):
            ViewerConfig.from_dict(data)

    def test_config_error_is_value_error(self):
        assert issubclass(ConfigError, ValueError)

    def test_updated_returns_copy(self):
        config = ViewerConfig()
        other = config.updated(surface="plane", u_steps=2)
        assert other.surface == "plane"
        assert other.u_steps == 2
        assert config.surface == "richmond"


class TestWiring:

    def test_build_surface(self):
        config = ViewerConfig.from_dict({"surface": "sphere",
                                         "surface_params": {"radius": 2}})
        surface = config.build_surface()
        assert surface.name == "sphere"
        assert surface.evaluate(0.0, 0.0) == pytest.approx((2.0, 0.0, 0.0))

    def test_build_surface_bad_params(self):
        config = ViewerConfig.from_dict({"surface": "plane",
                                         "surface_params": {"radius": 2}})
        with pytest.raises(ConfigError):
            config.build_surface()

    def test_unknown_surface(self):
        config = ViewerConfig.from_dict({"surface": "torus"})
        with pytest.raises(KeyError):
            config.build_surface()

    def test_build_rotator(self):
        calls = []
        config = ViewerConfig.from_dict({"view_distance": 5,
                                         "rotation_center": [1, 2, 3],
                                         "width": 300, "height": 200})
        rot = config.build_rotator(lambda: calls.append(1))
        assert isinstance(rot, TrackballRotator)
        assert rot.get_view_distance() == 5.0
        assert rot.get_rotation_center() == (1.0, 2.0, 3.0)
        assert rot.viewport == (300.0, 200.0)

    def test_tessellate(self):
        mesh = ViewerConfig.from_dict({"surface": "plane", "u_steps": 2,
                                       "v_steps": 3}).tessellate()
        assert isinstance(mesh, Mesh)
        assert len(mesh.vertices) == 12
        wire = ViewerConfig.from_dict({"surface": "plane", "u_steps": 2,
                                       "v_steps": 3,
                                       "topology": "wireframe"}).tessellate()
        assert isinstance(wire, Wireframe)
        assert len(wire.strips) == 3 + 4


class TestLoadConfig:

    def test_defaults_without_files(self, isolated_home):
        assert load_config() == ViewerConfig()

    def test_explicit_path(self, isolated_home, tmp_path):
        path = write_yaml(tmp_path / "viewer.yaml",
                          "surface: enneper\nu_steps: 12\nview_up: [0, 0, 1]\n")
        config = load_config(path)
        assert config.surface == "enneper"
        assert config.u_steps == 12
        assert config.view_up == (0.0, 0.0, 1.0)

    def test_empty_file(self, isolated_home, tmp_path):
        path = write_yaml(tmp_path / "empty.yaml", "")
        assert load_config(str(path)) == ViewerConfig()

    def test_missing_explicit_path(self, isolated_home, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "nope.yaml")

    def test_invalid_yaml(self, isolated_home, tmp_path):
        path = write_yaml(tmp_path / "bad.yaml", "surface: [plane\n")
        with pytest.raises(ConfigError, match="invalid YAML"):
            load_config(path)

    def test_env_override(self, isolated_home, tmp_path, monkeypatch):
        path = write_yaml(tmp_path / "env.yaml", "surface: sphere\n")
        monkeypatch.setenv(MINSURF_CONFIG, str(path))
        assert load_config().surface == "sphere"

    def test_env_missing_file(self, isolated_home, tmp_path, monkeypatch):
        monkeypatch.setenv(MINSURF_CONFIG, str(tmp_path / "gone.yaml"))
        with pytest.raises(FileNotFoundError):
            load_config()

    def test_user_config(self, isolated_home):
        path = user_config_path()
        assert str(path).startswith(str(isolated_home))
        path.parent.mkdir(parents=True)
        write_yaml(path, "surface: plane\ntopology: wireframe\n")
        config = load_config()
        assert config.surface == "plane"
        assert config.topology == "wireframe"

    def test_explicit_path_beats_env(self, isolated_home, tmp_path, monkeypatch):
        env = write_yaml(tmp_path / "env.yaml", "surface: sphere\n")
        explicit = write_yaml(tmp_path / "explicit.yaml", "surface: plane\n")
        monkeypatch.setenv(MINSURF_CONFIG, str(env))
        assert load_config(explicit).surface == "plane"
