"""Tests for the Fermi surface driver in examples/."""

import importlib.util
import io
from pathlib import Path

import numpy as np
import pytest

from iso2d import Isoline

_EXAMPLE = Path(__file__).resolve().parent.parent / "examples" / "fermi_surface.py"


def _load_example():
    spec = importlib.util.spec_from_file_location("fermi_surface", _EXAMPLE)
    if spec is None or spec.loader is None:
        raise ImportError(f"Cannot load module fermi_surface from {_EXAMPLE}")
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


@pytest.fixture(scope="module")
def fermi():
    return _load_example()


class TestFermiSurfaceExample:
    def test_band_minimum(self, fermi):
        assert fermi.band_energy((0.0, 0.0, 0.0), {"t": 1.0}) == pytest.approx(-6.0)

    def test_kz0_slice(self, fermi):
        assert fermi.band_kz0(np.array([np.pi, np.pi]), {"t": 0.5}) == pytest.approx(1.0)

    def test_d_wave_weight(self, fermi):
        assert fermi.d_wave_weight((0.0, 1.0)) == 0.0
        assert fermi.d_wave_weight((1.0, 1.0)) == pytest.approx(0.0, abs=1e-12)
        assert fermi.d_wave_weight((1.0, np.tan(np.pi / 8))) == pytest.approx(1.0)

    def test_write_format(self, fermi):
        iso = Isoline(np.array([[1.0, 0.0], [0.5, 0.25]]), np.array([[0, 1]]))
        buf = io.StringIO()
        fermi.write_isoline(buf, iso)
        lines = buf.getvalue().splitlines()
        assert lines[0] == "# 2 1"
        assert lines[1] == "1 0 0"
        assert len(lines[2].split()) == 3
        assert lines[3] == "0 1"

    def test_main_writes_file(self, fermi, tmp_path):
        out = tmp_path / "fermi.txt"
        fermi.main(["--n", "30", "--mu", "-1.0", "--out", str(out)])
        lines = out.read_text().splitlines()
        n_vertices, n_edges = (int(x) for x in lines[0].lstrip("# ").split())
        assert n_vertices > 0
        assert len(lines) == 1 + n_vertices + n_edges
