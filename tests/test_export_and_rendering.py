"""
Tests for JSON export and matplotlib rendering of the fields.

Run with: pytest tests/test_export_and_rendering.py
"""

import json
import matplotlib
matplotlib.use('Agg')

import pytest
import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from knn_boundary.export_utils import export_fields_to_json, fields_to_dict
from knn_boundary.point_set import PointSet
from knn_boundary.recompute import FieldSession
from knn_boundary.rendering import label_colors, plot_fields


@pytest.fixture
def session():
    points = PointSet([
        (39.1, 18.7, "Adelie"),
        (46.1, 13.2, "Gentoo"),
        (39.5, 17.4, "Adelie"),
        (46.5, 17.9, "Chinstrap"),
        (50.0, 15.2, "Gentoo"),
    ])
    s = FieldSession(points, radius=1.0, margin=2.0, follow_k=False)
    s.update(3)
    return s


class TestExport:
    """Test field export"""

    def test_fields_to_dict(self, session):
        decision, density = session.fields()
        data = fields_to_dict(session.grid, decision, density, 3, points=session.dataset)
        assert data['k'] == 3
        assert data['radius'] == 1.0
        assert data['n_cells'] == len(session.grid)
        assert data['n_occupied'] == len(density)
        assert len(data['cells']) == len(session.grid)
        assert len(data['hexagon']) == 6
        assert set(data['labels']) <= {"Adelie", "Gentoo", "Chinstrap"}

        occupied = [c for c in data['cells'] if c['density_label'] is not None]
        assert len(occupied) == len(density)
        assert sum(c['count'] for c in occupied) == len(session.dataset)
        assert all(c['predicted_label'] is not None for c in data['cells'])

    def test_without_points_has_no_counts(self, session):
        decision, density = session.fields()
        data = fields_to_dict(session.grid, decision, density, 3)
        assert all('count' not in c for c in data['cells'])

    def test_export_writes_json(self, session, tmp_path):
        decision, density = session.fields()
        save_path = tmp_path / "out" / "fields.json"
        export_fields_to_json(session.grid, decision, density, 3, str(save_path), points=session.dataset)
        with open(save_path) as f:
            data = json.load(f)
        assert data['n_cells'] == len(session.grid)
        assert data['extent'] == [float(v) for v in session.grid.extent]


class TestRendering:
    """Test matplotlib rendering"""

    def test_label_colors_ordinal(self):
        colors = label_colors(["Gentoo", "Adelie", "Gentoo", "Chinstrap"])
        assert list(colors) == ["Gentoo", "Adelie", "Chinstrap"]
        cmap = matplotlib.colormaps['tab10']
        assert colors["Gentoo"] == cmap(0)
        assert colors["Chinstrap"] == cmap(2)

    def test_plot_saves_png(self, session, tmp_path):
        decision, density = session.fields()
        save_path = tmp_path / "frames" / "k003.png"
        result = plot_fields(session.grid, decision, density, 3, save_path=str(save_path))
        assert result is None
        assert save_path.exists()
        assert save_path.stat().st_size > 0

    def test_plot_returns_figure(self, session):
        import matplotlib.pyplot as plt
        decision, density = session.fields()
        fig = plot_fields(session.grid, decision, density, 3)
        ax = fig.axes[0]
        assert ax.get_title() == "k = 3"
        assert ax.get_xlabel() == "Bill Length (mm)"
        assert ax.get_ylabel() == "Bill Depth (mm)"
        assert len(ax.collections) == 2
        plt.close(fig)

    def test_plot_empty_fields(self, tmp_path):
        empty = FieldSession(PointSet(), radius=1.0)
        empty.update(1)
        save_path = tmp_path / "empty.png"
        plot_fields(empty.grid, {}, {}, 1, save_path=str(save_path))
        assert save_path.exists()


if __name__ == "__main__":
    pytest.main([__file__, "-v", "-s"])
