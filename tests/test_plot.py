from poreflow.bmp import GREY, GREY_LIGHT
from poreflow.meniscus import Meniscus
from poreflow.plot import (
    plot_with_radius,
    plot_without_radius,
    render_with_radius,
    render_without_radius,
)


def _colours(bitmap):
    return {
        bitmap.pixel(x, y) for x in range(bitmap.width) for y in range(bitmap.height)
    }


def _table(fluid, rows=2, cols=2):
    return [[Meniscus(0, fluid) for _ in range(cols)] for _ in range(rows)]


def test_strip_picture_grey_network():
    bitmap = render_without_radius(_table(1), 100)
    assert (bitmap.width, bitmap.height) == (100, 100)
    colours = _colours(bitmap)
    assert GREY_LIGHT in colours
    assert GREY not in colours


def test_strip_picture_blue_network():
    colours = _colours(render_without_radius(_table(0), 100))
    assert GREY in colours
    assert GREY_LIGHT not in colours


def test_radius_picture_colours_follow_fluid():
    radius = [[1.0, 2.0], [3.0, 4.0]]
    grey = _colours(render_with_radius(_table(1), radius, 100))
    blue = _colours(render_with_radius(_table(0), radius, 100))
    assert GREY_LIGHT in grey and GREY not in grey
    assert GREY in blue and GREY_LIGHT not in blue


def test_radius_picture_mixed_tube_has_both():
    mns = [[Meniscus(1, 0, [0.5, 0.0]) for _ in range(2)] for _ in range(2)]
    colours = _colours(render_with_radius(mns, [[1.0, 1.0], [1.0, 1.0]], 100))
    assert GREY in colours and GREY_LIGHT in colours


def test_plot_without_radius_writes_file(tmp_path):
    mns = _table(1)
    path = plot_without_radius(mns, 3, tmp_path / "plots", 100)
    assert path.name == "stp-3.bmp"
    assert path.read_bytes() == render_without_radius(mns, 100).to_bytes()


def test_plot_with_radius_writes_file(tmp_path):
    mns = _table(0)
    radius = [[1.0, 2.0], [2.0, 1.0]]
    path = plot_with_radius(mns, radius, 7, tmp_path, 100)
    assert path.name == "pic-7.bmp"
    assert path.read_bytes() == render_with_radius(mns, radius, 100).to_bytes()