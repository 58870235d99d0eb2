import numpy as np
import pytest
from matplotlib.markers import TICKDOWN, TICKRIGHT, TICKUP
from matplotlib.ticker import AutoMinorLocator, FixedLocator, LogLocator, NullLocator

from prismplot.core import add_pvalue

from prismplot.core import axis_utils


def _line_ax(ax):
    ax.plot([0.5, 9.5], [3, 47])
    ax.set_xlim(0, 10)
    ax.set_ylim(0, 50)
    ax.set_yticks([10, 20, 30, 40])
    return ax


def test_ticks_in_view_excludes_outside_ticks(ax):
    _line_ax(ax)
    ax.set_yticks([-10, 10, 20, 60])
    ax.set_ylim(0, 50)
    assert list(axis_utils.ticks_in_view(ax, "y")) == [10, 20]


def test_offset_bounds_spine_to_outer_ticks(ax):
    _line_ax(ax)
    spine = axis_utils.guide_prism_offset(ax, axis="y")
    assert spine is ax.spines["left"]
    assert spine.get_bounds() == (10, 40)


def test_offset_on_top_axis(ax):
    _line_ax(ax)
    ax.set_xticks([2, 4, 6])
    spine = axis_utils.guide_prism_offset(ax, axis="x", position="top")
    assert spine is ax.spines["top"]
    assert spine.get_bounds() == (2, 6)


def test_offset_without_ticks_hides_spine(ax):
    _line_ax(ax)
    ax.set_yticks([])
    spine = axis_utils.guide_prism_offset(ax, axis="y")
    assert not spine.get_visible()


def test_offset_invalid_arguments(ax):
    with pytest.raises(ValueError):
        axis_utils.guide_prism_offset(ax, axis="z")
    with pytest.raises(ValueError):
        axis_utils.guide_prism_offset(ax, axis="x", position="left")


def test_minor_auto_and_fixed(ax):
    _line_ax(ax)
    locator = axis_utils.guide_prism_minor(ax, axis="y")
    assert isinstance(locator, AutoMinorLocator)
    minor = set(axis_utils.ticks_in_view(ax, "y", "minor"))
    assert {5, 15, 25, 35, 45} <= minor
    assert not minor & {10, 20, 30, 40}

    locator = axis_utils.guide_prism_minor(ax, axis="x", minor_breaks=[1, 3, 5])
    assert isinstance(locator, FixedLocator)


def test_minor_log_axis(ax):
    ax.plot([1, 1000], [1, 2])
    ax.set_xscale("log")
    assert isinstance(axis_utils.guide_prism_minor(ax, axis="x"), LogLocator)


def test_minor_length_and_bad_n(ax):
    _line_ax(ax)
    axis_utils.guide_prism_minor(ax, axis="y", minor_length=3)
    assert ax.yaxis.get_minor_ticks()[0].tick1line.get_markersize() == pytest.approx(3)
    with pytest.raises(ValueError):
        axis_utils.guide_prism_minor(ax, axis="y", n=1)


def test_offset_minor_includes_minor_ticks(ax):
    _line_ax(ax)
    spine = axis_utils.guide_prism_offset_minor(ax, axis="y", minor_breaks=[5, 45])
    assert spine.get_bounds() == (5, 45)


def test_bracket_per_category(category_ax):
    brackets = axis_utils.guide_prism_bracket(category_ax, axis="x")
    assert len(brackets) == 3
    assert not category_ax.spines["bottom"].get_visible()
    first = brackets[0]
    np.testing.assert_allclose(first.get_xdata(), [-0.4, 0.4])
    np.testing.assert_allclose(first.get_ydata(), [0, 0])
    assert first.get_marker() == TICKDOWN
    assert first.get_clip_on() is False
    assert category_ax.xaxis.get_major_ticks()[0].tick1line.get_markersize() == 0


def test_bracket_inside_and_custom_width(category_ax):
    brackets = axis_utils.guide_prism_bracket(category_ax, axis="x", width=0.5, outside=False)
    assert brackets[1].get_marker() == TICKUP
    np.testing.assert_allclose(brackets[1].get_xdata(), [0.75, 1.25])
    with pytest.raises(ValueError):
        axis_utils.guide_prism_bracket(category_ax, axis="x", width=0)


def test_bracket_on_y_axis(ax):
    ax.barh(["a", "b"], [1, 2])
    brackets = axis_utils.guide_prism_bracket(ax, axis="y")
    assert len(brackets) == 2
    np.testing.assert_allclose(brackets[0].get_xdata(), [0, 0])


def test_annotation_ticks_are_separate_artists(ax):
    _line_ax(ax)
    direction = ax.xaxis.get_major_ticks()[0].get_tickdir()
    top, left = axis_utils.annotation_ticks(ax, sides="tl", which="major", tick_length=6)

    assert top.get_marker() == TICKDOWN
    np.testing.assert_allclose(top.get_ydata(), 1.0)
    np.testing.assert_allclose(top.get_xdata(), axis_utils.ticks_in_view(ax, "x"))
    assert left.get_marker() == TICKRIGHT
    np.testing.assert_allclose(left.get_ydata(), [10, 20, 30, 40])
    assert left.get_markersize() == pytest.approx(6)
    assert top.get_clip_on() is False
    # the axis ticks themselves are untouched
    assert ax.xaxis.get_major_ticks()[0].get_tickdir() == direction


def test_annotation_ticks_outside(ax):
    _line_ax(ax)
    (bottom,) = axis_utils.annotation_ticks(ax, sides="b", which="major", outside=True)
    assert bottom.get_marker() == TICKDOWN
    np.testing.assert_allclose(bottom.get_ydata(), 0.0)


def test_annotation_minor_ticks_without_minor_locator(ax):
    _line_ax(ax)
    major, minor = axis_utils.annotation_ticks(ax, sides="b", which="both", minor_length=2)
    assert isinstance(ax.xaxis.get_minor_locator(), NullLocator)
    assert minor.get_xdata().size > 0
    assert not set(minor.get_xdata()) & set(major.get_xdata())
    assert minor.get_markersize() == pytest.approx(2)


@pytest.mark.parametrize("kwargs", [{"sides": "x"}, {"sides": ""}, {"which": "all"}])
def test_annotation_ticks_invalid(ax, kwargs):
    with pytest.raises(ValueError):
        axis_utils.annotation_ticks(ax, **kwargs)


def test_offset_follows_new_limits(ax):
    ax.plot([0, 10], [0, 10])
    spine = axis_utils.guide_prism_offset(ax, axis="y")
    ax.set_ylim(2, 5)
    ticks = axis_utils.ticks_in_view(ax, "y")
    assert ticks[0] >= 2 and ticks[-1] <= 5
    assert spine.get_bounds() == pytest.approx((ticks[0], ticks[-1]))


def test_offset_follows_autoscale_at_draw(ax):
    ax.plot([0, 10], [0, 10])
    spine = axis_utils.guide_prism_offset(ax, axis="y")
    ax.plot([0, 10], [0, 100])
    ax.figure.canvas.draw()
    ticks = axis_utils.ticks_in_view(ax, "y")
    assert ticks[-1] >= 100
    assert spine.get_bounds() == pytest.approx((ticks[0], ticks[-1]))


def test_offset_minor_follows_add_pvalue(category_ax):
    spine = axis_utils.guide_prism_offset_minor(category_ax, axis="y")
    add_pvalue(category_ax, {"group1": ["ctrl"], "group2": ["drug B"], "p": [0.01], "y.position": [20.0]})
    ticks = axis_utils.ticks_in_view(category_ax, "y", "both")
    assert ticks[-1] > 20
    assert spine.get_bounds() == pytest.approx((ticks[0], ticks[-1]))


def test_bracket_replaces_offset_guide(category_ax):
    axis_utils.guide_prism_offset(category_ax, axis="x")
    axis_utils.guide_prism_bracket(category_ax, axis="x")
    category_ax.set_xlim(-1, 3)
    assert not category_ax.spines["bottom"].get_visible()


def test_bracket_single_category_default_width(ax):
    ax.bar(["only"], [3.0])
    (bracket,) = axis_utils.guide_prism_bracket(ax, axis="x")
    np.testing.assert_allclose(bracket.get_xdata(), [-0.4, 0.4])
