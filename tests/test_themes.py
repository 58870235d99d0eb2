import matplotlib as mpl
import matplotlib.pyplot as plt
import pytest

from prismplot.styles import themes


def test_theme_defaults():
    theme = themes.theme_prism()
    assert theme.palette == "black_and_white"
    assert theme.base_line_size == pytest.approx(1.0)
    assert theme.major_tick_length == pytest.approx(14 / 2.5)
    assert theme.minor_tick_length == pytest.approx(14 / 5)


def test_rc_params_are_valid_rcparams():
    rc = themes.theme_prism("prism_dark", base_size=10, border=True).rc_params()
    for key in rc:
        assert key in mpl.rcParams
    assert rc["axes.facecolor"] == "#3A3A3A"
    assert rc["axes.spines.top"] is True
    assert rc["xtick.major.size"] == pytest.approx(4.0)
    assert rc["font.weight"] == "bold"


def test_context_is_temporary():
    before = mpl.rcParams["axes.spines.right"]
    with themes.theme_prism().context():
        assert mpl.rcParams["axes.spines.right"] is False
        assert mpl.rcParams["axes.grid"] is False
    assert mpl.rcParams["axes.spines.right"] == before


def test_apply_updates_global_rcparams():
    with mpl.rc_context():
        themes.theme_prism("ocean", base_size=12).apply()
        assert mpl.rcParams["font.size"] == pytest.approx(12)
        assert mpl.rcParams["figure.facecolor"] == "#020338"


def test_fontface_maps_to_weight_and_style():
    rc = themes.theme_prism(base_fontface="bold.italic").rc_params()
    assert rc["font.weight"] == "bold"
    assert rc["font.style"] == "italic"


@pytest.mark.parametrize(
    "kwargs",
    [
        {"palette": "nope"},
        {"base_size": 0},
        {"base_size": "14"},
        {"base_fontface": "heavy"},
        {"axis_text_angle": 30},
        {"base_line_size": -1},
        {"border": "yes"},
    ],
)
def test_theme_rejects_bad_arguments(kwargs):
    with pytest.raises(ValueError):
        themes.theme_prism(**kwargs)


def test_style_axes_rotates_labels_and_hides_spines(category_ax):
    theme = themes.theme_prism("colors", axis_text_angle=45)
    theme.style_axes(category_ax)
    assert not category_ax.spines["top"].get_visible()
    assert not category_ax.spines["right"].get_visible()
    label = category_ax.get_xticklabels()[0]
    assert label.get_rotation() == pytest.approx(45)
    assert label.get_horizontalalignment() == "right"
    assert label.get_verticalalignment() == "top"


def test_style_axes_border(ax):
    themes.theme_prism(border=True).style_axes(ax)
    assert all(spine.get_visible() for spine in ax.spines.values())


def test_preview_theme_returns_figure():
    fig = themes.preview_theme("floral")
    try:
        ax = fig.axes[0]
        assert ax.get_title() == "floral"
        assert len(ax.lines) == 3
    finally:
        plt.close(fig)


def test_preview_theme_rejects_more_groups_than_shapes():
    with pytest.raises(ValueError, match="n_groups"):
        themes.preview_theme("colors", n_groups=10)
    with pytest.raises(ValueError, match="n_groups"):
        themes.preview_theme("colors", n_groups=0)


def test_requires_recent_matplotlib(monkeypatch):
    monkeypatch.setattr(themes, "MIN_MATPLOTLIB", "999.0")
    with pytest.raises(ImportError, match="needed for this function"):
        themes.theme_prism()
