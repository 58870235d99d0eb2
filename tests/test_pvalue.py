import numpy as np
import pandas as pd
import pytest

from prismplot.core import add_pvalue


@pytest.fixture
def table():
    return pd.DataFrame({
        "group1": ["ctrl", "ctrl"],
        "group2": ["drug A", "drug B"],
        "p.adj": [0.012, 0.00003],
        "p.adj.signif": ["*", "****"],
        "y.position": [10.0, 11.0],
    })


def test_brackets_and_labels(category_ax, table):
    layer = add_pvalue(category_ax, table)
    assert len(layer.brackets) == 2
    assert [t.get_text() for t in layer.labels] == ["*", "****"]

    xs = layer.brackets[1].get_xdata()
    ys = layer.brackets[1].get_ydata()
    np.testing.assert_allclose(xs, [0, 0, 2, 2])
    assert ys[1] == ys[2] == pytest.approx(11.0)
    assert ys[0] < ys[1]
    assert layer.labels[0].xy == pytest.approx((0.5, 10.0))


def test_value_axis_expanded_to_fit(category_ax, table):
    add_pvalue(category_ax, table)
    assert category_ax.get_ylim()[1] > 11.0


def test_label_column_and_template(category_ax, table):
    layer = add_pvalue(category_ax, table, label="p.adj")
    assert layer.labels[0].get_text() == "0.012"
    layer = add_pvalue(category_ax, table, label="p = {p.adj}")
    assert [t.get_text() for t in layer.labels] == ["p = 0.012", "p = 3e-05"]


def test_default_label_prefers_label_column(category_ax, table):
    table["label"] = ["a", "b"]
    layer = add_pvalue(category_ax, table)
    assert layer.labels[1].get_text() == "b"


def test_missing_columns_listed(category_ax, table):
    with pytest.raises(ValueError, match="'y.pos'"):
        add_pvalue(category_ax, table, y_position="y.pos")
    with pytest.raises(ValueError, match="'q'"):
        add_pvalue(category_ax, table, label="{q}")


def test_no_label_column(category_ax):
    data = pd.DataFrame({"group1": ["ctrl"], "group2": ["drug A"], "y.position": [5.0]})
    with pytest.raises(ValueError, match="no label column"):
        add_pvalue(category_ax, data)


def test_unknown_group(category_ax, table):
    table.loc[0, "group2"] = "placebo"
    with pytest.raises(ValueError, match="placebo"):
        add_pvalue(category_ax, table)


def test_numeric_positions_and_shorten(category_ax, table):
    table["group1"] = [0.8, 1.8]
    table["group2"] = [1.2, 2.2]
    layer = add_pvalue(category_ax, table, bracket_shorten=0.2)
    np.testing.assert_allclose(layer.brackets[0].get_xdata(), [0.9, 0.9, 1.1, 1.1])


def test_step_increase_and_nudge(category_ax, table):
    table["y.position"] = [10.0, 10.0]
    lo, hi = category_ax.get_ylim()
    span = hi - lo
    layer = add_pvalue(category_ax, table, step_increase=0.1, bracket_nudge_y=1.0)
    assert layer.brackets[0].get_ydata()[1] == pytest.approx(11.0)
    assert layer.brackets[1].get_ydata()[1] == pytest.approx(11.0 + 0.1 * span)


def test_step_group_by_restarts(category_ax, table):
    table["y.position"] = [10.0, 10.0]
    table["facet"] = ["a", "b"]
    layer = add_pvalue(category_ax, table, step_increase=0.5, step_group_by="facet")
    heights = [line.get_ydata()[1] for line in layer.brackets]
    assert heights == pytest.approx([10.0, 10.0])


def test_tip_length_per_side(category_ax, table):
    lo, hi = category_ax.get_ylim()
    layer = add_pvalue(category_ax, table, tip_length=[0.0, 0.1])
    ys = layer.brackets[0].get_ydata()
    assert ys[0] == pytest.approx(10.0)
    assert ys[3] == pytest.approx(10.0 - 0.1 * (hi - lo))
    with pytest.raises(ValueError):
        add_pvalue(category_ax, table, tip_length=[0.1, 0.1, 0.1])


def test_tip_length_per_bracket(category_ax, table):
    lo, hi = category_ax.get_ylim()
    span = hi - lo
    layer = add_pvalue(category_ax, table, tip_length=[0.01, 0.02, 0.03, 0.04])
    first, second = (b.get_ydata() for b in layer.brackets)
    assert first[0] == pytest.approx(10.0 - 0.01 * span)
    assert first[3] == pytest.approx(10.0 - 0.02 * span)
    assert second[0] == pytest.approx(11.0 - 0.03 * span)
    assert second[3] == pytest.approx(11.0 - 0.04 * span)


def test_xmax_none_draws_labels_only(category_ax):
    data = {"group1": ["drug A"], "p": [0.01], "y.position": [10.0]}
    layer = add_pvalue(category_ax, data, xmax=None)
    assert layer.brackets == []
    assert layer.labels[0].get_text() == "0.01"
    assert layer.labels[0].xy == pytest.approx((1.0, 10.0))


def test_remove_bracket_and_x_column(category_ax, table):
    layer = add_pvalue(category_ax, table, remove_bracket=True)
    assert layer.brackets == []
    assert layer.labels[1].xy[0] == pytest.approx(1.0)

    table["x"] = ["drug A", "drug B"]
    layer = add_pvalue(category_ax, table, x="x")
    assert layer.brackets == []
    assert layer.labels[0].xy[0] == pytest.approx(1.0)


def test_colour_column_and_bracket_colour(category_ax, table):
    table["col"] = ["red", "blue"]
    layer = add_pvalue(category_ax, table, colour="col", bracket_colour="green")
    assert layer.labels[1].get_color() == "blue"
    assert layer.brackets[0].get_color() == "green"


def test_coord_flip(ax, table):
    ax.barh(["ctrl", "drug A", "drug B"], [4.0, 6.0, 9.0])
    layer = add_pvalue(ax, table, coord_flip=True)
    np.testing.assert_allclose(layer.brackets[0].get_ydata(), [0, 0, 1, 1])
    assert layer.brackets[0].get_xdata()[1] == pytest.approx(10.0)
    assert layer.labels[0].get_rotation() == pytest.approx(270)
    assert ax.get_xlim()[1] > 11.0


def test_seaborn_style_numeric_ticks(ax, table):
    ax.bar([0, 1, 2], [4.0, 6.0, 9.0])
    ax.set_xticks([0, 1, 2])
    ax.set_xticklabels(["ctrl", "drug A", "drug B"])
    layer = add_pvalue(ax, table)
    np.testing.assert_allclose(layer.brackets[0].get_xdata(), [0, 0, 1, 1])


def test_empty_table(category_ax, table):
    layer = add_pvalue(category_ax, table.iloc[0:0])
    assert layer.brackets == [] and layer.labels == []


def test_bad_numeric_arguments(category_ax, table):
    with pytest.raises(ValueError):
        add_pvalue(category_ax, table, label_size=0)
    with pytest.raises(ValueError):
        add_pvalue(category_ax, table, step_increase=-0.1)
    table["y.position"] = ["high", "low"]
    with pytest.raises(ValueError):
        add_pvalue(category_ax, table)
