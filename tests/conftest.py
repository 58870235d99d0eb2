import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt
import pytest


@pytest.fixture
def ax():
    fig, ax = plt.subplots()
    yield ax
    plt.close(fig)


@pytest.fixture
def category_ax(ax):
    ax.bar(["ctrl", "drug A", "drug B"], [4.0, 6.0, 9.0])
    return ax
