"""Tests for the matplotlib views."""

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt
import numpy as np
import pytest

from heatedplate.config import PlateConfig
from heatedplate.controller.solver import solve
from heatedplate.view.plot import plot_convergence, plot_temperature_distribution


@pytest.fixture(autouse=True)
def close_figures():
    yield
    plt.close("all")


def test_temperature_distribution():
    result = solve(PlateConfig(epsilon=0.1, rows=6, cols=8))

    fig = plot_temperature_distribution(result.grid)

    ax = fig.axes[0]
    image = ax.get_images()[0]
    np.testing.assert_array_equal(image.get_array(), result.grid)
    assert "6 x 8" in ax.get_title()


def test_distribution_into_existing_axes():
    fig, ax = plt.subplots()
    assert plot_temperature_distribution(np.zeros((3, 3)), ax=ax) is fig


def test_convergence_plot():
    result = solve(PlateConfig(epsilon=0.01, rows=6, cols=6, record_history=True))

    fig = plot_convergence(result.history, epsilon=0.01)

    ax = fig.axes[0]
    line = ax.get_lines()[0]
    np.testing.assert_array_equal(line.get_xdata(), [it for it, _ in result.history])
    assert ax.get_xscale() == "log"


def test_convergence_plot_needs_history():
    with pytest.raises(ValueError, match="empty"):
        plot_convergence([])
