import matplotlib.pyplot as plt

from spikelag.core import histogram
from spikelag.viz import plot_correlogram, plot_histogram


def test_plot_histogram_draws_one_bar_per_bucket():
    hist = histogram([-1.0, 0.0, 0.0, 1.5], lo=-2, hi=2, bucket_width=1)
    fig, ax = plt.subplots()
    plot_histogram(ax, hist)
    assert len(ax.patches) == hist.n_buckets
    assert [p.get_height() for p in ax.patches] == hist.counts.tolist()
    assert ax.get_xlim() == (-2.0, 2.0)
    plt.close(fig)


def test_plot_correlogram_saves(tmp_path):
    hist = histogram([0.0, 0.1], lo=-1, hi=1, bucket_width=0.5)
    out = tmp_path / "ccg.png"
    fig = plot_correlogram(hist, title="pair", save=out)
    assert out.exists()
    assert fig.axes[0].get_title() == "pair"
    plt.close(fig)
