"""Plotting functions.

"""

import logging

import numpy as np
import matplotlib.pyplot as plt

from spectral_components.utils.misc import override_dict_defaults

_logger = logging.getLogger("spectral-components")

# Suppress matplotlib warnings
logging.getLogger("matplotlib.category").setLevel(logging.ERROR)


def create_figure(*args, **kwargs):
    """Creates matplotlib figure and axes objects.

    Parameters
    ----------
    fig_kwargs
        Arguments to pass to `plt.subplots <https://matplotlib.org/stable/api\
        /_as_gen/matplotlib.pyplot.subplots.html>`_.

    Returns
    -------
    fig : plt.figure
        Matplotlib figure.
    ax : array of plt.axes
        Array of axes (or single axis).
    """
    fig, ax = plt.subplots(*args, **kwargs)
    return fig, ax


def show(tight_layout=False):
    """Displays all figures in memory.

    Wrapper for `plt.show <https://matplotlib.org/stable/api/_as_gen/\
    matplotlib.pyplot.show.html>`_.

    Parameters
    ----------
    tight_layout : bool, optional
        Should we call :code:`plt.tight_layout()`?
    """
    if tight_layout:
        plt.tight_layout()
    plt.show()


def save(fig, filename, tight_layout=False):
    """Save and close a figure.

    Parameters
    ----------
    fig : plt.figure
        Matplotlib figure object.
    filename : str
        Output filename.
    tight_layout : bool, optional
        Should we call :code:`fig.tight_layout()`?
    """
    _logger.info(f"Saving {filename}")
    if tight_layout:
        fig.tight_layout()
    fig.savefig(filename)
    close(fig)


def close(fig=None):
    """Close a figure.

    Parameters
    ----------
    fig : plt.figure, optional
        Figure to close. Defaults to all figures.
    """
    if fig is None:
        fig = "all"
    plt.close(fig)


def plot_line(
    x,
    y,
    labels=None,
    x_range=None,
    y_range=None,
    x_label=None,
    y_label=None,
    title=None,
    plot_kwargs=None,
    fig_kwargs=None,
    ax=None,
    filename=None,
):
    """Basic line plot.

    Parameters
    ----------
    x : list of np.ndarray
        x-ordinates.
    y : list of np.ndarray
        y-ordinates.
    labels : list of str, optional
        Legend labels for each line.
    x_range : list, optional
        Minimum and maximum for x-axis.
    y_range : list, optional
        Minimum and maximum for y-axis.
    x_label : str, optional
        Label for x-axis.
    y_label : str, optional
        Label for y-axis.
    title : str, optional
        Figure title.
    plot_kwargs : dict, optional
        Arguments to pass to the `ax.plot <https://matplotlib.org/stable\
        /api/_as_gen/matplotlib.axes.Axes.plot.html>`_ method.
    fig_kwargs : dict, optional
        Arguments to pass to :code:`plt.subplots()`.
    ax : plt.axes, optional
        Axis object to plot on.
    filename : str, optional
        Output filename.

    Returns
    -------
    fig : plt.figure
        Matplotlib figure object. Only returned if :code:`ax=None` and
        :code:`filename=None`.
    ax : plt.axes
        Matplotlib axis object(s). Only returned if :code:`ax=None` and
        :code:`filename=None`.
    """

    # Validation
    if len(x) != len(y):
        raise ValueError("Different number of x and y arrays given.")

    if x_range is None:
        x_range = [None, None]

    if y_range is None:
        y_range = [None, None]

    if labels is not None:
        if isinstance(labels, str):
            labels = [labels]
        elif len(labels) != len(x):
            raise ValueError("Incorrect number of lines or labels passed.")
        add_legend = True
    else:
        labels = [None] * len(x)
        add_legend = False

    if ax is not None and filename is not None:
        raise ValueError(
            "Please use plotting.save() to save the figure instead of the "
            + "filename argument."
        )

    if fig_kwargs is None:
        fig_kwargs = {}
    default_fig_kwargs = {"figsize": (7, 4)}
    fig_kwargs = override_dict_defaults(default_fig_kwargs, fig_kwargs)

    if plot_kwargs is None:
        plot_kwargs = {}

    # Create figure
    create_fig = ax is None
    if create_fig:
        fig, ax = create_figure(**fig_kwargs)

    # Plot lines
    for x_data, y_data, label in zip(x, y, labels):
        ax.plot(x_data, y_data, label=label, **plot_kwargs)

    # Set axis range
    ax.set_xlim(x_range[0], x_range[1])
    ax.set_ylim(y_range[0], y_range[1])

    # Set title and axis labels
    ax.set_title(title)
    ax.set_xlabel(x_label)
    ax.set_ylabel(y_label)

    # Add a legend
    if add_legend:
        ax.legend()

    # Save figure
    if filename is not None:
        save(fig, filename, tight_layout=True)
    elif create_fig:
        return fig, ax


def profile_grid(n_components):
    """Rows and columns used to plot spectral profiles.

    Parameters
    ----------
    n_components : int
        Number of components.

    Returns
    -------
    n_rows : int
    n_cols : int
    """
    if n_components > 4:
        return int(np.ceil(n_components / 2)), 2
    return n_components, 1


def plot_spectral_profiles(
    profiles,
    frequencies=None,
    x_label=None,
    plot_kwargs=None,
    fig_kwargs=None,
    filename=None,
):
    """Plot each spectral profile on its own axis.

    Parameters
    ----------
    profiles : np.ndarray
        Spectral profiles. Shape must be (n_freq, n_components).
    frequencies : np.ndarray, optional
        Frequency axis. Defaults to the frequency bin index.
    x_label : str, optional
        Label for the x-axis of the bottom row.
    plot_kwargs : dict, optional
        Arguments to pass to :code:`ax.plot`. Defaults to
        :code:`{'linewidth': 2.5}`.
    fig_kwargs : dict, optional
        Arguments to pass to :code:`plt.subplots()`.
    filename : str, optional
        Output filename.

    Returns
    -------
    fig : plt.figure
        Matplotlib figure object. Only returned if :code:`filename=None`.
    ax : np.ndarray of plt.axes
        Matplotlib axis objects. Only returned if :code:`filename=None`.
    """
    profiles = np.asarray(profiles)
    if profiles.ndim != 2:
        raise ValueError("profiles must have shape (n_freq, n_components).")
    n_freq, n_components = profiles.shape

    if frequencies is None:
        frequencies = np.arange(n_freq)
        if x_label is None:
            x_label = "Frequency bin"
    elif len(frequencies) != n_freq:
        raise ValueError("frequencies must have length n_freq.")

    n_rows, n_cols = profile_grid(n_components)

    default_fig_kwargs = {"figsize": (4 * n_cols, 1.5 * n_rows + 1), "squeeze": False}
    fig_kwargs = override_dict_defaults(default_fig_kwargs, fig_kwargs)
    plot_kwargs = override_dict_defaults({"linewidth": 2.5}, plot_kwargs)

    fig, ax = create_figure(n_rows, n_cols, **fig_kwargs)
    axes = ax.flatten()
    for j in range(n_components):
        plot_line(
            [frequencies],
            [profiles[:, j]],
            title=f"Component {j}",
            plot_kwargs=plot_kwargs,
            ax=axes[j],
        )
    for j in range(n_components, len(axes)):
        axes[j].axis("off")
    for a in ax[-1]:
        a.set_xlabel(x_label)

    if filename is not None:
        save(fig, filename, tight_layout=True)
    else:
        return fig, ax
