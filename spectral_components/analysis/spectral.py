"""Decompose state spectra into spectral components.

"""

import logging

import numpy as np

from spectral_components.analysis.aggregate import aggregate_fits
from spectral_components.analysis.factorization import get_factorizer
from spectral_components.analysis.features import build_feature_matrix
from spectral_components.analysis.projection import (
    project_group,
    project_subjects,
    validate_profiles,
)
from spectral_components.config import Config
from spectral_components.utils.misc import override_dict_defaults

_logger = logging.getLogger("spectral-components")


def spectral_profiles(psd, coh, config):
    """Learn the spectral profiles.

    Parameters
    ----------
    psd : np.ndarray
        PSD diagonals. Shape must be (n_subjects, n_states, n_freq, n_channels).
    coh : np.ndarray
        Coherences. Shape must be
        (n_subjects, n_states, n_freq, n_channels, n_channels).
    config : spectral_components.config.Config
        Decomposition options.

    Returns
    -------
    profiles : np.ndarray
        Spectral profiles. Shape is (n_freq, n_components).
    """
    X, index = build_feature_matrix(psd, coh, basis=config.basis)

    _logger.info(
        f"Performing spectral decomposition: method={config.method.value}, "
        f"n_components={config.n_components}"
    )
    factorizer = get_factorizer(config)
    return factorizer.fit(X)


def decompose_spectra(fits, config=None, **kwargs):
    """Factorize state spectra into a small number of spectral components.

    From the PSD and coherence of each state (e.g. calculated with a
    multitaper or autoregressive model) for each subject, we learn a
    (n_freq, n_components) mixing matrix and use it to replace the frequency
    axis of every subject's spectra (and the subject-averaged spectra) with
    a component axis.

    Note, if NNMF is used the solution can vary each time this function is
    called unless :code:`random_state` is passed.

    Parameters
    ----------
    fits : list of SubjectFit
        Spectra for each subject. See
        :code:`spectral_components.analysis.aggregate.as_subject_fits` for
        accepted formats.
    config : spectral_components.config.Config or dict, optional
        Decomposition options.
    kwargs : optional
        Decomposition options. Override the values in :code:`config` if it
        is a dict, otherwise only used if :code:`config` is not passed. See
        :code:`spectral_components.config.Config`.

    Returns
    -------
    subject_fits : list of ReducedFit
        Reduced spectra for each subject. Shape of the PSD and coherence of
        each state is (n_components, n_channels, n_channels).
    group_fit : ReducedFit
        Reduced spectra of the mean across subjects.
    profiles : np.ndarray
        Spectral profiles used to project from frequency bins to components.
        Shape is (n_freq, n_components).
    """
    if config is None:
        config = Config(**kwargs)
    elif isinstance(config, dict):
        config = Config(**override_dict_defaults(config, kwargs))
    elif kwargs:
        raise ValueError("Pass either config or keyword arguments, not both.")

    # Validation
    psd, coh = aggregate_fits(fits)
    n_freq = psd.shape[2]
    config.validate_n_freq(n_freq)

    if config.profiles is not None:
        _logger.info("Using the spectral profiles passed")
        profiles = validate_profiles(config.profiles, n_freq, config.n_components)
    else:
        profiles = spectral_profiles(psd, coh, config)

    if config.plot:
        from spectral_components.utils import plotting

        if config.plot_filename is not None:
            plotting.plot_spectral_profiles(profiles, filename=config.plot_filename)
        else:
            fig, _ = plotting.plot_spectral_profiles(profiles)
            plotting.show(tight_layout=True)
            plotting.close(fig)

    group_fit = project_group(psd, coh, profiles)
    subject_fits = project_subjects(psd, coh, profiles, n_jobs=config.n_jobs)

    return subject_fits, group_fit, np.asarray(profiles)
