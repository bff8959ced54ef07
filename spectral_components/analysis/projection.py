"""Project spectra onto spectral profiles.

"""

import logging
from dataclasses import dataclass

import numpy as np
from pqdm.processes import pqdm
from tqdm.auto import trange

from spectral_components import array_ops
from spectral_components.utils.errors import ProfileShapeError

_logger = logging.getLogger("spectral-components")


@dataclass(frozen=True, eq=False)
class ReducedEstimate:
    """Spectra of a single state with the frequency axis replaced by
    spectral components.

    Parameters
    ----------
    psd : np.ndarray
        Power for each component. Shape is (n_components, n_channels,
        n_channels), off-diagonal entries are zero.
    coh : np.ndarray
        Coherence for each component. Shape is (n_components, n_channels,
        n_channels), symmetric with a unit diagonal.
    """

    psd: np.ndarray
    coh: np.ndarray


@dataclass(frozen=True, eq=False)
class ReducedFit:
    """Reduced spectra for each state.

    Parameters
    ----------
    states : tuple of ReducedEstimate
        One estimate per state.
    """

    states: tuple

    @property
    def n_states(self):
        return len(self.states)

    @property
    def psd(self):
        """Stacked power. Shape is (n_states, n_components, n_channels,
        n_channels)."""
        return np.array([s.psd for s in self.states])

    @property
    def coh(self):
        """Stacked coherence. Shape is (n_states, n_components, n_channels,
        n_channels)."""
        return np.array([s.coh for s in self.states])

    def __len__(self):
        return len(self.states)

    def __iter__(self):
        return iter(self.states)

    def __getitem__(self, index):
        return self.states[index]


def validate_profiles(profiles, n_freq, n_components):
    """Check spectral profiles have shape (n_freq, n_components).

    Parameters
    ----------
    profiles : np.ndarray
        Spectral profiles.
    n_freq : int
        Number of frequency bins.
    n_components : int
        Number of components.

    Returns
    -------
    profiles : np.ndarray
        Spectral profiles.
    """
    profiles = np.asarray(profiles)
    if profiles.shape != (n_freq, n_components):
        raise ProfileShapeError(profiles.shape, n_freq, n_components)
    return profiles


def project_spectra(psd, coh, profiles):
    """Project the spectra of one subject (or a group average) onto spectral
    profiles.

    Parameters
    ----------
    psd : np.ndarray
        PSD diagonals. Shape must be (n_states, n_freq, n_channels).
    coh : np.ndarray
        Coherences. Shape must be (n_states, n_freq, n_channels, n_channels).
    profiles : np.ndarray
        Spectral profiles. Shape must be (n_freq, n_components).

    Returns
    -------
    fit : ReducedFit
        Reduced spectra.
    """
    n_states, n_freq, n_channels = psd.shape
    profiles = np.asarray(profiles)
    if profiles.ndim != 2 or profiles.shape[0] != n_freq:
        raise ProfileShapeError(profiles.shape, n_freq, "n_components")

    states = []
    for k in range(n_states):
        # (n_components, n_channels)
        psd_k = (np.abs(psd[k]).T @ profiles).T

        # (n_components, n_pairs)
        coh_k = (np.abs(array_ops.upper_triangle(coh[k])).T @ profiles).T

        states.append(
            ReducedEstimate(
                psd=array_ops.diagonal_to_matrix(psd_k),
                coh=array_ops.upper_triangle_to_matrix(coh_k, n_channels),
            )
        )

    return ReducedFit(tuple(states))


def project_group(psd, coh, profiles):
    """Project the subject-averaged spectra onto spectral profiles.

    Parameters
    ----------
    psd : np.ndarray
        Shape must be (n_subjects, n_states, n_freq, n_channels).
    coh : np.ndarray
        Shape must be (n_subjects, n_states, n_freq, n_channels, n_channels).
    profiles : np.ndarray
        Spectral profiles. Shape must be (n_freq, n_components).

    Returns
    -------
    fit : ReducedFit
        Reduced group-level spectra.
    """
    _logger.info("Projecting group-level spectra")
    psd = np.mean(np.abs(psd), axis=0)
    coh = np.mean(np.abs(coh), axis=0)
    return project_spectra(psd, coh, profiles)


def project_subjects(psd, coh, profiles, n_jobs=1):
    """Project the spectra of each subject onto spectral profiles.

    Parameters
    ----------
    psd : np.ndarray
        Shape must be (n_subjects, n_states, n_freq, n_channels).
    coh : np.ndarray
        Shape must be (n_subjects, n_states, n_freq, n_channels, n_channels).
    profiles : np.ndarray
        Spectral profiles. Shape must be (n_freq, n_components).
    n_jobs : int, optional
        Number of processes to use.

    Returns
    -------
    fits : list of ReducedFit
        Reduced spectra for each subject.
    """
    n_subjects = psd.shape[0]
    kwargs = [
        {"psd": psd[n], "coh": coh[n], "profiles": profiles}
        for n in range(n_subjects)
    ]

    if n_subjects == 1:
        _logger.info("Projecting subject-level spectra")
        return [project_spectra(**kwargs[0])]

    elif n_jobs == 1:
        fits = []
        for n in trange(n_subjects, desc="Projecting subject spectra"):
            fits.append(project_spectra(**kwargs[n]))
        return fits

    fits = pqdm(
        kwargs,
        project_spectra,
        n_jobs=n_jobs,
        argument_type="kwargs",
        desc="Projecting subject spectra",
    )
    for fit in fits:
        if isinstance(fit, Exception):
            raise fit
    return fits
