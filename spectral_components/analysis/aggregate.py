"""Classes and functions for collecting per-subject spectral fits into dense
arrays.

"""

import logging
from dataclasses import dataclass

import numpy as np

from spectral_components.utils.errors import StructuralMismatchError

_logger = logging.getLogger("spectral-components")


@dataclass(frozen=True, eq=False)
class SpectralEstimate:
    """Spectra of a single state for a single subject.

    Parameters
    ----------
    psd : np.ndarray
        Power spectral density. Shape must be (n_freq, n_channels, n_channels)
        or (n_freq, n_channels). Only the diagonal of a full matrix is used.
    coh : np.ndarray
        Coherence. Shape must be (n_freq, n_channels, n_channels).
    """

    psd: np.ndarray
    coh: np.ndarray

    def __post_init__(self):
        psd = np.asarray(self.psd)
        coh = np.asarray(self.coh)

        if psd.ndim not in [2, 3]:
            raise ValueError(
                "psd must have shape (n_freq, n_channels, n_channels) "
                "or (n_freq, n_channels)."
            )
        if psd.ndim == 3 and psd.shape[1] != psd.shape[2]:
            raise ValueError("psd matrices must be square.")
        if coh.ndim != 3 or coh.shape[1] != coh.shape[2]:
            raise ValueError("coh must have shape (n_freq, n_channels, n_channels).")

        object.__setattr__(self, "psd", psd)
        object.__setattr__(self, "coh", coh)

        if self.psd.shape[0] != self.coh.shape[0]:
            raise StructuralMismatchError(
                "n_freq", self.psd.shape[0], self.coh.shape[0]
            )
        if self.psd.shape[1] != self.coh.shape[1]:
            raise StructuralMismatchError(
                "n_channels", self.psd.shape[1], self.coh.shape[1]
            )

    @property
    def n_freq(self):
        return self.psd.shape[0]

    @property
    def n_channels(self):
        return self.psd.shape[1]

    def psd_diagonal(self):
        """Power at each frequency for each channel.

        Returns
        -------
        psd : np.ndarray
            Shape is (n_freq, n_channels).
        """
        if self.psd.ndim == 2:
            return self.psd
        return np.diagonal(self.psd, axis1=1, axis2=2)


@dataclass(frozen=True, eq=False)
class SubjectFit:
    """Spectra for each state of a single subject.

    Parameters
    ----------
    states : tuple of SpectralEstimate
        One estimate per state.
    """

    states: tuple

    def __post_init__(self):
        states = tuple(
            s if isinstance(s, SpectralEstimate) else SpectralEstimate(**s)
            for s in self.states
        )
        if len(states) == 0:
            raise ValueError("A subject fit must contain at least one state.")
        object.__setattr__(self, "states", states)

        # All states must share the same dimensions
        for k, state in enumerate(states[1:], start=1):
            for name in ["n_freq", "n_channels"]:
                expected = getattr(states[0], name)
                got = getattr(state, name)
                if got != expected:
                    raise StructuralMismatchError(name, expected, got, state=k)

    @classmethod
    def from_arrays(cls, psd, coh):
        """Create a subject fit from stacked arrays.

        Parameters
        ----------
        psd : np.ndarray
            Shape must be (n_states, n_freq, n_channels, n_channels) or
            (n_states, n_freq, n_channels).
        coh : np.ndarray
            Shape must be (n_states, n_freq, n_channels, n_channels).

        Returns
        -------
        fit : SubjectFit
        """
        psd = np.asarray(psd)
        coh = np.asarray(coh)
        if len(psd) != len(coh):
            raise StructuralMismatchError("n_states", len(psd), len(coh))
        return cls(tuple(SpectralEstimate(p, c) for p, c in zip(psd, coh)))

    @property
    def n_states(self):
        return len(self.states)

    @property
    def n_freq(self):
        return self.states[0].n_freq

    @property
    def n_channels(self):
        return self.states[0].n_channels

    def __len__(self):
        return len(self.states)

    def __iter__(self):
        return iter(self.states)

    def __getitem__(self, index):
        return self.states[index]


def as_subject_fits(fits):
    """Convert user input into a list of :code:`SubjectFit` objects.

    Parameters
    ----------
    fits : list or SubjectFit
        A :code:`SubjectFit`, a list of :code:`SubjectFit`, a list of lists of
        :code:`SpectralEstimate` (or dicts with :code:`'psd'`/:code:`'coh'`
        keys), or a tuple of stacked arrays :code:`(psd, coh)` with shapes
        (n_subjects, n_states, n_freq, n_channels[, n_channels]) and
        (n_subjects, n_states, n_freq, n_channels, n_channels).

    Returns
    -------
    fits : list of SubjectFit
    """
    if isinstance(fits, SubjectFit):
        return [fits]

    if isinstance(fits, tuple) and len(fits) == 2 and all(
        isinstance(a, np.ndarray) for a in fits
    ):
        psd, coh = fits
        if len(psd) != len(coh):
            raise StructuralMismatchError("n_subjects", len(psd), len(coh))
        return [SubjectFit.from_arrays(p, c) for p, c in zip(psd, coh)]

    subject_fits = []
    for fit in fits:
        if isinstance(fit, SubjectFit):
            subject_fits.append(fit)
        else:
            subject_fits.append(SubjectFit(tuple(fit)))
    return subject_fits


def check_consistency(fits):
    """Check every subject has the same number of states, frequency bins and
    channels as the first subject.

    Parameters
    ----------
    fits : list of SubjectFit
        Subject fits.

    Returns
    -------
    n_states : int
        Number of states.
    n_freq : int
        Number of frequency bins.
    n_channels : int
        Number of channels.
    """
    if len(fits) == 0:
        raise ValueError("At least one subject fit must be passed.")

    reference = fits[0]
    for n, fit in enumerate(fits[1:], start=1):
        for name in ["n_states", "n_freq", "n_channels"]:
            expected = getattr(reference, name)
            got = getattr(fit, name)
            if got != expected:
                raise StructuralMismatchError(name, expected, got, subject=n)

    return reference.n_states, reference.n_freq, reference.n_channels


def aggregate_fits(fits):
    """Put the spectra of all subjects and states into dense arrays.

    Parameters
    ----------
    fits : list of SubjectFit
        Spectral fits. See :code:`as_subject_fits` for accepted formats.

    Returns
    -------
    psd : np.ndarray
        PSD diagonals. Shape is (n_subjects, n_states, n_freq, n_channels).
    coh : np.ndarray
        Coherences. Shape is
        (n_subjects, n_states, n_freq, n_channels, n_channels).
    """
    fits = as_subject_fits(fits)
    n_states, n_freq, n_channels = check_consistency(fits)
    n_subjects = len(fits)

    _logger.info(
        f"Aggregating spectra: {n_subjects} subjects, {n_states} states, "
        f"{n_freq} frequency bins, {n_channels} channels"
    )

    psd_dtype = np.result_type(*{s.psd.dtype for f in fits for s in f})
    coh_dtype = np.result_type(*{s.coh.dtype for f in fits for s in f})
    psd = np.empty([n_subjects, n_states, n_freq, n_channels], dtype=psd_dtype)
    coh = np.empty(
        [n_subjects, n_states, n_freq, n_channels, n_channels], dtype=coh_dtype
    )
    for n, fit in enumerate(fits):
        for k, state in enumerate(fit):
            psd[n, k] = state.psd_diagonal()
            coh[n, k] = state.coh

    return psd, coh
