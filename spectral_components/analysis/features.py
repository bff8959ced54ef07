"""Build the (frequency, feature) matrix that is factorized.

"""

import logging
from dataclasses import dataclass

import numpy as np

from spectral_components import array_ops
from spectral_components.config import Basis

_logger = logging.getLogger("spectral-components")


@dataclass(frozen=True, eq=False)
class FeatureIndex:
    """Mapping from the columns of a feature matrix to (state, channel pair).

    Parameters
    ----------
    basis : Basis
        Quantity the features are based on.
    n_states : int
        Number of states.
    n_channels : int
        Number of channels.
    """

    basis: Basis
    n_states: int
    n_channels: int

    @property
    def n_features_per_state(self):
        if self.basis is Basis.PSD:
            return self.n_channels
        return array_ops.n_pairs(self.n_channels)

    @property
    def n_features(self):
        return self.n_states * self.n_features_per_state

    @property
    def channel_pairs(self):
        """Channel indices for the features of one state.

        Returns
        -------
        i, j : np.ndarray
            Row and column channel index of each feature. For the PSD basis
            :code:`i == j`.
        """
        if self.basis is Basis.PSD:
            i = np.arange(self.n_channels)
            return i, i
        return np.triu_indices(self.n_channels, 1)

    def columns(self, state):
        """Columns of the feature matrix that belong to a state."""
        if not 0 <= state < self.n_states:
            raise IndexError(f"state must be between 0 and {self.n_states - 1}.")
        start = state * self.n_features_per_state
        return slice(start, start + self.n_features_per_state)

    def labels(self):
        """(state, channel_i, channel_j) for every column.

        Returns
        -------
        labels : np.ndarray
            Shape is (n_features, 3).
        """
        i, j = self.channel_pairs
        labels = [
            np.stack([np.full_like(i, k), i, j], axis=1)
            for k in range(self.n_states)
        ]
        return np.concatenate(labels)

    def extract(self, psd, coh):
        """Select the features of one state from spectra.

        Parameters
        ----------
        psd : np.ndarray
            Shape must be (..., n_freq, n_channels).
        coh : np.ndarray
            Shape must be (..., n_freq, n_channels, n_channels).

        Returns
        -------
        features : np.ndarray
            Shape is (..., n_freq, n_features_per_state).
        """
        if self.basis is Basis.PSD:
            return psd
        return array_ops.upper_triangle(coh)


def build_feature_matrix(psd, coh, basis=Basis.COH):
    """Build the matrix to factorize.

    For each state we average the magnitude of the spectra over subjects and
    concatenate the states along the feature axis. With the coherence basis
    only the upper triangle of each coherence matrix is kept.

    Parameters
    ----------
    psd : np.ndarray
        PSD diagonals. Shape must be (n_subjects, n_states, n_freq, n_channels).
    coh : np.ndarray
        Coherences. Shape must be
        (n_subjects, n_states, n_freq, n_channels, n_channels).
    basis : str or Basis, optional
        :code:`'coh'` (default) or :code:`'psd'`.

    Returns
    -------
    X : np.ndarray
        Feature matrix. Shape is (n_freq, n_states * n_features_per_state).
    index : FeatureIndex
        Which state and channel pair each column of :code:`X` corresponds to.
    """
    basis = Basis.resolve(basis)

    # Validation
    psd = array_ops.validate(
        psd,
        correct_dimensionality=4,
        allow_dimensions=[],
        error_message="psd must have shape (n_subjects, n_states, n_freq, n_channels).",
    )
    coh = array_ops.validate(
        coh,
        correct_dimensionality=5,
        allow_dimensions=[],
        error_message=(
            "coh must have shape "
            "(n_subjects, n_states, n_freq, n_channels, n_channels)."
        ),
    )
    n_subjects, n_states, n_freq, n_channels = psd.shape

    _logger.info(f"Building feature matrix using the {basis.value} basis")

    index = FeatureIndex(basis, n_states, n_channels)
    X = np.empty([n_freq, index.n_features])
    for k in range(n_states):
        features = index.extract(psd[:, k], coh[:, k])
        X[:, index.columns(k)] = np.mean(np.abs(features), axis=0)

    _logger.debug(f"Feature matrix shape: {X.shape}")

    return X, index
