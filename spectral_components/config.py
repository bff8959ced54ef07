"""Options for the spectral decomposition.

"""

import logging
from dataclasses import dataclass
from enum import Enum

import numpy as np

from spectral_components.utils.errors import (
    ComponentCountError,
    InvalidConfigurationError,
)

_logger = logging.getLogger("spectral-components")


class Method(Enum):
    """Factorization method."""

    NNMF = "nnmf"
    PCA = "pca"

    @classmethod
    def resolve(cls, value):
        """Get a :code:`Method` from a string or :code:`Method`.

        Parameters
        ----------
        value : str or Method
            E.g. :code:`'NNMF'`, :code:`'nmf'`,
            :code:`'nonnegative-factorization'`, :code:`'PCA'` or
            :code:`'principal-component'`.

        Returns
        -------
        method : Method
        """
        if isinstance(value, cls):
            return value
        aliases = {
            "nnmf": cls.NNMF,
            "nmf": cls.NNMF,
            "nonnegative-factorization": cls.NNMF,
            "non-negative-factorization": cls.NNMF,
            "pca": cls.PCA,
            "principal-component": cls.PCA,
        }
        if not isinstance(value, str) or value.lower() not in aliases:
            raise InvalidConfigurationError(
                f"method must be 'nnmf' or 'pca', got {value!r}."
            )
        return aliases[value.lower()]


class Basis(Enum):
    """Quantity the factorization is based on."""

    PSD = "psd"
    COH = "coh"

    @classmethod
    def resolve(cls, value):
        """Get a :code:`Basis` from a string or :code:`Basis`.

        Parameters
        ----------
        value : str or Basis
            :code:`'psd'`, :code:`'coh'` or :code:`'coherence'`.

        Returns
        -------
        basis : Basis
        """
        if isinstance(value, cls):
            return value
        aliases = {"psd": cls.PSD, "coh": cls.COH, "coherence": cls.COH}
        if not isinstance(value, str) or value.lower() not in aliases:
            raise InvalidConfigurationError(
                f"basis must be 'psd' or 'coh', got {value!r}."
            )
        return aliases[value.lower()]


@dataclass
class Config:
    """Settings for the spectral decomposition.

    Parameters
    ----------
    n_components : int
        Number of spectral components. Default is 4.
    method : str or Method
        Factorization method: :code:`'nnmf'` (default) or :code:`'pca'`.
    basis : str or Basis
        Quantity to factorize: :code:`'coh'` (default) or :code:`'psd'`.
    profiles : np.ndarray
        Spectral profiles, shape (n_freq, n_components). If passed, these are
        used instead of computing them.
    plot : bool
        Should we plot the spectral profiles? Default is True.
    plot_filename : str
        Filename to save the plot of the spectral profiles to.

    n_init : int
        Number of random restarts for NNMF. The solution with the lowest
        reconstruction error is kept. Default is 500.
    max_iter : int
        Maximum number of iterations for each NNMF run.
    random_state : int
        Seed for the random number generator used by NNMF. Pass an int for
        reproducible profiles.
    n_jobs : int
        Number of processes to use for NNMF restarts and projecting
        subject spectra.
    """

    n_components: int = 4
    method: Method = Method.NNMF
    basis: Basis = Basis.COH
    profiles: np.ndarray = None
    plot: bool = True
    plot_filename: str = None

    # NNMF parameters
    n_init: int = 500
    max_iter: int = 1000
    random_state: int = None

    n_jobs: int = 1

    def __post_init__(self):
        self.validate_decomposition_parameters()
        self.validate_profiles()
        self.validate_nnmf_parameters()

    def validate_decomposition_parameters(self):
        self.method = Method.resolve(self.method)
        self.basis = Basis.resolve(self.basis)

        if (
            isinstance(self.n_components, bool)
            or not isinstance(self.n_components, (int, np.integer))
            or self.n_components < 1
        ):
            raise ComponentCountError(self.n_components)
        self.n_components = int(self.n_components)

        if self.n_jobs < 1:
            raise InvalidConfigurationError("n_jobs must be one or greater.")

    def validate_profiles(self):
        if self.profiles is None:
            return
        self.profiles = np.asarray(self.profiles)
        if self.profiles.ndim != 2:
            raise InvalidConfigurationError(
                "profiles must be a 2D array with shape (n_freq, n_components)."
            )

    def validate_nnmf_parameters(self):
        if self.n_init < 1:
            raise InvalidConfigurationError("n_init must be one or greater.")
        if self.max_iter < 1:
            raise InvalidConfigurationError("max_iter must be one or greater.")

    def validate_n_freq(self, n_freq):
        """Check the number of components against the number of frequency
        bins.

        Parameters
        ----------
        n_freq : int
            Number of frequency bins in the spectra.
        """
        if self.n_components > n_freq:
            raise ComponentCountError(self.n_components, n_freq)
