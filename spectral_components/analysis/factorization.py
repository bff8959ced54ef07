"""Factorization methods used to learn spectral profiles.

Each factorizer takes a (n_freq, n_features) matrix and returns a
(n_freq, n_components) matrix of spectral profiles.
"""

import logging
import warnings

import numpy as np
from scipy import linalg
from sklearn.decomposition import PCA, non_negative_factorization
from sklearn.exceptions import ConvergenceWarning
from pqdm.processes import pqdm
from tqdm.auto import trange

from spectral_components.config import Method
from spectral_components.utils.errors import FactorizationBackendError

_logger = logging.getLogger("spectral-components")


class Factorizer:
    """Base class for factorizers.

    scikit-learn is imported with this module, so a missing install fails
    at import time with an :code:`ImportError`. Only errors raised while the
    factorization runs are converted into a
    :code:`FactorizationBackendError`.

    Parameters
    ----------
    n_components : int
        Number of spectral components.
    """

    method = None

    def __init__(self, n_components):
        self.n_components = n_components

    def fit(self, X):
        """Learn spectral profiles.

        Parameters
        ----------
        X : np.ndarray
            Feature matrix. Shape must be (n_freq, n_features).

        Returns
        -------
        profiles : np.ndarray
            Spectral profiles. Shape is (n_freq, n_components).
        """
        X = np.asarray(X, dtype=float)
        if X.ndim != 2:
            raise ValueError("X must be a 2D array with shape (n_freq, n_features).")

        try:
            profiles = self._fit(X)
        except FactorizationBackendError:
            raise
        except (ValueError, ArithmeticError, np.linalg.LinAlgError) as e:
            raise FactorizationBackendError(self.method.value, e) from e

        return profiles

    def _fit(self, X):
        raise NotImplementedError


def _nnmf(X, n_components, max_iter, random_state):
    """Single run of NNMF from a random initialisation.

    Returns
    -------
    H : np.ndarray
        Shape is (n_components, n_features).
    error : float
        Frobenius norm of the reconstruction error.
    """
    with warnings.catch_warnings():
        warnings.simplefilter("ignore", category=ConvergenceWarning)
        W, H, _ = non_negative_factorization(
            X,
            n_components=n_components,
            init="random",
            solver="cd",
            max_iter=max_iter,
            random_state=random_state,
        )
    error = np.linalg.norm(X - W @ H)
    return H, error


class NNMFFactorizer(Factorizer):
    """Non-negative matrix factorization (NNMF).

    Factorizes :code:`X ~ W @ H` with `sklearn.decomposition\
    .non_negative_factorization <https://scikit-learn.org/stable/modules\
    /generated/sklearn.decomposition.non_negative_factorization.html>`_
    several times from random initialisations and keeps the solution with
    the lowest reconstruction error. The profiles are
    :code:`pinv(X.T) @ H.T`.

    Parameters
    ----------
    n_components : int
        Number of spectral components.
    n_init : int, optional
        Number of random restarts.
    max_iter : int, optional
        Maximum number of iterations for each restart.
    random_state : int, optional
        Seed for the random number generator.
    n_jobs : int, optional
        Number of processes to run the restarts in.
    """

    method = Method.NNMF

    def __init__(
        self,
        n_components,
        n_init=500,
        max_iter=1000,
        random_state=None,
        n_jobs=1,
    ):
        super().__init__(n_components)
        self.n_init = n_init
        self.max_iter = max_iter
        self.random_state = random_state
        self.n_jobs = n_jobs

    def _fit(self, X):
        if np.any(X < 0):
            raise ValueError("NNMF requires a non-negative feature matrix.")

        # Seed for each restart, so the result does not depend on n_jobs
        rng = np.random.default_rng(self.random_state)
        seeds = rng.integers(np.iinfo(np.int32).max, size=self.n_init)
        kwargs = [
            {
                "X": X,
                "n_components": self.n_components,
                "max_iter": self.max_iter,
                "random_state": int(seed),
            }
            for seed in seeds
        ]

        if self.n_init == 1:
            results = [_nnmf(**kwargs[0])]

        elif self.n_jobs == 1:
            results = []
            for i in trange(self.n_init, desc="NNMF restarts"):
                results.append(_nnmf(**kwargs[i]))

        else:
            results = pqdm(
                kwargs,
                _nnmf,
                n_jobs=self.n_jobs,
                argument_type="kwargs",
                desc="NNMF restarts",
            )
            # pqdm returns exceptions instead of raising them
            for result in results:
                if isinstance(result, Exception):
                    raise FactorizationBackendError(self.method.value, result) from result

        errors = np.array([error for _, error in results])
        best = int(np.argmin(errors))
        H = results[best][0]
        _logger.info(
            f"Best NNMF solution: restart {best} of {self.n_init}, "
            f"reconstruction error {errors[best]:.4g}"
        )

        self.components_ = H
        self.reconstruction_err_ = errors[best]

        # Project the data onto the components
        profiles = linalg.pinv(X.T) @ H.T
        return profiles


class PCAFactorizer(Factorizer):
    """Principal component analysis (PCA).

    Uses `sklearn.decomposition.PCA <https://scikit-learn.org/stable/modules\
    /generated/sklearn.decomposition.PCA.html>`_ fitted to :code:`X.T`, i.e.
    each feature is an observation and each frequency bin a variable. The
    loadings are used as the profiles. The sign of each profile is arbitrary,
    see :code:`spectral_components.array_ops.fix_component_signs`.

    Parameters
    ----------
    n_components : int
        Number of spectral components.
    """

    method = Method.PCA

    def _fit(self, X):
        pca = PCA(n_components=self.n_components, svd_solver="full")
        pca.fit(X.T)

        self.explained_variance_ratio_ = pca.explained_variance_ratio_
        _logger.info(
            "PCA explained variance: "
            f"{np.sum(pca.explained_variance_ratio_) * 100:.1f}%"
        )

        return pca.components_.T


def get_factorizer(config):
    """Create the factorizer specified in a config.

    Parameters
    ----------
    config : spectral_components.config.Config
        Decomposition options.

    Returns
    -------
    factorizer : Factorizer
    """
    if config.method is Method.NNMF:
        return NNMFFactorizer(
            config.n_components,
            n_init=config.n_init,
            max_iter=config.max_iter,
            random_state=config.random_state,
            n_jobs=config.n_jobs,
        )
    return PCAFactorizer(config.n_components)
