"""Modules to decompose state spectra into spectral components."""

from spectral_components.analysis import (
    aggregate,
    factorization,
    features,
    projection,
    spectral,
)
