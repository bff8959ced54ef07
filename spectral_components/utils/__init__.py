"""Utility/helper functions."""

from spectral_components.utils import errors, misc
