"""Helper functions for manipulating `NumPy \
<https://numpy.org/doc/stable/user/index.html>`_ arrays.

"""

import numpy as np


def validate(array, correct_dimensionality, allow_dimensions, error_message):
    """Checks if the dimensionality of an array is correct.

    Parameters
    ----------
    array : np.ndarray
        Array to be checked.
    correct_dimensionality : int
        The desired number of dimensions in the array.
    allow_dimensions : list of int
        The number of dimensions that is acceptable for the passed array to
        have. Missing leading dimensions are added.
    error_message : str
        Message to raise if the array is not valid.

    Returns
    -------
    array : np.ndarray
        Array with the correct dimensionality.
    """
    array = np.asarray(array)

    # Add dimensions to ensure array has the correct dimensionality
    for dimensionality in allow_dimensions:
        if array.ndim == dimensionality:
            for i in range(correct_dimensionality - dimensionality):
                array = array[np.newaxis, ...]

    # Check no other dimensionality has been passed
    if array.ndim != correct_dimensionality:
        raise ValueError(error_message)

    return array


def check_symmetry(mat, precision=1e-6):
    """Checks if one or more matrices are symmetric.

    Parameters
    ----------
    mat : np.ndarray or list of np.ndarray
        Matrices to be checked. Shape of a matrix should be (..., N, N).
    precision : float, optional
        Precision for comparing values. Corresponds to an absolute tolerance
        parameter. Default is :code:`1e-6`.

    Returns
    -------
    symmetry : np.ndarray of bool
        Array indicating whether matrices are symmetric.
    """
    mat = np.array(mat)
    if mat.ndim < 2:
        msg = "Input matrix must be an array with shape (..., N, N)."
        raise ValueError(msg)
    transpose_axes = np.concatenate((np.arange(mat.ndim - 2), [-1, -2]))
    symmetry = np.all(
        np.isclose(
            mat,
            np.transpose(mat, axes=transpose_axes),
            rtol=0,
            atol=precision,
            equal_nan=True,
        ),
        axis=(-1, -2),
    )
    return symmetry


def n_pairs(n_channels):
    """Number of unique off-diagonal channel pairs.

    Parameters
    ----------
    n_channels : int
        Number of channels.

    Returns
    -------
    n_pairs : int
        :code:`n_channels * (n_channels - 1) // 2`.
    """
    return n_channels * (n_channels - 1) // 2


def upper_triangle(mat):
    """Extract the strict upper triangle of batches of square matrices.

    Elements are returned in row-major order, i.e. the ordering of
    :code:`np.triu_indices(n, 1)`.

    Parameters
    ----------
    mat : np.ndarray
        Matrices. Shape must be (..., N, N).

    Returns
    -------
    triu : np.ndarray
        Upper triangle. Shape is (..., N * (N - 1) / 2).
    """
    mat = np.asarray(mat)
    if mat.ndim < 2 or mat.shape[-1] != mat.shape[-2]:
        raise ValueError("Input must be an array with shape (..., N, N).")
    i, j = np.triu_indices(mat.shape[-1], 1)
    return mat[..., i, j]


def diagonal_to_matrix(diag):
    """Place batches of vectors on the diagonal of zero matrices.

    Parameters
    ----------
    diag : np.ndarray
        Diagonal values. Shape must be (..., N).

    Returns
    -------
    mat : np.ndarray
        Diagonal matrices. Shape is (..., N, N).
    """
    diag = np.asarray(diag)
    n = diag.shape[-1]
    mat = np.zeros(diag.shape + (n,), dtype=diag.dtype)
    i = np.arange(n)
    mat[..., i, i] = diag
    return mat


def upper_triangle_to_matrix(triu, n_channels, diagonal=1.0):
    """Build symmetric matrices from their strict upper triangle.

    Parameters
    ----------
    triu : np.ndarray
        Upper triangle in :code:`np.triu_indices(n_channels, 1)` order.
        Shape must be (..., n_channels * (n_channels - 1) / 2).
    n_channels : int
        Number of channels.
    diagonal : float, optional
        Value to set on the diagonal.

    Returns
    -------
    mat : np.ndarray
        Symmetric matrices. Shape is (..., n_channels, n_channels).
    """
    triu = np.asarray(triu)
    if triu.shape[-1] != n_pairs(n_channels):
        raise ValueError(
            f"Expected {n_pairs(n_channels)} upper triangle elements "
            f"for {n_channels} channels, got {triu.shape[-1]}."
        )
    mat = np.zeros(triu.shape[:-1] + (n_channels, n_channels), dtype=triu.dtype)
    i, j = np.triu_indices(n_channels, 1)
    mat[..., i, j] = triu
    mat[..., j, i] = triu
    k = np.arange(n_channels)
    mat[..., k, k] = diagonal
    return mat


def fix_component_signs(components, axis=0):
    """Flip the sign of components so their largest-magnitude entry is
    positive.

    Useful for methods where the sign of each component is arbitrary,
    e.g. PCA.

    Parameters
    ----------
    components : np.ndarray
        2D array of components.
    axis : int, optional
        Axis along which each component's entries lie. Default is :code:`0`,
        i.e. components are the columns of a (n_freq, n_components) array.

    Returns
    -------
    components : np.ndarray
        Components with a fixed sign convention.
    """
    components = np.array(components, dtype=float)
    if components.ndim != 2:
        raise ValueError("components must be a 2D array.")
    max_abs = np.take_along_axis(
        components,
        np.expand_dims(np.abs(components).argmax(axis=axis), axis=axis),
        axis=axis,
    )
    signs = np.sign(max_abs)
    signs[signs == 0] = 1
    return components * signs
