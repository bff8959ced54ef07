import numpy as np
import numpy.testing as npt
import pytest


def make_arrays(n_subjects=2, n_states=2, n_freq=10, n_channels=3, seed=0):
    rng = np.random.default_rng(seed)
    psd = rng.uniform(0.5, 2.0, size=(n_subjects, n_states, n_freq, n_channels))
    coh = rng.uniform(
        0.0, 1.0, size=(n_subjects, n_states, n_freq, n_channels, n_channels)
    )
    coh = (coh + np.swapaxes(coh, -1, -2)) / 2
    i = np.arange(n_channels)
    coh[..., i, i] = 1
    return psd, coh


def test_project_spectra_selects_frequencies():
    from spectral_components.analysis.projection import project_spectra

    psd, coh = make_arrays(n_subjects=1)

    # Profiles that pick out frequency bins 2 and 5
    profiles = np.zeros([10, 2])
    profiles[2, 0] = 1
    profiles[5, 1] = 1

    fit = project_spectra(psd[0], coh[0], profiles)

    npt.assert_equal(fit.n_states, 2)
    npt.assert_almost_equal(np.diagonal(fit[1].psd[0]), psd[0, 1, 2])
    npt.assert_almost_equal(np.diagonal(fit[0].psd[1]), psd[0, 0, 5])
    npt.assert_almost_equal(fit[1].coh[0, 0, 2], coh[0, 1, 2, 0, 2])
    npt.assert_almost_equal(fit[0].coh[1, 1, 2], coh[0, 0, 5, 1, 2])


def test_reduced_spectra_structure():
    from spectral_components.analysis.projection import project_spectra
    from spectral_components.array_ops import check_symmetry

    psd, coh = make_arrays(n_subjects=1, n_channels=4)
    rng = np.random.default_rng(1)
    profiles = rng.normal(size=(10, 3))

    fit = project_spectra(psd[0], coh[0], profiles)

    npt.assert_equal(fit.psd.shape, (2, 3, 4, 4))
    npt.assert_equal(fit.coh.shape, (2, 3, 4, 4))

    # Off-diagonal PSD is zero
    off_diagonal = ~np.eye(4, dtype=bool)
    npt.assert_equal(fit.psd[..., off_diagonal], 0)

    # Coherence is symmetric with a unit diagonal
    assert np.all(check_symmetry(fit.coh, precision=0))
    npt.assert_equal(np.diagonal(fit.coh, axis1=-2, axis2=-1), 1)


def test_projection_is_deterministic():
    from spectral_components.analysis.projection import project_subjects

    psd, coh = make_arrays()
    profiles = np.random.default_rng(2).uniform(size=(10, 2))

    fits_1 = project_subjects(psd, coh, profiles)
    fits_2 = project_subjects(psd, coh, profiles)

    npt.assert_equal(len(fits_1), 2)
    for f1, f2 in zip(fits_1, fits_2):
        npt.assert_array_equal(f1.psd, f2.psd)
        npt.assert_array_equal(f1.coh, f2.coh)


def test_project_group():
    from spectral_components.analysis.projection import project_group, project_spectra

    psd, coh = make_arrays(n_subjects=3)
    psd[0] *= -1
    profiles = np.random.default_rng(3).uniform(size=(10, 2))

    group_fit = project_group(psd, coh, profiles)
    expected = project_spectra(
        np.mean(np.abs(psd), axis=0), np.mean(np.abs(coh), axis=0), profiles
    )
    npt.assert_almost_equal(group_fit.psd, expected.psd)
    npt.assert_almost_equal(group_fit.coh, expected.coh)
    assert np.all(np.diagonal(group_fit.psd, axis1=-2, axis2=-1) > 0)


def test_profile_shape():
    from spectral_components.analysis.projection import (
        project_spectra,
        validate_profiles,
    )
    from spectral_components.utils.errors import ProfileShapeError

    psd, coh = make_arrays(n_subjects=1)
    with pytest.raises(ProfileShapeError):
        project_spectra(psd[0], coh[0], np.ones([12, 2]))
    with pytest.raises(ProfileShapeError):
        project_spectra(psd[0], coh[0], np.ones(10))
    with pytest.raises(ProfileShapeError):
        validate_profiles(np.ones([10, 3]), n_freq=10, n_components=2)

    profiles = validate_profiles(np.ones([10, 2]), n_freq=10, n_components=2)
    npt.assert_equal(profiles.shape, (10, 2))


def test_project_subjects_parallel():
    from spectral_components.analysis.projection import project_subjects

    psd, coh = make_arrays(n_subjects=3)
    profiles = np.random.default_rng(1).uniform(size=(10, 2))

    fits_1 = project_subjects(psd, coh, profiles, n_jobs=1)
    fits_2 = project_subjects(psd, coh, profiles, n_jobs=2)

    npt.assert_equal(len(fits_2), 3)
    for f1, f2 in zip(fits_1, fits_2):
        npt.assert_array_almost_equal(f1.psd, f2.psd)
        npt.assert_array_almost_equal(f1.coh, f2.coh)


def test_project_subjects_parallel_failure():
    from spectral_components.analysis.projection import project_subjects
    from spectral_components.utils.errors import ProfileShapeError

    psd, coh = make_arrays(n_subjects=3)
    with pytest.raises(ProfileShapeError):
        project_subjects(psd, coh, np.ones([8, 2]), n_jobs=2)
