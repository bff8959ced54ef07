import os

import matplotlib

matplotlib.use("Agg")

import numpy as np
import numpy.testing as npt
import pytest


def save_spectra(save_dir, n_subjects=2, n_states=2, n_freq=10, n_channels=3):
    rng = np.random.default_rng(0)
    psd = rng.uniform(0.5, 2.0, size=(n_subjects, n_states, n_freq, n_channels))
    coh = rng.uniform(
        0.0, 1.0, size=(n_subjects, n_states, n_freq, n_channels, n_channels)
    )
    coh = (coh + np.swapaxes(coh, -1, -2)) / 2
    i = np.arange(n_channels)
    coh[..., i, i] = 1
    os.makedirs(save_dir, exist_ok=True)
    np.save(os.path.join(save_dir, "psd.npy"), psd)
    np.save(os.path.join(save_dir, "coh.npy"), coh)
    return psd, coh


def test_load_spectra(tmp_path):
    from spectral_components.config_api.wrappers import load_spectra

    spectra_dir = os.path.join(tmp_path, "spectra")
    psd, coh = save_spectra(spectra_dir)
    data = load_spectra(spectra_dir)

    npt.assert_equal(len(data), 2)
    npt.assert_equal(data[0].n_states, 2)
    npt.assert_equal(data[1][1].psd_diagonal(), psd[1, 1])
    npt.assert_equal(data[1][0].coh, coh[1, 0])


def test_decompose_spectra(tmp_path):
    from spectral_components.config_api.wrappers import (
        decompose_spectra,
        load_spectra,
        plot_spectral_profiles,
    )

    spectra_dir = os.path.join(tmp_path, "spectra")
    save_spectra(spectra_dir)
    data = load_spectra(spectra_dir)

    output_dir = str(tmp_path)
    decompose_spectra(data, output_dir, kwargs={"n_components": 2, "method": "pca"})

    components_dir = os.path.join(output_dir, "components")
    profiles = np.load(os.path.join(components_dir, "profiles.npy"))
    psd = np.load(os.path.join(components_dir, "psd.npy"))
    coh = np.load(os.path.join(components_dir, "coh.npy"))
    group_coh = np.load(os.path.join(components_dir, "group_coh.npy"))

    npt.assert_equal(profiles.shape, (10, 2))
    npt.assert_equal(psd.shape, (2, 2, 2, 3, 3))
    npt.assert_equal(coh.shape, (2, 2, 2, 3, 3))
    npt.assert_equal(group_coh.shape, (2, 2, 3, 3))

    # Reuse the saved profiles
    decompose_spectra(
        data,
        os.path.join(output_dir, "reuse"),
        kwargs={"n_components": 2, "profiles": os.path.join(components_dir, "profiles.npy")},
    )
    reused = np.load(os.path.join(output_dir, "reuse", "components", "profiles.npy"))
    npt.assert_equal(reused, profiles)

    plot_spectral_profiles(data, output_dir)
    assert os.path.exists(os.path.join(components_dir, "profiles.png"))


def test_decompose_spectra_no_data(tmp_path):
    from spectral_components.config_api.wrappers import decompose_spectra

    with pytest.raises(ValueError):
        decompose_spectra(None, str(tmp_path))
