"""Wrapper functions for use in the config API.

All of the functions in this module can be listed in the config passed to
:code:`spectral_components.run_pipeline`.

All wrapper functions have the structure::

    func(data, output_dir, **kwargs)

where:

- :code:`data` is a list of
  :code:`spectral_components.analysis.aggregate.SubjectFit` objects.
- :code:`output_dir` is the path to save output to.
- :code:`kwargs` are keyword arguments for function specific options.
"""

import os
import logging

import numpy as np

from spectral_components.utils.misc import load, override_dict_defaults, save

_logger = logging.getLogger("spectral-components")


def load_spectra(inputs, psd_file="psd.npy", coh_file="coh.npy"):
    """Load spectra.

    Parameters
    ----------
    inputs : str
        Path to directory containing the spectra.
    psd_file : str, optional
        Name of the file containing the PSDs. Shape must be
        (n_subjects, n_states, n_freq, n_channels, n_channels) or
        (n_subjects, n_states, n_freq, n_channels).
    coh_file : str, optional
        Name of the file containing the coherences. Shape must be
        (n_subjects, n_states, n_freq, n_channels, n_channels).

    Returns
    -------
    data : list of SubjectFit
        Spectra for each subject.
    """
    from spectral_components.analysis.aggregate import as_subject_fits

    psd = load(os.path.join(inputs, psd_file))
    coh = load(os.path.join(inputs, coh_file))
    return as_subject_fits((np.asarray(psd), np.asarray(coh)))


def decompose_spectra(data, output_dir, kwargs=None):
    """Decompose spectra into spectral components.

    This function will create the following directory:

    - :code:`<output_dir>/components`, which contains the spectral profiles
      (:code:`profiles.npy`), the reduced subject spectra (:code:`psd.npy`,
      :code:`coh.npy`) and the reduced group spectra (:code:`group_psd.npy`,
      :code:`group_coh.npy`).

    Parameters
    ----------
    data : list of SubjectFit
        Spectra for each subject.
    output_dir : str
        Path to output directory.
    kwargs : dict, optional
        Keyword arguments to pass to `spectral_components.config.Config`.
        If :code:`profiles` is a str, it is treated as a path to load the
        profiles from. Defaults to::

            {'n_components': 4,
             'method': 'nnmf',
             'basis': 'coh',
             'plot': False}
    """
    if data is None:
        raise ValueError("data must be passed.")

    default_kwargs = {
        "n_components": 4,
        "method": "nnmf",
        "basis": "coh",
        "plot": False,
    }
    kwargs = override_dict_defaults(default_kwargs, kwargs)
    if isinstance(kwargs.get("profiles"), str):
        kwargs["profiles"] = load(kwargs["profiles"])
    _logger.info(f"Using kwargs: {kwargs}")

    # Directories
    components_dir = output_dir + "/components"
    os.makedirs(components_dir, exist_ok=True)

    from spectral_components.analysis import spectral

    subject_fits, group_fit, profiles = spectral.decompose_spectra(data, **kwargs)

    save(f"{components_dir}/profiles.npy", profiles)
    save(f"{components_dir}/psd.npy", np.array([f.psd for f in subject_fits]))
    save(f"{components_dir}/coh.npy", np.array([f.coh for f in subject_fits]))
    save(f"{components_dir}/group_psd.npy", group_fit.psd)
    save(f"{components_dir}/group_coh.npy", group_fit.coh)


def plot_spectral_profiles(data, output_dir, frequencies=None):
    """Plot the spectral profiles.

    This function expects the spectral profiles have already been calculated
    and are in :code:`<output_dir>/components/profiles.npy`.

    This function will create :code:`<output_dir>/components/profiles.png`.

    Parameters
    ----------
    data : list of SubjectFit
        Spectra for each subject. Not used.
    output_dir : str
        Path to output directory.
    frequencies : str or list, optional
        Frequency axis, or path to a :code:`.npy` file containing it.
    """
    from spectral_components.utils import plotting

    components_dir = output_dir + "/components"
    profiles = load(f"{components_dir}/profiles.npy")
    if isinstance(frequencies, str):
        frequencies = load(frequencies)

    plotting.plot_spectral_profiles(
        profiles,
        frequencies=frequencies,
        x_label=None if frequencies is None else "Frequency (Hz)",
        filename=f"{components_dir}/profiles.png",
    )
