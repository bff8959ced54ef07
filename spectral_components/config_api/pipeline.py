"""Functions for running full pipelines via the config API.

"""

import argparse
import logging
import pprint
from pathlib import Path

import yaml

from spectral_components.config_api import wrappers

_logger = logging.getLogger("spectral-components")


def load_config(config):
    """Load config.

    Parameters
    ----------
    config : str or dict
        Path to yaml file, :code:`str` to convert to :code:`dict`,
        or :code:`dict` containing the config.

    Returns
    -------
    config : dict
        Config for a full pipeline.
    """
    if type(config) not in [str, dict]:
        raise ValueError("config must be a str or dict, got {}.".format(type(config)))

    if isinstance(config, str):
        try:
            # See if we have a filepath
            with open(config, "r") as f:
                config = yaml.load(f, Loader=yaml.FullLoader)
        except (UnicodeDecodeError, FileNotFoundError, OSError):
            # We have a string
            config = yaml.load(config, Loader=yaml.FullLoader)

    if not isinstance(config, dict):
        raise ValueError("config must define a mapping of function names.")

    return config


def find_function(name, extra_funcs=None):
    """Find a function to execute via the config API.

    Parameters
    ----------
    name : str
        Function name.
    extra_funcs : list of functions, optional
        Custom functions passed by the user.

    Returns
    -------
    func : function
        Function to execute.
    """
    if extra_funcs is not None:
        for f in extra_funcs:
            if f.__name__ == name:
                return f

    if hasattr(wrappers, name) and name != "load_spectra":
        return getattr(wrappers, name)

    raise ValueError(f"{name} not found.")


def run_pipeline(config, output_dir, data=None, extra_funcs=None):
    """Run a full pipeline.

    Parameters
    ----------
    config : str or dict
        Path to yaml file, :code:`str` to convert to :code:`dict`,
        or :code:`dict` containing the config.
    output_dir : str
        Path to output directory.
    data : list of SubjectFit, optional
        Spectra for each subject.
    extra_funcs : list of functions, optional
        User-defined functions referenced in the config.

    Examples
    --------
    Decompose multitaper spectra into 4 components::

        config = '''
            load_spectra:
                inputs: spectra
            decompose_spectra:
                kwargs: {n_components: 4, method: nnmf, random_state: 0}
            plot_spectral_profiles: {}
        '''
        run_pipeline(config, output_dir="results")
    """

    # Load config
    config = dict(load_config(config))
    _logger.info(
        "Using config:\n {}".format(
            pprint.pformat(config, sort_dicts=False, compact=True)
        )
    )

    # Load data via the config
    load_spectra_kwargs = config.pop("load_spectra", None)
    if load_spectra_kwargs is not None:
        _logger.info(f"load_spectra: {load_spectra_kwargs}")
        data = wrappers.load_spectra(**load_spectra_kwargs)

    Path(output_dir).mkdir(parents=True, exist_ok=True)

    # Loop through each item in the config
    for name, kwargs in config.items():
        func = find_function(name, extra_funcs)
        kwargs = kwargs or {}
        _logger.info(f"{name}: {kwargs}")
        try:
            func(data=data, output_dir=str(output_dir), **kwargs)
        except Exception as e:
            _logger.exception(e)
            raise


def run_pipeline_from_file(config_file, output_directory):
    """Run a pipeline from a config file.

    Parameters
    ----------
    config_file : str
        Path to the config file.
    output_directory : str
        Path to the output directory.
    """
    config_path = Path(config_file)
    config = config_path.read_text()

    run_pipeline(config, output_directory)


def spectral_components_cli(argv=None):
    """Command line interface function for running a pipeline from a config
    file."""

    # Arguments
    parser = argparse.ArgumentParser()
    parser.add_argument(
        "config_file",
        type=str,
        help="Path to the config file.",
    )
    parser.add_argument(
        "output_directory",
        type=str,
        help="Path to the output directory.",
    )
    args = parser.parse_args(argv)

    # Run pipeline
    run_pipeline_from_file(args.config_file, args.output_directory)
