"""Config API.

------

Specify a pipeline using a config, e.g. to decompose the coherence of
multitaper state spectra into 4 components::

    config = '''
        load_spectra:
            inputs: spectra
        decompose_spectra:
            kwargs: {n_components: 4, basis: coh, random_state: 42}
        plot_spectral_profiles: {}
    '''

and run with::

    run_pipeline(config, output_dir="results")

The :code:`spectra` directory must contain :code:`psd.npy` and
:code:`coh.npy`.

------

Note
----
The config API can be used via the command line with::

    % spectral-components <config-file> <output-directory>

where

- :code:`<config-file>` is a yaml file containing the config.
- :code:`<output-directory>` is the output directory.
"""

from spectral_components.config_api import pipeline, wrappers
