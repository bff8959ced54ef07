import numpy as np
import numpy.testing as npt
import pytest


def test_defaults():
    from spectral_components.config import Basis, Config, Method

    config = Config()
    npt.assert_equal(config.n_components, 4)
    assert config.method is Method.NNMF
    assert config.basis is Basis.COH
    assert config.profiles is None
    assert config.plot
    npt.assert_equal(config.n_init, 500)


def test_resolve_strings():
    from spectral_components.config import Basis, Config, Method

    for name in ["NNMF", "nmf", "nonnegative-factorization"]:
        assert Method.resolve(name) is Method.NNMF
    for name in ["PCA", "principal-component"]:
        assert Method.resolve(name) is Method.PCA
    for name in ["coh", "coherence", "COH"]:
        assert Basis.resolve(name) is Basis.COH
    assert Basis.resolve("psd") is Basis.PSD
    assert Basis.resolve(Basis.PSD) is Basis.PSD

    config = Config(method="pca", basis="psd")
    assert config.method is Method.PCA
    assert config.basis is Basis.PSD


def test_invalid_options():
    from spectral_components.config import Config
    from spectral_components.utils.errors import (
        ComponentCountError,
        InvalidConfigurationError,
    )

    with pytest.raises(InvalidConfigurationError):
        Config(method="ica")
    with pytest.raises(InvalidConfigurationError):
        Config(basis="amplitude")
    with pytest.raises(ComponentCountError):
        Config(n_components=0)
    with pytest.raises(ComponentCountError):
        Config(n_components=-2)
    with pytest.raises(ComponentCountError):
        Config(n_components=2.5)
    with pytest.raises(ComponentCountError):
        Config(n_components=True)
    with pytest.raises(InvalidConfigurationError):
        Config(n_init=0)
    with pytest.raises(InvalidConfigurationError):
        Config(n_jobs=0)
    with pytest.raises(InvalidConfigurationError):
        Config(profiles=np.ones(5))


def test_validate_n_freq():
    from spectral_components.config import Config
    from spectral_components.utils.errors import ComponentCountError

    config = Config(n_components=np.int64(10))
    config.validate_n_freq(10)
    assert isinstance(config.n_components, int)

    config = Config(n_components=20)
    with pytest.raises(ComponentCountError, match="frequency bins"):
        config.validate_n_freq(10)
