def test_structural_mismatch_error():
    from spectral_components.utils.errors import StructuralMismatchError

    error = StructuralMismatchError("n_channels", 3, 4, subject=2)
    assert isinstance(error, ValueError)
    assert str(error) == (
        "Inconsistent n_channels across spectral fits: "
        "expected 3, got 4 (at subject 2)."
    )
    assert error.expected == 3
    assert error.got == 4

    error = StructuralMismatchError("n_freq", 10, 12)
    assert str(error).endswith("expected 10, got 12.")


def test_component_count_error():
    from spectral_components.utils.errors import (
        ComponentCountError,
        InvalidConfigurationError,
    )

    error = ComponentCountError(20, 10)
    assert isinstance(error, InvalidConfigurationError)
    assert isinstance(error, ValueError)
    assert "(10)" in str(error)
    assert "got 20" in str(error)

    error = ComponentCountError(0)
    assert "positive integer" in str(error)


def test_profile_shape_error():
    from spectral_components.utils.errors import ProfileShapeError

    error = ProfileShapeError((8, 2), 10, 2)
    assert "(10, 2)" in str(error)
    assert "(8, 2)" in str(error)


def test_factorization_backend_error():
    from spectral_components.utils.errors import FactorizationBackendError

    error = FactorizationBackendError("nnmf", ValueError("bad input"))
    assert isinstance(error, RuntimeError)
    assert str(error) == "Error running nnmf: bad input"
    assert error.method == "nnmf"


def test_errors_pickle():
    import pickle

    from spectral_components.utils.errors import (
        ComponentCountError,
        FactorizationBackendError,
        ProfileShapeError,
        StructuralMismatchError,
    )

    errors = [
        StructuralMismatchError("n_freq", 10, 12, subject=1, state=0),
        ComponentCountError(20, 10),
        ProfileShapeError((8, 2), 10, 2),
        FactorizationBackendError("nnmf", ValueError("bad input")),
    ]
    for error in errors:
        loaded = pickle.loads(pickle.dumps(error))
        assert type(loaded) is type(error)
        assert str(loaded) == str(error)

    loaded = pickle.loads(pickle.dumps(errors[-1]))
    assert loaded.method == "nnmf"
    assert isinstance(loaded.cause, ValueError)
