"""Custom errors."""


class StructuralMismatchError(ValueError):
    """Raised when the dimensions of the spectral fits are inconsistent."""

    def __init__(self, name, expected, got, subject=None, state=None):
        """Initialize a StructuralMismatchError.

        Parameters
        ----------
        name : str
            Name of the dimension that disagrees, e.g. :code:`'n_channels'`.
        expected : int
            Value found in the reference (first) subject.
        got : int
            Value found in the offending subject/state.
        subject : int, optional
            Index of the offending subject.
        state : int, optional
            Index of the offending state.
        """
        where = ""
        if subject is not None:
            where += f" subject {subject}"
        if state is not None:
            where += f" state {state}"
        if where:
            where = f" (at{where})"
        super().__init__(
            f"Inconsistent {name} across spectral fits: "
            f"expected {expected}, got {got}{where}.",
        )
        self.name = name
        self.expected = expected
        self.got = got
        self._args = (name, expected, got, subject, state)

    def __reduce__(self):
        return type(self), self._args


class InvalidConfigurationError(ValueError):
    """Raised when the decomposition options are not valid."""


class ComponentCountError(InvalidConfigurationError):
    """Raised when the number of components is not between 1 and the number
    of frequency bins."""

    def __init__(self, n_components, n_freq=None):
        """Initialize a ComponentCountError.

        Parameters
        ----------
        n_components : int
            The requested number of components.
        n_freq : int, optional
            Number of frequency bins.
        """
        if n_freq is None:
            msg = f"n_components must be a positive integer, got {n_components}."
        else:
            msg = (
                f"n_components must be between 1 and the number of "
                f"frequency bins ({n_freq}), got {n_components}."
            )
        super().__init__(msg)
        self.n_components = n_components
        self.n_freq = n_freq

    def __reduce__(self):
        return type(self), (self.n_components, self.n_freq)


class ProfileShapeError(ValueError):
    """Raised when supplied spectral profiles have the wrong shape."""

    def __init__(self, shape, n_freq, n_components):
        """Initialize a ProfileShapeError.

        Parameters
        ----------
        shape : tuple
            Shape of the supplied profiles.
        n_freq : int
            Number of frequency bins.
        n_components : int
            Number of components.
        """
        super().__init__(
            f"profiles must have shape (n_freq, n_components) = "
            f"({n_freq}, {n_components}), got {tuple(shape)}.",
        )
        self._args = (tuple(shape), n_freq, n_components)

    def __reduce__(self):
        return type(self), self._args


class FactorizationBackendError(RuntimeError):
    """Raised when the factorization routine cannot run or fails."""

    def __init__(self, method, cause=None):
        """Initialize a FactorizationBackendError.

        Parameters
        ----------
        method : str
            Name of the factorization method.
        cause : Exception, optional
            The underlying error.
        """
        msg = f"Error running {method}"
        if cause is not None:
            msg += f": {cause}"
        super().__init__(msg)
        self.method = method
        self.cause = cause

    def __reduce__(self):
        return type(self), (self.method, self.cause)
