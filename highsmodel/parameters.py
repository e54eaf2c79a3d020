"""
Parameters class for highsmodel
"""


class Parameters:
    """
    Configuration parameters for a solve.

    These control how this package talks to the backend, not how the
    backend solves.

    Attributes
    ----------
    suppress_output : bool
        Turn the backend's ``output_flag`` off for the duration of the
        solve and restore it afterwards (default: True)
    warnings_as_errors : bool
        Raise ``BackendWarning`` instead of attaching it to the solution
        (default: False)
    log_level : str
        Level applied to the ``highsmodel`` loggers when the solver is
        created, or None to leave logging alone (default: None)

    Examples
    --------
    >>> param = Parameters()
    >>> param.suppress_output = False
    >>> param.warnings_as_errors = True
    """

    def __init__(self):
        self.suppress_output = True
        self.warnings_as_errors = False
        self.log_level = None

    def __repr__(self):
        return (f"Parameters(suppress_output={self.suppress_output}, "
                f"warnings_as_errors={self.warnings_as_errors}, "
                f"log_level={self.log_level!r})")

    @classmethod
    def from_dict(cls, d):
        """Create Parameters from dictionary, ignoring unknown keys"""
        param = cls()
        for key, value in d.items():
            if hasattr(param, key):
                setattr(param, key, value)
        return param

    def to_dict(self):
        """Convert to dictionary"""
        return {
            'suppress_output': self.suppress_output,
            'warnings_as_errors': self.warnings_as_errors,
            'log_level': self.log_level,
        }
