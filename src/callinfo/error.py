class InvalidArgumentError(ValueError):
    """
    raised when a required argument is missing (None) or a value is outside of its allowed domain

    for example a positive log10 error probability which is not the no-error sentinel
    """

    pass


class InvalidStateError(Exception):
    """
    raised when an operation would silently overwrite existing state, for example
    putting an attribute key that is already bound without allowing overwrites
    """

    pass


class DuplicateFilterError(InvalidArgumentError, InvalidStateError):
    pass


class AttributeTypeError(TypeError):
    """
    raised by the typed attribute accessors when a value is present but cannot be
    coerced to the requested type
    """

    pass
