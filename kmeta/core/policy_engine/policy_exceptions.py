class MetadataError(Exception):
    """
    Base exception for kmeta configuration and input failures.

    The inheritance and annotation functions themselves never raise it.
    """

    pass


class InheritanceConfigurationError(MetadataError, ValueError):
    """
    Raised when an inheritance profile is malformed.
    """

    pass
