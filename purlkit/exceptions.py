"""Exceptions raised while parsing, normalizing and building package URLs."""
from typing import Optional


class PurlError(ValueError):
    """Base class for all purlkit errors."""


class PackageURLArgumentError(PurlError):
    """Raised when a PackageURL is constructed without a required component."""

    def __init__(self, component: str) -> None:
        """Initializes the error.

        Args:
            component: Name of the missing component, e.g. "type" or "name".
        """
        self.component = component
        super().__init__(f"{component} is required")


class InvalidPackageURL(PurlError):
    """Raised when a purl string or one of its components is invalid.

    Attributes:
        component: The purl component the failure relates to, or None when
            the failure is not tied to a single component.
    """

    component: Optional[str] = None


class MissingScheme(InvalidPackageURL):
    """The string does not start with the `pkg:` scheme."""

    component = "scheme"


class MissingType(InvalidPackageURL):
    """No type could be found after the scheme."""

    component = "type"


class InvalidType(InvalidPackageURL):
    """The type contains invalid characters or starts with a digit."""

    component = "type"


class MissingName(InvalidPackageURL):
    """No name segment is left once namespace and version are removed."""

    component = "name"


class InvalidRemainder(InvalidPackageURL):
    """The part after the type is not a well formed URI path/query/fragment."""


class InvalidQualifierString(InvalidPackageURL):
    """A qualifier string contains a pair without `=`."""

    component = "qualifiers"


class InvalidQualifierKey(InvalidPackageURL):
    """A qualifier key is empty, encoded, or otherwise malformed."""

    component = "qualifiers"

    def __init__(self, message: str, key: Optional[str] = None) -> None:
        self.key = key
        super().__init__(message)
