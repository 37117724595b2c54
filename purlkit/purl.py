"""PURL model and helpers."""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Dict, List, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, field_validator

from .codec import Direction
from .exceptions import InvalidPackageURL, MissingName, PackageURLArgumentError
from .normalize import normalize_all
from .parser import SCHEME, RawComponents, split_purl

if TYPE_CHECKING:
    from .validate import ValidationMessage

logger = logging.getLogger(__name__)


class PackageURL(BaseModel):
    """Represents a Package URL (purl).

    A purl is a URI that represents a software package in a mostly
    unambiguous way.
    See: https://github.com/package-url/purl-spec

    Construction only checks that `type` and `name` are present; the other
    components are stored as given and validated when the purl is turned
    into a string. Values returned by `from_string` are already decoded
    and normalized.

    Attributes:
        type: The package "type" or package management system, lowercased.
        namespace: Some name prefix such as a Maven groupid, a Docker image owner, etc.
        name: The name of the package.
        version: The version of the package.
        qualifiers: Extra qualifying data for a package such as an OS, architecture, etc.
            Either a read-only mapping or a raw `key=value&...` string.
        subpath: Extra subpath within a package, relative to the package root.
    """

    model_config = ConfigDict(frozen=True)

    __match_args__ = ("scheme", "type", "namespace", "name", "version", "qualifiers", "subpath")

    type: str
    namespace: Optional[str] = None
    name: str
    version: Optional[str] = None
    qualifiers: Optional[Union[Dict[str, str], str]] = None
    subpath: Optional[str] = None

    def __init__(
        self,
        type: Optional[str] = None,
        name: Optional[str] = None,
        namespace: Optional[str] = None,
        version: Optional[str] = None,
        qualifiers: Optional[Union[Dict[str, str], str]] = None,
        subpath: Optional[str] = None,
    ) -> None:
        """Builds a PackageURL from its components.

        Raises:
            PackageURLArgumentError: If `type` or `name` is missing or blank.
        """
        if type is None or not str(type).strip():
            raise PackageURLArgumentError("type")
        if name is None or not str(name).strip():
            raise PackageURLArgumentError("name")
        super().__init__(
            type=type.lower(),
            namespace=namespace,
            name=name,
            version=version,
            qualifiers=qualifiers,
            subpath=subpath,
        )

    @field_validator("qualifiers")
    @classmethod
    def freeze_qualifiers(cls, value: Any) -> Any:
        """Stores mapping qualifiers behind a read-only view."""
        if isinstance(value, Mapping):
            return MappingProxyType(dict(value))
        return value

    def __hash__(self) -> int:
        qualifiers = self.qualifiers
        if isinstance(qualifiers, Mapping):
            qualifiers = tuple(sorted(qualifiers.items()))
        return hash((self.type, self.namespace, self.name, self.version, qualifiers, self.subpath))

    @property
    def scheme(self) -> str:
        return SCHEME

    @classmethod
    def from_raw_components(cls, raw: RawComponents) -> PackageURL:
        """Decodes and normalizes raw components into a PackageURL.

        The raw qualifier string is what the name normalizer sees, so
        qualifier-dependent name rules work on the wire form.

        Raises:
            InvalidPackageURL: If a component fails normalization.
        """
        components = normalize_all(
            raw.type,
            raw.namespace,
            raw.name,
            raw.version,
            raw.qualifiers,
            raw.subpath,
            Direction.DECODE,
        )
        if components.name is None:
            raise MissingName(f"purl is missing the required name component: {raw.name!r}")
        return cls(
            type=components.type,
            namespace=components.namespace,
            name=components.name,
            version=components.version,
            qualifiers=components.qualifiers,
            subpath=components.subpath,
        )

    @classmethod
    def from_string(cls, purl: str) -> PackageURL:
        """Parses a purl string.

        Args:
            purl: A string such as `pkg:npm/%40angular/core@1.0.0`.

        Returns:
            A PackageURL with decoded, normalized components. Qualifiers are
            always a dict, empty when the string has none.

        Raises:
            InvalidPackageURL: If the string is not a valid purl. The concrete
                subclass names the violated rule.
        """
        try:
            return cls.from_raw_components(split_purl(purl))
        except InvalidPackageURL as e:
            logger.debug(f"Rejected purl {purl!r}: {e}")
            raise

    def normalized(self) -> PackageURL:
        """Returns a copy with every component canonicalized but not encoded.

        This applies the same case, segment and qualifier rules as
        `from_string` to a hand-built value, so it can be compared with a
        parsed one.

        Raises:
            InvalidPackageURL: If the qualifiers are invalid.
            PackageURLArgumentError: If the name normalizes to nothing.
        """
        components = normalize_all(
            self.type,
            self.namespace,
            self.name,
            self.version,
            self.qualifiers,
            self.subpath,
            Direction.NONE,
        )
        return PackageURL(**components._asdict())

    def to_string(self) -> str:
        """Encodes the PackageURL into its canonical string form.

        Returns:
            The canonical purl, e.g. `pkg:npm/%40angular/core@1.0.0?os=linux`.

        Raises:
            InvalidQualifierString: If string qualifiers contain a pair without `=`.
            InvalidQualifierKey: If a qualifier key is invalid.
            PackageURLArgumentError: If the type or name is empty once normalized.
        """
        components = normalize_all(
            self.type,
            self.namespace,
            self.name,
            self.version,
            self.qualifiers,
            self.subpath,
            Direction.ENCODE,
        )
        if components.type is None:
            raise PackageURLArgumentError("type")
        if components.name is None:
            raise PackageURLArgumentError("name")

        purl = f"{SCHEME}:{components.type}/"
        if components.namespace:
            purl = f"{purl}{components.namespace}/"
        purl = f"{purl}{components.name}"

        if components.version:
            purl = f"{purl}@{components.version}"

        if components.qualifiers:
            purl = f"{purl}?{components.qualifiers}"

        if components.subpath:
            purl = f"{purl}#{components.subpath}"

        return purl

    def __str__(self) -> str:
        return self.to_string()

    def to_dict(self) -> Dict[str, Any]:
        """Returns the scheme and the six stored components as a dict."""
        return {
            "scheme": SCHEME,
            "type": self.type,
            "namespace": self.namespace,
            "name": self.name,
            "version": self.version,
            "qualifiers": dict(self.qualifiers) if isinstance(self.qualifiers, Mapping) else self.qualifiers,
            "subpath": self.subpath,
        }

    @classmethod
    def validate_string(cls, purl: Any, strict: Optional[bool] = None) -> List[ValidationMessage]:
        """Checks a purl string and returns diagnostics instead of raising.

        See `purlkit.validate.validate_string`.
        """
        from .validate import validate_string  # Circular import

        return validate_string(purl, strict=strict)


def parse(purl: str) -> PackageURL:
    """Parses a purl string into a PackageURL. Same as `PackageURL.from_string`."""
    return PackageURL.from_string(purl)
