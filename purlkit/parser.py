"""Splits a purl string into its raw components.

The split is positional and does not use a general URL parser for the
name, namespace and version: a purl such as
`pkg:golang/golang.org/x/text@v0.3.0` has a dotted first segment that a URL
parser would read as a host.
"""
from __future__ import annotations

import re
from typing import NamedTuple, Optional, Tuple

from .exceptions import (
    InvalidPackageURL,
    InvalidRemainder,
    InvalidType,
    MissingName,
    MissingScheme,
    MissingType,
)

SCHEME = "pkg"
VALID_TYPE_CHARS = re.compile(r"[A-Za-z0-9.\-_]+")

# RFC 3986 relative reference: path, optional query, optional fragment.
_PCHAR = r"(?:%[0-9A-Fa-f]{2}|[A-Za-z0-9\-._~!$&'()*+,;=:@])"
_REMAINDER = re.compile(
    rf"(?P<path>(?:{_PCHAR}|/)*)"
    r"(?:\?(?P<query>[^#]*))?"
    rf"(?:\#(?P<fragment>(?:{_PCHAR}|[/?])*))?"
)


class RawComponents(NamedTuple):
    """Components of a purl string before decoding and normalization.

    `type` is kept as written; every other component is still percent-encoded.
    """

    type: str
    namespace: Optional[str]
    name: str
    version: Optional[str]
    qualifiers: Optional[str]
    subpath: Optional[str]


def split_remainder(remainder: str) -> Tuple[str, Optional[str], Optional[str]]:
    """Splits the text after the type into path, query and fragment.

    Args:
        remainder: Everything after `type/`.

    Returns:
        A `(path, query, fragment)` tuple. Query and fragment are None when
        their delimiter is absent.

    Raises:
        InvalidRemainder: If the text is not ASCII or is not a well formed
            path/query/fragment.
    """
    match = _REMAINDER.fullmatch(remainder) if remainder.isascii() else None
    if match is None:
        raise InvalidRemainder(f"Invalid purl remainder: {remainder!r}")
    return match.group("path"), match.group("query"), match.group("fragment")


def split_purl(purl: str) -> RawComponents:
    """Splits a purl string into raw components.

    Args:
        purl: The package URL string.

    Returns:
        The raw components.

    Raises:
        InvalidPackageURL: If any part of the grammar is violated. The concrete
            subclass names the rule.
    """
    if not isinstance(purl, str) or not purl.strip():
        raise InvalidPackageURL("A purl string argument is required.")

    scheme, sep, remainder = purl.partition(":")
    if not sep or scheme != SCHEME:
        raise MissingScheme(f"purl is missing the required 'pkg:' scheme component: {purl!r}")

    # pkg://type and pkg:///type are tolerated.
    remainder = remainder.strip().lstrip("/")

    ptype, sep, remainder = remainder.partition("/")
    if not ptype or not sep:
        raise MissingType(f"purl is missing the required type component: {purl!r}")
    if not VALID_TYPE_CHARS.fullmatch(ptype):
        raise InvalidType(
            "purl type must be composed only of ASCII letters and numbers, "
            f"period, dash and underscore: {ptype!r}"
        )
    if ptype[0].isdigit():
        raise InvalidType(f"purl type cannot start with a number: {ptype!r}")

    path, qualifiers, subpath = split_remainder(remainder)

    namespace = ""
    version = None

    if ptype.lower() == "npm" and path.startswith("@"):
        namespace, _, path = path.partition("/")

    # The version follows the last "@"; earlier ones belong to the name.
    if "@" in path:
        path, _, version = path.rpartition("@")

    segments = [segment.strip() for segment in path.strip().strip("/").split("/")]
    segments = [segment for segment in segments if segment]

    name = ""
    if not namespace and len(segments) > 1:
        namespace = "/".join(segments[:-1])
        name = segments[-1]
    elif len(segments) == 1:
        name = segments[0]

    if not name:
        raise MissingName(f"purl is missing the required name component: {purl!r}")

    return RawComponents(
        type=ptype,
        namespace=namespace or None,
        name=name,
        version=version,
        qualifiers=qualifiers,
        subpath=subpath,
    )
