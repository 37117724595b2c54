"""Component normalization.

Every function here takes a component as given (raw wire text, decoded
text, or a mapping for qualifiers) and a `Direction`, and returns the
canonical value, or None when nothing is left. The same functions serve
parsing (DECODE), serialization (ENCODE) and canonicalizing values that are
already decoded (NONE).
"""
from __future__ import annotations

import re
from typing import Any, Callable, Dict, List, Mapping, NamedTuple, Optional, Tuple, Union

from .codec import Direction, get_quoter
from .exceptions import InvalidQualifierKey, InvalidQualifierString
from .types import PurlTypeRule, get_type_rule

VALID_QUALIFIER_KEY_CHARS = re.compile(r"[a-zA-Z0-9.\-_]+")
_PUB_INVALID_CHARS = re.compile(r"[^a-z0-9]")

Qualifiers = Union[Mapping[str, Any], str]


class NormalizedComponents(NamedTuple):
    type: Optional[str]
    namespace: Optional[str]
    name: Optional[str]
    version: Optional[str]
    qualifiers: Union[Dict[str, str], str, None]
    subpath: Optional[str]


def _is_blank(value: Any) -> bool:
    return value is None or not str(value).strip()


def _fold_case(text: str, case: str) -> str:
    if case == "lower":
        return text.lower()
    if case == "upper":
        return text.upper()
    return text


def _split_segments(text: str, quoter: Callable[[Any], Any], direction: Direction) -> List[str]:
    """Splits on `/` and quotes each piece.

    When decoding, a piece can decode to text holding `/`; it is split again
    so every returned segment is one that would survive re-encoding.
    """
    segments = [quoter(segment) for segment in text.split("/")]
    if direction is Direction.ENCODE:
        return segments
    return [part for segment in segments for part in segment.split("/")]


def normalize_type(value: Any, direction: Direction = Direction.ENCODE) -> Optional[str]:
    """Trims and lowercases the package type, then quotes it.

    Returns:
        The canonical type, or None if it is empty.
    """
    if _is_blank(value):
        return None
    type_str = get_quoter(direction)(str(value).strip().lower())
    return type_str or None


def normalize_namespace(
    value: Any, ptype: Optional[str] = None, direction: Direction = Direction.ENCODE
) -> Optional[str]:
    """Normalizes a slash-separated namespace.

    Case folding applies to the decoded text of each segment. Segments that
    are blank once decoded are dropped.

    Args:
        value: The namespace.
        ptype: The lowercase package type, used to pick the case rule.
        direction: How each segment is quoted.

    Returns:
        The segments joined with `/`, or None if no segment survives.
    """
    if _is_blank(value):
        return None

    case = get_type_rule(ptype).namespace_case
    quoter = get_quoter(direction)
    text = str(value).strip().strip("/")

    if direction is Direction.ENCODE:
        segments = [segment.strip() for segment in text.split("/")]
        result = "/".join(quoter(_fold_case(segment, case)) for segment in segments if segment)
    else:
        segments = [segment.strip() for segment in _split_segments(text, quoter, direction)]
        result = "/".join(_fold_case(segment, case) for segment in segments if segment)
    return result or None


def normalize_mlflow_name(name: str, qualifiers: Optional[Qualifiers]) -> str:
    """Applies the MLflow name rule, which depends on the model repository.

    Databricks registries are case-insensitive and get a lowercased name.
    Azure ML registries, and anything else, keep the name as given.

    Args:
        name: The already quoted and trimmed name.
        qualifiers: The qualifiers as a mapping, or as a raw qualifier string
            in which case the whole string is searched.
    """
    if isinstance(qualifiers, Mapping):
        repository_url = qualifiers.get("repository_url")
        haystack = str(repository_url).lower() if repository_url else ""
    elif isinstance(qualifiers, str):
        haystack = qualifiers.lower()
    else:
        haystack = ""

    if "azureml" in haystack:
        return name
    if "databricks" in haystack:
        return name.lower()
    return name


def _apply_name_rules(name: str, qualifiers: Optional[Qualifiers], rule: PurlTypeRule) -> str:
    if rule.name_rule == "mlflow":
        return normalize_mlflow_name(name, qualifiers)

    if rule.name_case == "lower":
        name = name.lower()

    if rule.name_rule == "pypi":
        name = name.replace("_", "-").lower()
    elif rule.name_rule == "hackage":
        name = name.replace("_", "-")
    elif rule.name_rule == "pub":
        name = _PUB_INVALID_CHARS.sub("_", name.lower())
    return name


def normalize_name(
    value: Any,
    qualifiers: Optional[Qualifiers] = None,
    ptype: Optional[str] = None,
    direction: Direction = Direction.ENCODE,
) -> Optional[str]:
    """Normalizes a package name using the rule registered for `ptype`.

    Trimming, slash stripping and the type's case and substitution rules
    all work on decoded text; quoting is the last step when encoding.

    Args:
        value: The name.
        qualifiers: The qualifiers in the same direction as `value`. Only
            consulted by types whose name depends on them (mlflow).
        ptype: The lowercase package type.
        direction: How the name is quoted.

    Returns:
        The canonical name, or None if it is empty.
    """
    if _is_blank(value):
        return None

    quoter = get_quoter(direction)
    rule = get_type_rule(ptype)

    if direction is Direction.ENCODE:
        name = _apply_name_rules(str(value).strip().strip("/"), qualifiers, rule)
        return quoter(name) if name.strip() else None

    name = quoter(str(value)).strip().strip("/")
    name = _apply_name_rules(name, qualifiers, rule)
    return name or None


def normalize_version(
    value: Any, ptype: Optional[str] = None, direction: Direction = Direction.ENCODE
) -> Optional[str]:
    """Normalizes a version, lowercasing it for types that require it.

    Args:
        value: The version.
        ptype: The lowercase package type.
        direction: How the version is quoted.

    Returns:
        The canonical version, or None if it is empty.
    """
    if _is_blank(value):
        return None

    case = get_type_rule(ptype).version_case
    quoter = get_quoter(direction)

    if direction is Direction.ENCODE:
        return quoter(_fold_case(str(value).strip(), case))

    version = _fold_case(quoter(str(value).strip()).strip(), case)
    return version or None


def _qualifier_pairs(value: Qualifiers) -> List[Tuple[Any, Any]]:
    if isinstance(value, str):
        # Trailing separators are ignored, empty pairs elsewhere are not.
        text = value.rstrip("&")
        if not text:
            return []
        pairs = text.split("&")
        if any("=" not in pair for pair in pairs):
            raise InvalidQualifierString(
                f"Invalid qualifier. Must be a string of key=value pairs: {pairs!r}"
            )
        return [(key, val) for key, _, val in (pair.partition("=") for pair in pairs)]
    if isinstance(value, Mapping):
        return list(value.items())
    raise InvalidQualifierString(f"Invalid qualifier. Must be a string or mapping: {value!r}")


def validate_qualifier_key(key: str) -> None:
    """Raises InvalidQualifierKey unless `key` is a valid qualifier key."""
    if not key:
        raise InvalidQualifierKey("A qualifier key cannot be empty", key)
    if "%" in key:
        raise InvalidQualifierKey(f"A qualifier key cannot be percent encoded: {key!r}", key)
    if " " in key:
        raise InvalidQualifierKey(f"A qualifier key cannot contain spaces: {key!r}", key)
    if not VALID_QUALIFIER_KEY_CHARS.fullmatch(key):
        raise InvalidQualifierKey(
            "A qualifier key must be composed only of ASCII letters and numbers, "
            f"period, dash and underscore: {key!r}",
            key,
        )
    if key[0].isdigit():
        raise InvalidQualifierKey(f"A qualifier key cannot start with a number: {key!r}", key)


def _normalized_qualifier_items(value: Qualifiers, direction: Direction) -> List[Tuple[str, str]]:
    quoter = get_quoter(direction)
    qualifiers: Dict[str, str] = {}
    for key, val in _qualifier_pairs(value):
        if _is_blank(key) or _is_blank(val):
            continue
        quoted = quoter(str(val))
        # A value can decode to nothing but whitespace.
        if not quoted.strip():
            continue
        qualifiers[str(key).strip().lower()] = quoted

    for key in qualifiers:
        validate_qualifier_key(key)

    return sorted(qualifiers.items())


def _is_empty_qualifiers(value: Any) -> bool:
    return value is None or (hasattr(value, "__len__") and len(value) == 0)


def normalize_qualifiers_map(
    value: Optional[Qualifiers], direction: Direction = Direction.DECODE
) -> Dict[str, str]:
    """Returns the canonical qualifiers as a key-sorted dict.

    Empty or absent qualifiers give an empty dict, never None.

    Raises:
        InvalidQualifierString: If a string pair has no `=`.
        InvalidQualifierKey: If a surviving key is invalid.
    """
    if _is_empty_qualifiers(value):
        return {}
    return dict(_normalized_qualifier_items(value, direction))


def normalize_qualifiers_string(value: Optional[Qualifiers]) -> Optional[str]:
    """Returns the canonical, encoded `key=value&...` qualifier string.

    Empty or absent qualifiers give None.

    Raises:
        InvalidQualifierString: If a string pair has no `=`.
        InvalidQualifierKey: If a surviving key is invalid.
    """
    if _is_empty_qualifiers(value):
        return None
    items = _normalized_qualifier_items(value, Direction.ENCODE)
    return "&".join(f"{key}={val}" for key, val in items) or None


def normalize_qualifiers(
    value: Optional[Qualifiers], direction: Direction = Direction.ENCODE
) -> Union[Dict[str, str], str, None]:
    """Normalizes qualifiers: a string when encoding, a dict otherwise."""
    if direction is Direction.ENCODE:
        return normalize_qualifiers_string(value)
    return normalize_qualifiers_map(value, direction)


def normalize_subpath(value: Any, direction: Direction = Direction.ENCODE) -> Optional[str]:
    """Normalizes a subpath.

    Empty, blank, `.` and `..` segments are dropped. When decoding, the
    check runs on decoded segments, so `%2E%2E` is dropped as well.

    Args:
        value: The subpath.
        direction: How each segment is quoted.

    Returns:
        The segments joined with `/`, or None if no segment survives.
    """
    if _is_blank(value):
        return None
    quoter = get_quoter(direction)

    def keep(segment: str) -> bool:
        return bool(segment.strip()) and segment not in (".", "..")

    if direction is Direction.ENCODE:
        result = "/".join(quoter(segment) for segment in str(value).split("/") if keep(segment))
    else:
        result = "/".join(
            segment for segment in _split_segments(str(value), quoter, direction) if keep(segment)
        )
    return result or None


def normalize_all(
    type: Any,
    namespace: Any,
    name: Any,
    version: Any,
    qualifiers: Optional[Qualifiers],
    subpath: Any,
    direction: Direction,
) -> NormalizedComponents:
    """Normalizes all seven components in one direction.

    The type is normalized first and its canonical value selects the rules
    for namespace, name and version. `qualifiers` is passed to the name
    normalizer as given.
    """
    type_norm = normalize_type(type, direction)
    return NormalizedComponents(
        type=type_norm,
        namespace=normalize_namespace(namespace, type_norm, direction),
        name=normalize_name(name, qualifiers, type_norm, direction),
        version=normalize_version(version, type_norm, direction),
        qualifiers=normalize_qualifiers(qualifiers, direction),
        subpath=normalize_subpath(subpath, direction),
    )
