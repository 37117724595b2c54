"""Tests for component normalization."""
import pytest

from purlkit import Direction, InvalidQualifierKey, InvalidQualifierString
from purlkit.normalize import (
    normalize_all,
    normalize_mlflow_name,
    normalize_name,
    normalize_namespace,
    normalize_qualifiers,
    normalize_qualifiers_map,
    normalize_qualifiers_string,
    normalize_subpath,
    normalize_type,
    normalize_version,
)

DATABRICKS_URL = "https://adb-5245952564735461.0.azuredatabricks.net/api/2.0/mlflow"
AZUREML_URL = "https://westus2.api.azureml.ms/mlflow/v1.0/subscriptions/a"


def test_normalize_type() -> None:
    assert normalize_type(" NPM ") == "npm"
    assert normalize_type("") is None
    assert normalize_type(None) is None


def test_normalize_namespace_case_rules() -> None:
    assert normalize_namespace("/GitHub/Org/", "github", Direction.DECODE) == "github/org"
    assert normalize_namespace("Perl", "cpan") == "PERL"
    assert normalize_namespace("Org", "maven") == "Org"


def test_normalize_namespace_drops_empty_segments() -> None:
    assert normalize_namespace("a//b/ ", None) == "a/b"
    assert normalize_namespace("//", None) is None
    assert normalize_namespace("   ", None) is None


def test_normalize_namespace_quotes_each_segment() -> None:
    assert normalize_namespace("@angular", "npm", Direction.ENCODE) == "%40angular"
    assert normalize_namespace("%40angular", "npm", Direction.DECODE) == "@angular"


@pytest.mark.parametrize(
    "ptype,name,expected",
    [
        ("pypi", "Django_Rest", "django-rest"),
        ("hackage", "Happy_Path", "Happy-Path"),
        ("pub", "Flutter-Widgets", "flutter_widgets"),
        ("npm", "Foo", "foo"),
        ("maven", "Foo", "Foo"),
        (None, "/foo/", "foo"),
    ],
)
def test_normalize_name_type_rules(ptype, name, expected) -> None:
    assert normalize_name(name, None, ptype, Direction.DECODE) == expected


def test_normalize_name_encode_quotes_whole_value() -> None:
    assert normalize_name("a/b", None, "generic", Direction.ENCODE) == "a%2Fb"
    assert normalize_name(" ", None, "generic") is None


def test_normalize_mlflow_name() -> None:
    assert normalize_mlflow_name("CreditFraud", {"repository_url": DATABRICKS_URL}) == "creditfraud"
    assert normalize_mlflow_name("CreditFraud", {"repository_url": AZUREML_URL}) == "CreditFraud"
    assert normalize_mlflow_name("CreditFraud", f"repository_url={DATABRICKS_URL}") == "creditfraud"
    assert normalize_mlflow_name("CreditFraud", {}) == "CreditFraud"
    assert normalize_mlflow_name("CreditFraud", None) == "CreditFraud"


def test_normalize_name_delegates_to_mlflow_rule() -> None:
    qualifiers = {"repository_url": DATABRICKS_URL}
    assert normalize_name("CreditFraud", qualifiers, "mlflow", Direction.NONE) == "creditfraud"


def test_normalize_version() -> None:
    assert normalize_version(" 1.0.0 ", None, Direction.DECODE) == "1.0.0"
    assert normalize_version("ABC", "huggingface") == "abc"
    assert normalize_version("ABC", "npm") == "ABC"
    assert normalize_version("1.0+build", None, Direction.ENCODE) == "1.0%2Bbuild"
    assert normalize_version("", None) is None


def test_normalize_qualifiers_sorts_and_lowercases_keys() -> None:
    assert normalize_qualifiers({"b": "2", "A": "1"}, Direction.ENCODE) == "a=1&b=2"
    result = normalize_qualifiers("os=linux&arch=amd64", Direction.DECODE)
    assert result == {"arch": "amd64", "os": "linux"}
    assert list(result) == ["arch", "os"]


def test_normalize_qualifiers_drops_empty_entries() -> None:
    assert normalize_qualifiers({"os": "", "arch": "x64"}, Direction.ENCODE) == "arch=x64"
    assert normalize_qualifiers_string({"os": " "}) is None
    assert normalize_qualifiers_map("os=&=x", Direction.DECODE) == {}


def test_normalize_qualifiers_empty_views() -> None:
    assert normalize_qualifiers({}, Direction.ENCODE) is None
    assert normalize_qualifiers({}, Direction.DECODE) == {}
    assert normalize_qualifiers(None, Direction.DECODE) == {}
    assert normalize_qualifiers_map("", Direction.DECODE) == {}
    assert normalize_qualifiers_map("&", Direction.DECODE) == {}


def test_normalize_qualifiers_values_are_quoted() -> None:
    assert (
        normalize_qualifiers_string({"url": "https://a.b/c d"})
        == "url=https:%2F%2Fa.b%2Fc%20d"
    )
    assert normalize_qualifiers_map("checksum=sha1%3Aabc") == {"checksum": "sha1:abc"}


def test_normalize_qualifiers_ignores_trailing_separator() -> None:
    assert normalize_qualifiers_map("os=linux&") == {"os": "linux"}


@pytest.mark.parametrize("value", ["a=1&b", "a=1&&b=2", "novalue"])
def test_normalize_qualifiers_rejects_pairs_without_equals(value) -> None:
    with pytest.raises(InvalidQualifierString):
        normalize_qualifiers(value, Direction.DECODE)


def test_normalize_qualifiers_rejects_other_types() -> None:
    with pytest.raises(InvalidQualifierString):
        normalize_qualifiers(["a=1"], Direction.ENCODE)


@pytest.mark.parametrize(
    "key,fragment",
    [
        ("1bad", "cannot start with a number"),
        ("a%20b", "cannot be percent encoded"),
        ("a b", "cannot contain spaces"),
        ("a*b", "must be composed only of"),
    ],
)
def test_normalize_qualifiers_rejects_invalid_keys(key, fragment) -> None:
    with pytest.raises(InvalidQualifierKey) as excinfo:
        normalize_qualifiers({key: "x"}, Direction.ENCODE)
    assert fragment in str(excinfo.value)
    assert excinfo.value.key == key


def test_normalize_subpath() -> None:
    assert normalize_subpath("/a/./b/../c/", Direction.ENCODE) == "a/b/c"
    assert normalize_subpath("a b/c", Direction.ENCODE) == "a%20b/c"
    assert normalize_subpath("a%20b/c", Direction.DECODE) == "a b/c"
    assert normalize_subpath("./..", Direction.ENCODE) is None
    assert normalize_subpath(None) is None


def test_normalize_all_uses_normalized_type() -> None:
    components = normalize_all("PyPI", None, "Django_X", "1.0", "a=1", None, Direction.DECODE)
    assert components.type == "pypi"
    assert components.namespace is None
    assert components.name == "django-x"
    assert components.version == "1.0"
    assert components.qualifiers == {"a": "1"}
    assert components.subpath is None


def test_normalize_type_trims_before_quoting() -> None:
    assert normalize_type(" NPM ", Direction.ENCODE) == "npm"


def test_encoded_escapes_stay_uppercase_after_case_folding() -> None:
    assert normalize_name("A/B", None, "npm", Direction.ENCODE) == "a%2Fb"
    assert normalize_version("1.0+RC", "oci", Direction.ENCODE) == "1.0%2Brc"
    assert normalize_namespace("Ünïcode", "github", Direction.ENCODE) == "%C3%BCn%C3%AFcode"


def test_decoded_blank_and_dot_segments_are_dropped() -> None:
    assert normalize_namespace("%20/a/%2F", None, Direction.DECODE) == "a"
    assert normalize_subpath("%2E%2E/a/%2E/%20", Direction.DECODE) == "a"
    assert normalize_version("%20", None, Direction.DECODE) is None
    assert normalize_qualifiers_map("a=%20&b=1", Direction.DECODE) == {"b": "1"}


def test_case_folding_applies_to_decoded_namespace() -> None:
    assert normalize_namespace("%C3%89quipe", "github", Direction.DECODE) == "équipe"
