import pytest

from registry_api.catalog import semver


@pytest.mark.parametrize(
    "lower, higher",
    [
        ("1.0.0", "2.0.0"),
        ("1.9.0", "1.10.0"),
        ("1.0.9", "1.0.10"),
        ("1.0.0-alpha", "1.0.0"),
        ("1.0.0-alpha", "1.0.0-alpha.1"),
        ("1.0.0-alpha.1", "1.0.0-alpha.beta"),
        ("1.0.0-alpha.beta", "1.0.0-beta"),
        ("1.0.0-beta.2", "1.0.0-beta.11"),
        ("1.0.0-rc.1", "1.0.0"),
    ],
)
def test_precedence(lower, higher):
    assert semver.compare(lower, higher) == -1
    assert semver.compare(higher, lower) == 1


def test_build_metadata_is_ignored():
    assert semver.compare("1.0.0+build.1", "1.0.0+build.2") == 0
    assert semver.compare("1.0.0", "1.0.0+sha.abc") == 0


def test_sort_follows_semver_chain():
    chain = [
        "1.0.0-alpha",
        "1.0.0-alpha.1",
        "1.0.0-alpha.beta",
        "1.0.0-beta",
        "1.0.0-beta.2",
        "1.0.0-beta.11",
        "1.0.0-rc.1",
        "1.0.0",
    ]
    assert semver.sort_versions(reversed(chain)) == chain


@pytest.mark.parametrize("value", ["1.0", "01.0.0", "1.0.0-", "v1.0.0", "1.0.0-01", "", "latest"])
def test_invalid_versions_are_rejected(value):
    assert not semver.is_valid(value)
    with pytest.raises(semver.InvalidVersion):
        semver.parse(value)


def test_compare_rejects_invalid_input():
    with pytest.raises(semver.InvalidVersion):
        semver.compare("1.0.0", "not-a-version")


def test_stability():
    assert semver.is_stable("2.3.4")
    assert semver.is_stable("2.3.4+build")
    assert not semver.is_stable("2.3.4-rc.1")


def test_max_versions_skip_invalid_entries():
    values = ["0.9.0", "garbage", "1.0.0", "1.1.0-beta.1"]
    assert semver.max_version(values) == "1.1.0-beta.1"
    assert semver.max_stable_version(values) == "1.0.0"


def test_max_versions_of_empty_input():
    assert semver.max_version([]) is None
    assert semver.max_stable_version(["2.0.0-rc.1"]) is None


SAMPLE = [
    "0.0.1",
    "0.9.0",
    "1.0.0-0",
    "1.0.0-alpha",
    "1.0.0-alpha.1",
    "1.0.0-alpha.beta",
    "1.0.0-rc.1+build.5",
    "1.0.0",
    "1.0.0+meta",
    "1.2.3",
    "10.0.0",
]


def test_compare_is_antisymmetric_and_transitive():
    for a in SAMPLE:
        for b in SAMPLE:
            assert semver.compare(a, b) == -semver.compare(b, a)
            for c in SAMPLE:
                if semver.compare(a, b) <= 0 and semver.compare(b, c) <= 0:
                    assert semver.compare(a, c) <= 0
