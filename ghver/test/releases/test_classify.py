from __future__ import annotations

import itertools
import random

import pytest

from ghver.releases import semver
from ghver.releases.classify import ReleaseReducer, classify, classify_and_reduce
from ghver.releases.model import Channel, Release, ReleaseSet


@pytest.mark.parametrize(
    ("tag", "channel"),
    [
        ("v1.19.2", Channel.STABLE),
        ("v1.19.2+build.1", Channel.STABLE),
        ("v1.20.0-rc.1", Channel.LATEST),
        ("v1.20.0-rc1", Channel.LATEST),
        ("v1.20.0-beta.0", Channel.LATEST),
        ("v1.21.0-alpha.0", Channel.EDGE),
        ("v1.21.0-pre-alpha", Channel.EDGE),
        ("v1.21.0-preview.1", None),
        ("v1.21.0-nightly", None),
        ("1.19.2", None),
        ("latest", None),
        ("", None),
    ],
)
def test_classify(tag: str, channel: Channel | None) -> None:
    assert classify(tag) == channel


def test_mixed_stream() -> None:
    result = classify_and_reduce(["v1.19.0", "v1.19.1", "v1.20.0-rc.1", "v1.19.3-alpha.0"])

    assert result == ReleaseSet.from_tags("v1.19.1", "v1.20.0-rc.1", "v1.20.0-rc.1")


def test_only_stable_copies_forward() -> None:
    assert classify_and_reduce(["v2.0.0"]) == ReleaseSet.from_tags("v2.0.0", "v2.0.0", "v2.0.0")


def test_all_channels() -> None:
    result = classify_and_reduce(
        ["v1.20.0-beta.0", "v1.21.0-alpha.2", "v1.19.2", "v1.20.0-rc.1", "v1.21.0-alpha.10"]
    )

    assert result == ReleaseSet.from_tags("v1.19.2", "v1.20.0-rc.1", "v1.21.0-alpha.10")


def test_stale_prerelease_raised_to_stable() -> None:
    # The rc was released as v1.20.0; latest and edge must not lag behind.
    result = classify_and_reduce(["v1.20.0-rc.1", "v1.20.0-alpha.3", "v1.20.0"])

    assert result == ReleaseSet.from_tags("v1.20.0", "v1.20.0", "v1.20.0")


def test_numeric_not_string_order() -> None:
    result = classify_and_reduce(["v1.10.0", "v1.9.0", "v1.2.0"])
    assert result.stable.tag == "v1.10.0"


@pytest.mark.parametrize("tags", [[], ["latest", "nightly", "1.2.3", "v01.0.0", "release-2024"]])
def test_no_valid_tags(tags: list[str]) -> None:
    assert classify_and_reduce(tags) == ReleaseSet()


def test_unrecognised_prereleases_ignored() -> None:
    result = classify_and_reduce(["v3.0.0-preview.1", "v1.0.0"])
    assert result == ReleaseSet.from_tags("v1.0.0", "v1.0.0", "v1.0.0")


def test_commits_left_empty() -> None:
    result = classify_and_reduce(["v1.0.0"])
    assert all(r.commit == "" for r in result.as_tuple())


def test_equal_tag_does_not_replace() -> None:
    # build metadata is ignored for precedence, so the first one wins
    result = classify_and_reduce(["v1.0.0+a", "v1.0.0+b"])
    assert result.stable == Release("v1.0.0+a")


TAGS = [
    "v1.18.0",
    "v1.19.0-beta.1",
    "v1.19.0",
    "v1.19.1",
    "v1.20.0-alpha.1",
    "v1.20.0-beta.0",
    "v1.20.0-rc.1",
    "v1.21.0-alpha.0",
    "not-a-tag",
    "v1.17.0-alpha.9",
]


def test_order_independent() -> None:
    expected = classify_and_reduce(TAGS)
    assert expected == ReleaseSet.from_tags("v1.19.1", "v1.20.0-rc.1", "v1.21.0-alpha.0")

    rng = random.Random(1234)
    for _ in range(200):
        shuffled = TAGS[:]
        rng.shuffle(shuffled)
        assert classify_and_reduce(shuffled) == expected


def test_monotonic_for_every_prefix_and_order() -> None:
    for perm in itertools.permutations(TAGS[:6]):
        reducer = ReleaseReducer()
        for tag in perm:
            reducer.add(tag)
            r = reducer.result
            assert semver.compare(r.latest.tag, r.stable.tag) >= 0
            assert semver.compare(r.edge.tag, r.latest.tag) >= 0


def test_reducer_incremental_matches_batch() -> None:
    reducer = ReleaseReducer()
    reducer.add_all(TAGS[:5])
    reducer.add_all(TAGS[5:])
    assert reducer.result == classify_and_reduce(TAGS)
