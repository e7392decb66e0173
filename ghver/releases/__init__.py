"""Release channel resolution: classify tags, pick winners, resolve commits."""

from ghver.releases.classify import ReleaseReducer, classify, classify_and_reduce
from ghver.releases.errors import ReleaseError
from ghver.releases.model import Channel, Release, ReleaseSet
from ghver.releases.resolve import resolve_commits
from ghver.releases.service import get_releases, get_stable_version, parse_repo

__all__ = [
    "Channel",
    "Release",
    "ReleaseError",
    "ReleaseReducer",
    "ReleaseSet",
    "classify",
    "classify_and_reduce",
    "get_releases",
    "get_stable_version",
    "parse_repo",
    "resolve_commits",
]
