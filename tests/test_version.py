import json
from importlib import metadata
from unittest import mock

from gptscript import version
from gptscript.version import Version, get, git_commit, new_version


class _FakeDist:
    def __init__(self, payload):
        self._payload = payload

    def read_text(self, name):
        return self._payload if name == "direct_url.json" else None


def test_short_commit_gives_tag():
    assert str(Version(tag="v1.2.3", commit="abc")) == "v1.2.3"


def test_clean_commit():
    v = Version(tag="v1", commit="0123456789abcdef")
    assert str(v) == "v1+" + "0123456789abcdef"[:8]


def test_dirty_commit():
    v = Version(tag="v1", commit="0123456789abcdef", dirty=True)
    assert str(v).endswith("-dirty")
    assert str(v).startswith("v1-01234567")


def test_new_version_keeps_tag():
    v = new_version("v9.9.9")
    assert v.tag == "v9.9.9"
    assert (v.commit, v.dirty) == git_commit()


def test_get_uses_default_tag():
    assert get().tag == version.TAG


def test_git_commit_missing_package():
    with mock.patch.object(metadata, "distribution", side_effect=metadata.PackageNotFoundError("x")):
        assert git_commit() == ("", False)


def test_git_commit_without_vcs_info():
    payload = json.dumps({"url": "file:///tmp/x"})
    with mock.patch.object(metadata, "distribution", return_value=_FakeDist(payload)):
        assert git_commit() == ("", False)