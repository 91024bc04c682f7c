"""Program version information."""

from __future__ import annotations

from dataclasses import dataclass

TAG = "v0.0.0-dev"
PROGRAM_NAME = "gptscript"

# Filled in by the release build; empty for development installs.
BUILD_COMMIT = ""
BUILD_DIRTY = False


@dataclass
class Version:
    """A release tag with the commit it was built from."""

    tag: str = ""
    commit: str = ""
    dirty: bool = False

    def __str__(self) -> str:
        if len(self.commit) < 12:
            return self.tag
        if self.dirty:
            return f"{self.tag}-{self.commit[:8]}-dirty"
        return f"{self.tag}+{self.commit[:8]}"


def git_commit() -> tuple[str, bool]:
    """The commit this build was made from, and whether the tree was dirty."""
    commit = BUILD_COMMIT if isinstance(BUILD_COMMIT, str) else ""
    if not commit:
        return "", False
    return commit, bool(BUILD_DIRTY)


def new_version(tag: str) -> Version:
    """A version for ``tag`` with the current build's commit."""
    commit, dirty = git_commit()
    return Version(tag=tag, commit=commit, dirty=dirty)


def get() -> Version:
    """The version of this program."""
    return new_version(TAG)