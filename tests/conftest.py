"""Shared fixtures: a throwaway local Maven repository."""

import os
import zipfile

import pytest

from resolver.local import LocalRepositoryResolver


def install_jar(repo_root, group_id, artifact_id, version, classifier=None, entries=None):
    """Create a small jar in Maven layout and return its path."""
    name = f"{artifact_id}-{version}"
    if classifier:
        name = f"{name}-{classifier}"
    directory = os.path.join(repo_root, *group_id.split("."), artifact_id, version)
    os.makedirs(directory, exist_ok=True)
    path = os.path.join(directory, f"{name}.jar")
    with zipfile.ZipFile(path, "w") as jar:
        jar.writestr("META-INF/MANIFEST.MF", "Manifest-Version: 1.0\n")
        for entry, content in (entries or {}).items():
            jar.writestr(entry, content)
    return path


@pytest.fixture
def repo(tmp_path):
    """Local repository holding com.example:baz:1.2.3."""
    root = tmp_path / "repository"
    install_jar(str(root), "com.example", "baz", "1.2.3")
    return str(root)


@pytest.fixture
def local_resolver(repo):
    return LocalRepositoryResolver(repo)
