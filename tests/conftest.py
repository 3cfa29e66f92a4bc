"""Shared fixtures for forgerpm tests."""

import io
import json
import tarfile

import pytest


def build_tarball(files):
    """Return gzipped tar bytes holding the given {path: str|bytes|dict} entries."""
    buf = io.BytesIO()
    with tarfile.open(fileobj=buf, mode="w:gz") as tf:
        for name, content in files.items():
            if isinstance(content, dict):
                content = json.dumps(content)
            data = content.encode("utf-8") if isinstance(content, str) else content
            info = tarfile.TarInfo(name)
            info.size = len(data)
            tf.addfile(info, io.BytesIO(data))
    return buf.getvalue()


def module_metadata(name="puppetlabs-apache", version="1.0.0", **overrides):
    """A minimal but complete metadata.json document."""
    data = {
        "name": name,
        "version": version,
        "author": name.split("-", 1)[0],
        "license": "Apache-2.0",
        "summary": f"{name} module",
        "description": f"Installs and manages {name}.",
        "dependencies": [],
        "checksums": {
            "manifests/init.pp": "d41d8cd98f00b204e9800998ecf8427e",
            "Modulefile": "0cc175b9c0f1b6a831c399e269772661",
        },
    }
    data.update(overrides)
    return data


@pytest.fixture
def make_tarball():
    """Factory fixture building in-memory release tarballs."""
    return build_tarball


@pytest.fixture
def metadata_doc():
    """Factory fixture for metadata.json documents."""
    return module_metadata
