"""Tests for spec variable projection and rendering."""

import pytest

from archive.metadata import ModuleMetadata
from errors import FilesystemError
from rpmspec.render import (
    FormatTemplateEngine,
    build_directory_name,
    descriptor_filename,
    load_template,
    render,
    spec_variables,
    write_spec,
)
from versioning.models import Dependency, ResolvedRelease


@pytest.fixture
def resolved():
    return ResolvedRelease(
        package_name="puppetlabs/apache",
        version="1.0.0",
        download_url="puppetlabs/apache/1.0.0.tar.gz",
        local_filename="puppet-puppetlabs-apache-1.0.0.tar.gz",
    )


@pytest.fixture
def metadata():
    return ModuleMetadata(
        name="puppetlabs-apache",
        author="puppetlabs",
        version="1.0.0",
        license="Apache-2.0",
        summary="Apache module",
        description="Installs, configures, and manages Apache.",
        dependencies=(
            Dependency("puppetlabs/stdlib", ">= 2.4.0"),
            Dependency("puppetlabs/concat", ">= 1.0.0"),
            Dependency("ripienaar/module_data"),
        ),
        checksums={
            "templates/vhost.conf.erb": "1",
            "manifests/init.pp": "2",
            "Modulefile": "3",
        },
    )


class TestSpecVariables:
    """Test spec_variables()."""

    def test_names(self, resolved, metadata):
        """Test package, module and install names."""
        variables = spec_variables(resolved, metadata)
        assert variables.package_display_name == "puppet-puppetlabs-apache"
        assert variables.module_short_name == "apache"
        assert variables.module_full_name == "puppetlabs-apache"
        assert variables.source_filename == "puppet-puppetlabs-apache-1.0.0.tar.gz"
        assert variables.install_dir == "%{_datadir}/puppet/modules/apache"

    def test_requires_sorted(self, resolved, metadata):
        """Test Requires entries are sorted."""
        variables = spec_variables(resolved, metadata)
        assert variables.requires == (
            "puppet-puppetlabs-concat >= 1.0.0",
            "puppet-puppetlabs-stdlib >= 2.4.0",
            "puppet-ripienaar-module_data",
        )

    def test_files_sorted_with_metadata(self, resolved, metadata):
        """Test the file list is sorted and includes metadata.json."""
        variables = spec_variables(resolved, metadata)
        assert variables.files == (
            "Modulefile",
            "manifests/init.pp",
            "metadata.json",
            "templates/vhost.conf.erb",
        )

    def test_metadata_listed_once(self, resolved, metadata):
        """Test metadata.json is not listed twice."""
        meta = ModuleMetadata(
            name=metadata.name, author=metadata.author, version="1.0.0",
            checksums={"metadata.json": "x", "README.md": "y"},
        )
        assert spec_variables(resolved, meta).files == ("README.md", "metadata.json")

    def test_release_defaults(self, resolved, metadata):
        """Test the default release and build directory."""
        variables = spec_variables(resolved, metadata)
        assert variables.release == "1"
        assert variables.build_directory_name == "puppetlabs-apache-1.0.0"

    def test_explicit_release_in_build_directory(self, metadata):
        """Test an explicit release is part of the build directory."""
        resolved = ResolvedRelease(
            package_name="puppetlabs/apache",
            version="1.0.0",
            release="3",
            explicit_release=True,
            download_url="puppetlabs/apache/1.0.0-3.tar.gz",
            local_filename="puppet-puppetlabs-apache-1.0.0.tar.gz",
        )
        assert build_directory_name(resolved, metadata) == "puppetlabs-apache-1.0.0-3"
        assert spec_variables(resolved, metadata).release == "3"


class TestRender:
    """Test render() with the packaged template."""

    def test_deterministic(self, resolved, metadata):
        """Test identical input renders identical text."""
        assert render(resolved, metadata) == render(resolved, metadata)

    def test_input_order_does_not_matter(self, resolved, metadata):
        """Test dependency and checksum order do not change output."""
        shuffled = ModuleMetadata(
            name=metadata.name,
            author=metadata.author,
            version=metadata.version,
            license=metadata.license,
            summary=metadata.summary,
            description=metadata.description,
            dependencies=tuple(reversed(metadata.dependencies)),
            checksums=dict(reversed(list(metadata.checksums.items()))),
        )
        assert render(resolved, shuffled) == render(resolved, metadata)

    def test_sections_in_order(self, resolved, metadata):
        """Test spec sections appear in template order."""
        text = render(resolved, metadata)
        markers = [
            "%define module_name apache",
            "Summary:        Apache module",
            "License:        Apache-2.0",
            "Name:           puppet-puppetlabs-apache",
            "Version:        %{module_version}",
            "Release:        %{module_release}",
            "Source0:        puppet-puppetlabs-apache-1.0.0.tar.gz",
            "Requires:       puppet-puppetlabs-concat >= 1.0.0",
            "Requires:       puppet-puppetlabs-stdlib >= 2.4.0",
            "Requires:       puppet-ripienaar-module_data",
            "%setup -q -n puppetlabs-apache-1.0.0",
            "%install",
            "%files",
            "%{_datadir}/puppet/modules/apache/Modulefile",
            "%{_datadir}/puppet/modules/apache/metadata.json",
            "%description",
            "Installs, configures, and manages Apache.",
        ]
        positions = [text.index(m) for m in markers]
        assert positions == sorted(positions)

    def test_macros_and_versions(self, resolved, metadata):
        """Test version macros and buildroot paths."""
        text = render(resolved, metadata)
        assert "%define module_version 1.0.0" in text
        assert "%define module_release 1" in text
        assert "%{buildroot}%{_datadir}/puppet/modules/apache" in text

    def test_custom_engine(self, resolved, metadata):
        """Test a custom template engine receives the variables."""
        class RecordingEngine:
            def render(self, template, variables):
                self.seen = (template, dict(variables))
                return "rendered"

        engine = RecordingEngine()
        assert render(resolved, metadata, template="T", engine=engine) == "rendered"
        assert engine.seen[0] == "T"
        assert engine.seen[1]["package_display_name"] == "puppet-puppetlabs-apache"

    def test_format_engine(self):
        """Test doubled braces survive formatting."""
        assert FormatTemplateEngine().render("%{{x}} {y}", {"y": "z"}) == "%{x} z"

    def test_template_asset_loads(self):
        """Test the packaged template can be loaded."""
        assert "{package_display_name}" in load_template()


class TestOutput:
    """Test descriptor naming and writing."""

    def test_descriptor_filename(self, resolved):
        """Test the spec file name."""
        assert descriptor_filename(resolved) == "puppet-puppetlabs-apache.spec"

    def test_write_spec(self, tmp_path):
        """Test spec text is written to disk."""
        path = tmp_path / "x.spec"
        write_spec(str(path), "Name: x\n")
        assert path.read_text(encoding="utf-8") == "Name: x\n"

    def test_write_spec_failure(self, tmp_path):
        """Test an unwritable path raises FilesystemError."""
        with pytest.raises(FilesystemError):
            write_spec(str(tmp_path / "missing" / "x.spec"), "Name: x\n")
