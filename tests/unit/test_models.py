"""Tests for response models."""

from __future__ import annotations

from wazuh_console.models.vulnerability import (
    FlatPackage,
    NestedPackage,
    VulnerabilityItem,
    VulnerabilitySearchResponse,
)


class TestPackageResolution:
    def test_flat_fields_only(self):
        item = VulnerabilityItem.model_validate({"cve": "C1", "name": "openssl", "version": "3.0"})
        pkg = item.resolve_package()
        assert isinstance(pkg, FlatPackage)
        assert (item.package_name, item.package_version) == ("openssl", "3.0")

    def test_flat_name_without_version(self):
        item = VulnerabilityItem.model_validate({"cve": "C1", "name": "curl"})
        assert item.resolve_package() == FlatPackage(name="curl", version="")

    def test_nested_wins_over_flat(self):
        item = VulnerabilityItem.model_validate({
            "cve": "C2",
            "package": {"name": "libssl3", "version": "3.0.2-0ubuntu1"},
            "name": "openssl",
            "version": "1.1",
        })
        pkg = item.resolve_package()
        assert isinstance(pkg, NestedPackage)
        assert item.package_name == "libssl3"
        assert item.package_version == "3.0.2-0ubuntu1"

    def test_no_package(self):
        item = VulnerabilityItem(cve="C3")
        assert item.resolve_package() is None
        assert item.package_name == ""


class TestSearchTotal:
    def test_object_form(self):
        response = VulnerabilitySearchResponse.model_validate(
            {"hits": {"total": {"value": 5, "relation": "eq"}}}
        )
        assert response.hits.total.value == 5

    def test_integer_form(self):
        response = VulnerabilitySearchResponse.model_validate({"hits": {"total": 2, "hits": []}})
        assert response.hits.total.value == 2

    def test_missing(self):
        assert VulnerabilitySearchResponse.model_validate({}).hits.total.value == 0
