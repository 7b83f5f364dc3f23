"""Vulnerability models for the console and the indexer's state index."""

from __future__ import annotations

from typing import Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class NestedPackage(BaseModel):
    """Package taken from a nested ``package`` object."""

    kind: Literal["nested"] = "nested"
    name: str = ""
    version: str = ""
    architecture: str | None = None


class FlatPackage(BaseModel):
    """Package taken from top-level ``name`` / ``version`` fields."""

    kind: Literal["flat"] = "flat"
    name: str = ""
    version: str = ""


PackageRef = Union[NestedPackage, FlatPackage]


class VulnerabilityItem(BaseModel):
    """A vulnerability affecting one agent.

    Older endpoints report the package as flat ``name``/``version`` fields,
    newer ones as a nested ``package`` object. The nested form wins.
    """

    cve: str
    severity: str = "-"
    status: str | None = None
    title: str | None = None
    package: NestedPackage | None = None
    name: str | None = None
    version: str | None = None

    def resolve_package(self) -> PackageRef | None:
        if self.package is not None:
            return self.package
        if self.name is not None or self.version is not None:
            return FlatPackage(name=self.name or "", version=self.version or "")
        return None

    @property
    def package_name(self) -> str:
        pkg = self.resolve_package()
        return pkg.name if pkg else ""

    @property
    def package_version(self) -> str:
        pkg = self.resolve_package()
        return pkg.version if pkg else ""


class VulnerabilitySummary(BaseModel):
    """Vulnerability counts by severity across all agents."""

    critical: int = 0
    high: int = 0
    medium: int = 0
    low: int = 0
    untriaged: int = 0


# Indexer document shapes (wazuh-states-vulnerabilities*)


class SearchScore(BaseModel):
    base: float | None = None
    version: str | None = None


class SearchScanner(BaseModel):
    condition: str | None = None
    reference: str | None = None
    source: str | None = None
    vendor: str | None = None


class SearchVulnerability(BaseModel):
    id: str = ""
    category: str | None = None
    classification: str | None = None
    description: str | None = None
    detected_at: str | None = None
    enumeration: str | None = None
    published_at: str | None = None
    reference: str | None = None
    scanner: SearchScanner | None = None
    score: SearchScore | None = None
    severity: str | None = None
    under_evaluation: bool | None = None


class SearchPackage(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str | None = None
    version: str | None = None
    pkg_type: str | None = Field(default=None, alias="type")
    path: str | None = None


class SearchAgent(BaseModel):
    id: str | None = None
    name: str | None = None


class VulnerabilityDocument(BaseModel):
    """``_source`` of one vulnerability state document."""

    vulnerability: SearchVulnerability = Field(default_factory=SearchVulnerability)
    package: SearchPackage | None = None
    agent: SearchAgent | None = None

    def to_item(self) -> VulnerabilityItem:
        pkg = self.package
        return VulnerabilityItem(
            cve=self.vulnerability.id,
            severity=self.vulnerability.severity or "-",
            status=None,
            title=self.vulnerability.description,
            package=(
                NestedPackage(name=pkg.name or "", version=pkg.version or "")
                if pkg is not None else None
            ),
            name=pkg.name if pkg else None,
            version=pkg.version if pkg else None,
        )


class SearchHit(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    source: VulnerabilityDocument = Field(
        default_factory=VulnerabilityDocument, alias="_source",
    )


class SearchTotal(BaseModel):
    value: int = 0


class SearchHits(BaseModel):
    total: SearchTotal = Field(default_factory=SearchTotal)
    hits: list[SearchHit] = Field(default_factory=list)

    @field_validator("total", mode="before")
    @classmethod
    def normalize_total(cls, v: Any) -> Any:
        # Pre-7.x indexers report a bare integer
        if v is None:
            return {}
        if isinstance(v, int):
            return {"value": v}
        return v


class VulnerabilitySearchResponse(BaseModel):
    hits: SearchHits = Field(default_factory=SearchHits)
