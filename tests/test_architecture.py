"""Architectural boundary tests using pytest-archon.

These tests verify that the codebase follows clean architecture principles:
- Domain layer has no dependencies on adapters or application
- Application services don't depend on adapters
- Upstream API adapters depend only on the domain
"""

import pytest
from pytest_archon import archrule

UPSTREAM_ADAPTERS = [
    "synca_transit.adapters.odpt_api*",
    "synca_transit.adapters.overpass_api*",
    "synca_transit.adapters.jreast_api*",
    "synca_transit.adapters.transit_api*",
    "synca_transit.adapters.discord*",
    "synca_transit.adapters.geolocation*",
]


def test_domain_models_have_no_dependencies() -> None:
    """Domain models should only import the standard library, pydantic and domain models."""
    (
        archrule("domain models", comment="Domain models should be independent")
        .match("synca_transit.domain.models*")
        .should_not_import("synca_transit.adapters*")
        .should_not_import("synca_transit.application*")
        .should_not_import("synca_transit.domain.contracts*")
        .should_not_import("synca_transit.domain.ports*")
        .may_import("synca_transit.domain.models*")
        .check("synca_transit")
    )


@pytest.mark.parametrize(
    "package", ["synca_transit.domain.ports*", "synca_transit.domain.contracts*"]
)
def test_domain_ports_and_contracts_have_no_dependencies(package: str) -> None:
    """Domain ports and contracts should not import adapters or application."""
    (
        archrule("domain interfaces", comment="Domain interfaces should be independent")
        .match(package)
        .should_not_import("synca_transit.adapters*")
        .should_not_import("synca_transit.application*")
        .may_import("synca_transit.domain*")
        .check("synca_transit")
    )


def test_application_services_dont_import_adapters() -> None:
    """Application services should not depend on adapters (infrastructure layer)."""
    (
        archrule(
            "application services", comment="Application services should not depend on adapters"
        )
        .match("synca_transit.application*")
        .should_not_import("synca_transit.adapters*")
        .may_import("synca_transit.domain*")
        .may_import("synca_transit.application*")
        .check("synca_transit")
    )


def test_no_circular_dependencies_in_domain() -> None:
    """Domain layer should not reach outward."""
    (
        archrule("domain no cycles", comment="Domain layer should not have outward dependencies")
        .match("synca_transit.domain*")
        .should_not_import("synca_transit.adapters*")
        .should_not_import("synca_transit.application*")
        .may_import("synca_transit.domain*")
        .check("synca_transit", only_direct_imports=True)
    )


@pytest.mark.parametrize("package", UPSTREAM_ADAPTERS)
def test_upstream_adapters_dont_import_web_or_application(package: str) -> None:
    """Upstream API adapters implement domain ports and work without the web server."""
    (
        archrule("upstream adapters", comment="API clients should only depend on the domain")
        .match(package)
        .should_not_import("synca_transit.adapters.web*")
        .should_not_import("synca_transit.application*")
        .may_import("synca_transit.domain*")
        .check("synca_transit", only_direct_imports=True)
    )
