"""Unit tests for catalog value objects."""

from datetime import UTC, datetime

import pytest

from catalog.domain.exceptions import InvalidSlugError, ValidationError
from catalog.domain.value_objects import (
    AgentId,
    DashboardId,
    DashboardMembership,
    Slug,
    TenantFilter,
    TenantId,
    TenantScope,
)


class TestIdentifiers:
    """Tests for ULID-backed identifiers."""

    @pytest.mark.parametrize("id_type", [TenantId, AgentId, DashboardId])
    def test_generate_produces_parseable_ids(self, id_type):
        generated = id_type.generate()

        assert id_type.from_string(generated.value) == generated
        assert str(generated) == generated.value

    @pytest.mark.parametrize("id_type", [TenantId, AgentId, DashboardId])
    def test_from_string_rejects_non_ulid(self, id_type):
        with pytest.raises(ValueError, match="Invalid"):
            id_type.from_string("not-a-ulid")

    def test_generated_ids_are_unique(self):
        assert TenantId.generate() != TenantId.generate()


class TestSlugGeneration:
    """Tests for Slug.generate()."""

    def test_generated_slug_is_twelve_lowercase_alphanumerics(self):
        slug = Slug.generate()

        assert len(slug.value) == 12
        assert all(c.isdigit() or ("a" <= c <= "z") for c in slug.value)

    def test_generated_slug_passes_validation(self):
        slug = Slug.generate()

        assert Slug.from_string(slug.value) == slug

    def test_generated_slugs_differ(self):
        slugs = {Slug.generate().value for _ in range(50)}

        assert len(slugs) == 50


class TestSlugValidation:
    """Tests for Slug.from_string()."""

    def test_accepts_hyphenated_slug(self):
        assert Slug.from_string("support-bot-2").value == "support-bot-2"

    def test_accepts_fifty_characters(self):
        assert len(Slug.from_string("a" * 50).value) == 50

    def test_rejects_fifty_one_characters(self):
        with pytest.raises(InvalidSlugError):
            Slug.from_string("a" * 51)

    def test_rejects_empty(self):
        with pytest.raises(InvalidSlugError):
            Slug.from_string("")

    @pytest.mark.parametrize(
        "value", ["Upper", "with space", "under_score", "dot.", "abc\n", "abc\ndef"]
    )
    def test_rejects_disallowed_characters(self, value):
        with pytest.raises(InvalidSlugError):
            Slug.from_string(value)

    @pytest.mark.parametrize("value", ["api", "admin", "embed", "_next"])
    def test_rejects_reserved_route_names(self, value):
        with pytest.raises(InvalidSlugError, match="reserved"):
            Slug.from_string(value)

    def test_slug_errors_are_validation_errors(self):
        with pytest.raises(ValidationError):
            Slug.from_string("api")


class TestTenantFilter:
    """Tests for TenantFilter construction and parsing."""

    def test_default_is_all(self):
        assert TenantFilter().scope == TenantScope.ALL

    def test_parse_missing_value_is_all(self):
        assert TenantFilter.parse(None) == TenantFilter.all()

    def test_parse_all_keyword(self):
        assert TenantFilter.parse("all") == TenantFilter.all()

    def test_parse_general_keyword(self):
        assert TenantFilter.parse("general") == TenantFilter.general()

    def test_parse_tenant_id(self):
        tenant_id = TenantId.generate()

        parsed = TenantFilter.parse(tenant_id.value)

        assert parsed.scope == TenantScope.TENANT
        assert parsed.tenant_id == tenant_id

    def test_parse_rejects_garbage(self):
        with pytest.raises(ValueError):
            TenantFilter.parse("somebody")

    def test_tenant_scope_requires_tenant_id(self):
        with pytest.raises(ValueError):
            TenantFilter(scope=TenantScope.TENANT)

    def test_other_scopes_reject_tenant_id(self):
        with pytest.raises(ValueError):
            TenantFilter(scope=TenantScope.GENERAL, tenant_id=TenantId.generate())


class TestDashboardMembership:
    def test_rejects_negative_order(self):
        with pytest.raises(ValueError):
            DashboardMembership(
                agent_id=AgentId.generate(), order=-1, created_at=datetime.now(UTC)
            )
