"""Unit tests for the Tenant aggregate and tenant naming rules."""

import pytest

from catalog.domain.aggregates import Tenant, normalize_tenant_name
from catalog.domain.exceptions import InvalidTenantNameError, ValidationError


class TestTenantFactory:
    """Tests for Tenant.create() factory method."""

    def test_factory_creates_tenant_with_generated_id(self):
        tenant = Tenant.create(name="Acme Corp")

        assert tenant.id is not None
        assert tenant.name == "Acme Corp"
        assert tenant.created_at == tenant.updated_at

    def test_factory_trims_name(self):
        tenant = Tenant.create(name="  Acme  ")

        assert tenant.name == "Acme"

    def test_factory_rejects_blank_name(self):
        with pytest.raises(InvalidTenantNameError):
            Tenant.create(name="   ")


class TestTenantNameRules:
    """Tests for normalize_tenant_name()."""

    @pytest.mark.parametrize(
        "name", ["Acme", "acme-corp", "Acme_Corp", "Acme Corp 2", "acme.io"]
    )
    def test_accepts_allowed_characters(self, name):
        assert normalize_tenant_name(name) == name

    def test_accepts_255_characters(self):
        name = "a" * 255

        assert normalize_tenant_name(name) == name

    def test_rejects_256_characters(self):
        with pytest.raises(InvalidTenantNameError, match="255"):
            normalize_tenant_name("a" * 256)

    def test_length_is_checked_after_trimming(self):
        name = "  " + "a" * 255 + "  "

        assert normalize_tenant_name(name) == "a" * 255

    @pytest.mark.parametrize(
        "name", ["Acme@Corp", "Acme/Corp", "Acme!", "Ünicode", "Acme\nCorp"]
    )
    def test_rejects_disallowed_characters(self, name):
        with pytest.raises(InvalidTenantNameError):
            normalize_tenant_name(name)

    def test_name_errors_are_validation_errors(self):
        with pytest.raises(ValidationError):
            normalize_tenant_name("")


class TestTenantRename:
    """Tests for Tenant.rename()."""

    def test_rename_trims_and_touches(self):
        tenant = Tenant.create(name="Acme")
        before = tenant.updated_at

        tenant.rename("  Globex ")

        assert tenant.name == "Globex"
        assert tenant.updated_at >= before

    def test_rename_rejects_invalid_name(self):
        tenant = Tenant.create(name="Acme")

        with pytest.raises(InvalidTenantNameError):
            tenant.rename("Acme@Corp")

        assert tenant.name == "Acme"
