"""Catalog domain: tenants, agents, dashboards and their memberships."""
