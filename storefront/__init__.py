"""Storefront destination schema and the legacy catalog migration."""
