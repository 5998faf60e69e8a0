"""Bounded contexts of FOLIO: templating, rendering and scoring."""
