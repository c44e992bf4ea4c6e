"""Adapters binding the reconciliation core to concrete infrastructure."""
