"""Shared utilities for pg-insert."""
