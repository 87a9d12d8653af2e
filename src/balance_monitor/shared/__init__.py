"""Shared domain models used across layers."""
