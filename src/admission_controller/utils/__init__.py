"""Shared utilities for admission-controller."""
