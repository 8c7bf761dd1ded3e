"""Filesystem helpers for diary entries."""
