"""Shared helpers for the testmatrix packages."""
