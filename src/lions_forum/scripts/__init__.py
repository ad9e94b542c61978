"""Operational scripts for the forum database."""
