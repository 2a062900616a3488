"""Interaction engine."""
