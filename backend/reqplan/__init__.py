"""Requirement estimation and delivery projection engine."""
