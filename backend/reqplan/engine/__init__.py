"""Estimation, hierarchy, aggregation and projection engine."""
