"""Pytest plugins for the shop suite."""
