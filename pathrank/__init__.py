"""Seed a graph with two vertex sets and rank random vertex pairs by path length."""

__version__ = "0.1.0"
