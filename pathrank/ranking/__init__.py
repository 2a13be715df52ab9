"""Shortest-path ranking of sampled path requests."""
