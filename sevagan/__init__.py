"""SEVAGAN donor registry and blood-request matching backend."""
