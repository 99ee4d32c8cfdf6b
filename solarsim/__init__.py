"""Gravitational N-body solar system simulator with vectors, a timer and a command line driver."""

__version__ = "0.1.0"