"""Tempo Chess: real-time chess gated by energy and per-piece cooldowns."""

__version__ = "0.1.0"
