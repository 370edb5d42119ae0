"""Structured logging building blocks: levels, an in-memory encoder, write syncers, a sampler, a tee and logger adapters."""

__version__ = "0.1.0"