"""Game engine building blocks: option parsing, pairing, text helpers, logging, module registry, task queue, plugins and bundling tools."""

__version__ = "0.1.0"