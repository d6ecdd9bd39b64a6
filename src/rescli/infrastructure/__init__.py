"""Infrastructure layer: config file, runtime subprocesses, HTTP backend.

This layer depends on stdlib, third-party libs (httpx), and domain models.
It must never import from services, commands, or output.
"""
