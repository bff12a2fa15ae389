"""SandboxScore — grade what a sandboxed process can reach on its host."""

__version__ = "1.1.0"

METHODOLOGY_VERSION = "1.0"
