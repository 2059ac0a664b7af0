"""clawdesk: a conversational front-end for automating the OpenClaw CLI."""

__version__ = "0.1.0"
