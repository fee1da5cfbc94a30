"""termtoggle: numbered, toggleable shell sessions for a host application."""

__version__ = "0.1.0"
