"""skillsync — install and mirror AI assistant skills and agents."""

__version__ = "0.1.0"
