"""Cross-platform alias manager for Bash, Zsh and PowerShell."""

__version__ = "0.1.0"