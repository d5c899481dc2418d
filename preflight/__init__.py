"""Local pre-commit/pre-push gate running ordered repository health checks."""

__version__ = "0.5.1"
