"""Tool, program, tool reference and completion types for GPTScript programs."""

__version__ = "0.1.0"