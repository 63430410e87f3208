"""Core components of statforge."""
