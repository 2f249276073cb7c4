"""Core types shared across the workflow debugger."""
