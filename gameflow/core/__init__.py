"""
Core engine services: logging, events, scene collaborators and runtime.
"""
