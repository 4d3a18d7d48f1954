"""Core domain: entities, interfaces, services and exceptions."""
