"""Domain layer: DTOs, ports and exceptions shared by all other layers."""
