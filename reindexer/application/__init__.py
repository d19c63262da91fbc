"""Application layer: DTOs, ports, pipeline services and use cases."""
