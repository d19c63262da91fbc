"""Domain layer: exceptions independent of transport and configuration."""
