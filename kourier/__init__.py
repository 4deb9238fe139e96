"""Configuration and Envoy xDS resource builders for the Kourier ingress gateway."""

__version__ = "0.1.0"