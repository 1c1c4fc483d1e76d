"""Data-access services, one module per resource."""
