"""Application layer – pagination, grant resolution, provisioning and per-kind services."""
