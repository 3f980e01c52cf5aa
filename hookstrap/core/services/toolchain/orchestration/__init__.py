"""L5 Orchestration — multi-step flows built on the lower layers."""
