"""L3 Detection — read-only probes. These functions never write."""
